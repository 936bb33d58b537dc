"""
Test sliding-window chunking used for PDF ingestion.
"""
import pytest

from garden_shared.utils.chunking import chunk_texts, sliding_window_chunk


@pytest.mark.unit
class TestSlidingWindowChunk:
    def test_windows_advance_by_size_minus_overlap(self):
        text = "".join(chr(ord("a") + i % 26) for i in range(2000))

        chunks = sliding_window_chunk(text, chunk_size=800, overlap=150)

        assert [c.start_char for c in chunks] == [0, 650, 1300, 1950][: len(chunks)]
        assert chunks[0].content == text[0:800]
        assert chunks[1].content == text[650:1450]
        assert [c.index for c in chunks] == list(range(len(chunks)))

    def test_short_tail_is_dropped(self):
        # Last window starts at 1950 and holds only 50 chars, which is not > 50
        text = "x" * 2000
        chunks = sliding_window_chunk(text, 800, 150)
        assert [c.start_char for c in chunks] == [0, 650, 1300]

    def test_slices_are_trimmed_before_length_check(self):
        text = "word " * 10 + " " * 800
        assert sliding_window_chunk(text, 800, 150) == []

    def test_kept_chunks_are_longer_than_fifty(self):
        text = ("lorem ipsum dolor sit amet " * 100).strip()
        for chunk in sliding_window_chunk(text, 200, 50):
            assert chunk.length > 50
            assert chunk.content == chunk.content.strip()

    def test_empty_text(self):
        assert sliding_window_chunk("") == []

    @pytest.mark.parametrize("overlap", [800, 900])
    def test_overlap_not_smaller_than_size_rejected(self, overlap):
        with pytest.raises(ValueError):
            sliding_window_chunk("x" * 1000, chunk_size=800, overlap=overlap)

    def test_chunk_texts_returns_strings(self):
        text = "y" * 900
        assert chunk_texts(text, 800, 150) == ["y" * 800, "y" * 250]
