"""
Text chunking for knowledge-base ingestion.

Splits extracted PDF text into overlapping character windows before the
windows are upserted as records into the vector index.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Chunk:
    """One trimmed window and the untrimmed span it was cut from."""

    content: str
    index: int
    start_char: int
    end_char: int

    @property
    def length(self) -> int:
        return len(self.content)


# =============================================================================
# SLIDING-WINDOW CHUNKING
# =============================================================================


def sliding_window_chunk(
    text: str,
    chunk_size: int = 800,
    overlap: int = 150,
    min_chunk_size: int = 50,
) -> list[Chunk]:
    """
    Split text into fixed-width windows that overlap.

    Windows start at 0 and advance by ``chunk_size - overlap``. Each slice is
    trimmed and kept only when strictly longer than ``min_chunk_size``.
    Words may be cut at window edges; the overlap carries them into the next
    window.

    Args:
        text: Input text to chunk
        chunk_size: Window width in characters
        overlap: Characters shared by consecutive windows
        min_chunk_size: Trimmed slices of this length or shorter are dropped

    Returns:
        List of Chunk objects, indexed consecutively from 0

    Raises:
        ValueError: If overlap is not smaller than chunk_size
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if overlap < 0 or overlap >= chunk_size:
        raise ValueError("overlap must be >= 0 and smaller than chunk_size")

    chunks: list[Chunk] = []
    step = chunk_size - overlap
    start = 0

    while start < len(text):
        end = min(start + chunk_size, len(text))
        content = text[start:end].strip()
        if len(content) > min_chunk_size:
            chunks.append(
                Chunk(
                    content=content,
                    index=len(chunks),
                    start_char=start,
                    end_char=end,
                )
            )
        start += step

    return chunks


def chunk_texts(
    text: str,
    chunk_size: int = 800,
    overlap: int = 150,
) -> list[str]:
    """Convenience wrapper returning only the chunk contents."""
    return [c.content for c in sliding_window_chunk(text, chunk_size, overlap)]
