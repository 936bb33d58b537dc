"""
Test batched ingestion into the vector index.
"""
import json
from unittest.mock import AsyncMock, patch

import pytest
from PyPDF2 import PdfWriter

from garden_shared.clients.connectors import Document, DocumentType, PDFConnector
from herbal_garden.ingestion import cli
from herbal_garden.ingestion.pipeline import IngestionPipeline
from tests.fakes import FakeIndex


class _Sleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def sleep():
    return _Sleep()


@pytest.fixture
def pipeline(sleep):
    return IngestionPipeline(FakeIndex(), "ayurveda", batch_size=4, settle_seconds=5.0, sleep=sleep)


@pytest.mark.unit
class TestIngestionPipeline:
    @pytest.mark.asyncio
    async def test_upserts_in_batches_of_four(self, pipeline):
        records = [{"_id": f"r{i}", "chunk_text": "t"} for i in range(10)]

        sent = await pipeline.upsert_in_batches(records)

        assert sent == 10
        assert [len(batch) for _, batch in pipeline.index.upserts] == [4, 4, 2]
        assert all(ns == "ayurveda" for ns, _ in pipeline.index.upserts)

    @pytest.mark.asyncio
    async def test_knowledge_base_ingestion_settles_then_reports(self, pipeline, sleep, tmp_path):
        kb = tmp_path / "kb.json"
        kb.write_text(
            json.dumps(
                [
                    {
                        "condition": "Joint Pain",
                        "remedies": [
                            {"plantName": "Turmeric", "scientificName": "Curcuma longa", "preparation": "Milk.", "source": "CS"}
                        ],
                    }
                ]
            )
        )

        report = await pipeline.ingest_knowledge_base(kb)

        assert report.records == 1
        assert sleep.calls == [5.0]
        assert report.stats["totalVectorCount"] == 1
        assert report.total_records == 1

    @pytest.mark.asyncio
    async def test_missing_target_pdf(self, pipeline, tmp_path):
        with pytest.raises(FileNotFoundError):
            await pipeline.ingest_pdfs(tmp_path, target="missing.pdf")

    @pytest.mark.asyncio
    async def test_blank_pdf_is_skipped(self, pipeline, tmp_path):
        writer = PdfWriter()
        writer.add_blank_page(width=200, height=200)
        with open(tmp_path / "blank.pdf", "wb") as fh:
            writer.write(fh)

        report = await pipeline.ingest_pdfs(tmp_path)

        assert report.skipped == ["blank.pdf"]
        assert report.records == 0
        assert pipeline.index.upserts == []

    @pytest.mark.asyncio
    async def test_pdf_text_is_chunked_and_upserted(self, pipeline, tmp_path):
        (tmp_path / "guide.pdf").write_bytes(b"%PDF-placeholder")
        text = "Amla is rich in vitamin C and supports digestion. " * 60
        document = Document(content=text, doc_type=DocumentType.PDF, metadata={"total_pages": 2})

        with patch.object(PDFConnector, "load", AsyncMock(return_value=document)):
            report = await pipeline.ingest_pdfs(tmp_path)

        ids = [r["_id"] for _, batch in pipeline.index.upserts for r in batch]
        assert report.files == ["guide.pdf"]
        assert report.records == len(ids) > 0
        assert ids[0] == "pdf-guide-pdf-chunk-0"

    def test_batch_size_must_be_positive(self):
        with pytest.raises(ValueError):
            IngestionPipeline(FakeIndex(), "ns", batch_size=0)


@pytest.mark.unit
class TestIngestCli:
    def test_no_command_prints_help(self, capsys):
        assert cli.main([]) == 1
        assert "herbal-ingest" in capsys.readouterr().out

    def test_prepare_prints_records(self, tmp_path, capsys):
        kb = tmp_path / "kb.json"
        kb.write_text(
            json.dumps(
                [{"condition": "Skin Problems", "remedies": [{"plantName": "Neem", "preparation": "Paste."}]}]
            )
        )

        assert cli.main(["prepare", "--path", str(kb)]) == 0

        records = json.loads(capsys.readouterr().out)
        assert records[0]["_id"] == "skin-problems-neem"

    def test_missing_pinecone_key_fails(self, settings):
        settings.PINECONE_API_KEY = ""
        with patch.object(cli, "get_settings", return_value=settings):
            assert cli.main(["kb"]) == 1
