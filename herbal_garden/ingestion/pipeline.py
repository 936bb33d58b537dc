"""
Ingestion Pipeline.

Upserts knowledge-base and PDF records into the vector index in small
batches, waits for the index to settle and reports its stats.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable

from garden_shared.clients.connectors import PDFConnector
from herbal_garden.clients.pinecone import VectorIndexClient
from herbal_garden.ingestion.records import (
    build_knowledge_base_records,
    build_pdf_records,
    load_knowledge_base,
)

logger = logging.getLogger(__name__)


@dataclass
class IngestionReport:
    """Outcome of one ingestion run."""

    records: int = 0
    files: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    stats: dict[str, Any] = field(default_factory=dict)

    @property
    def total_records(self) -> int | str:
        return self.stats.get("totalVectorCount") or self.stats.get("totalRecordCount") or "N/A"


class IngestionPipeline:
    """
    Batch upserts into one namespace.

    Args:
        index: Vector index client
        namespace: Target namespace
        batch_size: Records per upsert call
        settle_seconds: Wait before reading index stats
        sleep: Awaitable sleep, replaceable in tests
    """

    def __init__(
        self,
        index: VectorIndexClient,
        namespace: str,
        batch_size: int = 4,
        settle_seconds: float = 5.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.index = index
        self.namespace = namespace
        self.batch_size = batch_size
        self.settle_seconds = settle_seconds
        self._sleep = sleep

    async def upsert_in_batches(self, records: list[dict[str, Any]]) -> int:
        total_batches = (len(records) + self.batch_size - 1) // self.batch_size
        sent = 0
        for batch_no, start in enumerate(range(0, len(records), self.batch_size), start=1):
            batch = records[start : start + self.batch_size]
            logger.info(
                "Upserting batch %d/%d (%d records)",
                batch_no,
                total_batches,
                len(batch),
                extra={"namespace": self.namespace},
            )
            sent += await self.index.upsert_records(self.namespace, batch)
        return sent

    async def finalize(self, report: IngestionReport) -> IngestionReport:
        """Wait for indexing, then attach index stats to the report."""
        logger.info("Waiting %.1fs for records to be indexed", self.settle_seconds)
        await self._sleep(self.settle_seconds)
        report.stats = await self.index.describe_index_stats()
        logger.info("Ingested %d records; index now holds %s", report.records, report.total_records)
        return report

    async def ingest_knowledge_base(self, path: Path) -> IngestionReport:
        """
        Upsert every remedy from the health-issue knowledge base.

        Raises:
            FileNotFoundError: Knowledge base file does not exist
        """
        issues = load_knowledge_base(path)
        records = build_knowledge_base_records(issues)
        logger.info("Loaded %d health issues, %d remedy records", len(issues), len(records))

        report = IngestionReport(files=[path.name])
        report.records = await self.upsert_in_batches(records)
        return await self.finalize(report)

    async def ingest_pdfs(
        self,
        pdf_dir: Path,
        target: str | None = None,
        chunk_size: int = 800,
        overlap: int = 150,
    ) -> IngestionReport:
        """
        Extract, chunk and upsert PDFs from a directory.

        Args:
            pdf_dir: Directory holding the PDFs
            target: Single file name to ingest instead of the whole directory

        Raises:
            FileNotFoundError: ``target`` does not exist in ``pdf_dir``
        """
        connector = PDFConnector(pdf_dir)

        if target:
            target_path = pdf_dir / target
            if not target_path.is_file():
                raise FileNotFoundError(f"File not found: {target_path}")
            pdf_files = [target_path]
        else:
            pdf_files = connector.discover()
        logger.info("Found %d PDF(s) to ingest", len(pdf_files))

        report = IngestionReport()
        for pdf_path in pdf_files:
            document = await connector.load(pdf_path)
            if document is None:
                logger.warning("Skipping %s: %s", pdf_path.name, connector.last_error or "no text extracted")
                report.skipped.append(pdf_path.name)
                continue

            logger.info(
                "Processing %s: %s pages, %d characters",
                pdf_path.name,
                document.metadata.get("total_pages", "?"),
                document.char_count,
            )

            records = build_pdf_records(pdf_path.name, document.content, chunk_size, overlap)
            if not records:
                logger.warning("Skipping %s: too little text extracted", pdf_path.name)
                report.skipped.append(pdf_path.name)
                continue

            report.records += await self.upsert_in_batches(records)
            report.files.append(pdf_path.name)

        return await self.finalize(report)
