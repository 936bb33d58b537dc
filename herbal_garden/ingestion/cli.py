"""
Knowledge base ingestion CLI.

Usage:
    herbal-ingest kb [--path FILE]     # upsert the health-issue knowledge base
    herbal-ingest pdfs [FILE]          # upsert every PDF in PDF_DIR, or one file
    herbal-ingest prepare [--path FILE]  # print knowledge base records, no network
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import httpx

from garden_shared.clients.base import CircuitOpenError
from garden_shared.logging.safe_logging import token_presence
from garden_shared.logging.structured import setup_plain_logging
from herbal_garden.clients.pinecone import VectorIndexClient
from herbal_garden.config.settings import Settings, get_settings
from herbal_garden.ingestion.pipeline import IngestionPipeline, IngestionReport
from herbal_garden.ingestion.records import build_knowledge_base_records, load_knowledge_base

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="herbal-ingest",
        description="Load remedy knowledge into the vector index",
        epilog="Run 'herbal-ingest <command> --help' for command-specific options",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    kb_parser = subparsers.add_parser("kb", help="Upsert the health-issue knowledge base")
    kb_parser.add_argument("--path", type=Path, default=None, help="Knowledge base JSON file")

    pdf_parser = subparsers.add_parser("pdfs", help="Chunk and upsert PDF documents")
    pdf_parser.add_argument("file", nargs="?", default=None, help="Single PDF file name inside PDF_DIR")
    pdf_parser.add_argument("--dir", type=Path, default=None, help="Directory holding the PDFs")

    prepare_parser = subparsers.add_parser("prepare", help="Print knowledge base records as JSON")
    prepare_parser.add_argument("--path", type=Path, default=None, help="Knowledge base JSON file")

    return parser


def print_report(report: IngestionReport, settings: Settings) -> None:
    print("-" * 55)
    print(f"   Index:         {settings.PINECONE_INDEX_NAME}")
    print(f"   Namespace:     {settings.PINECONE_NAMESPACE}")
    print(f"   New records:   {report.records}")
    print(f"   Total records: {report.total_records}")
    if report.skipped:
        print(f"   Skipped:       {', '.join(report.skipped)}")
    print("-" * 55)


async def run_ingestion(args: argparse.Namespace, settings: Settings) -> IngestionReport:
    index = VectorIndexClient(
        api_key=settings.PINECONE_API_KEY,
        index_name=settings.PINECONE_INDEX_NAME,
        host=settings.PINECONE_INDEX_HOST,
        api_version=settings.PINECONE_API_VERSION,
        control_url=settings.PINECONE_CONTROL_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        max_retries=settings.HTTP_MAX_RETRIES,
    )
    pipeline = IngestionPipeline(
        index,
        settings.PINECONE_NAMESPACE,
        batch_size=settings.UPSERT_BATCH_SIZE,
        settle_seconds=settings.INDEX_SETTLE_SECONDS,
    )
    try:
        if args.command == "kb":
            return await pipeline.ingest_knowledge_base(args.path or settings.knowledge_base_file_path)
        return await pipeline.ingest_pdfs(
            args.dir or settings.pdf_dir_path,
            target=args.file,
            chunk_size=settings.CHUNK_SIZE,
            overlap=settings.CHUNK_OVERLAP,
        )
    finally:
        await index.close()


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the ingestion CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    settings = get_settings()
    setup_plain_logging(settings.LOG_LEVEL)

    if args.command == "prepare":
        records = build_knowledge_base_records(load_knowledge_base(args.path or settings.knowledge_base_file_path))
        print(json.dumps(records, indent=2))
        return 0

    if not settings.PINECONE_API_KEY:
        logger.error("Missing PINECONE_API_KEY (%s)", token_presence("PINECONE_API_KEY", settings.PINECONE_API_KEY))
        return 1

    try:
        report = asyncio.run(run_ingestion(args, settings))
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 1
    except (httpx.HTTPError, CircuitOpenError, ValueError) as e:
        logger.error("Ingestion failed: %s", e)
        return 1

    print_report(report, settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
