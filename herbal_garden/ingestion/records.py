"""
Vector index records for the remedy knowledge base.

Two sources feed the knowledge namespace: the curated health-issue JSON file
(one record per remedy) and chunked PDF text.
"""

import json
import re
from pathlib import Path
from typing import Any

from garden_shared.utils.chunking import chunk_texts

PDF_CONDITION = "General Medicinal Plants"
PDF_PLANT_NAME = "Various"
MIN_DOCUMENT_CHARS = 50

_WHITESPACE = re.compile(r"\s+")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def slugify(value: str) -> str:
    """Lowercase and replace each whitespace run with a hyphen."""
    return _WHITESPACE.sub("-", value.lower())


def load_knowledge_base(path: Path) -> list[dict[str, Any]]:
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def build_knowledge_base_records(issues: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    One record per remedy of each health issue.

    Args:
        issues: Items with ``condition`` and a ``remedies`` list

    Returns:
        Records ready for upsert, in input order
    """
    records = []
    for issue in issues:
        condition = issue["condition"]
        for remedy in issue.get("remedies", []):
            plant_name = remedy["plantName"]
            records.append(
                {
                    "_id": f"{slugify(condition)}-{slugify(plant_name)}",
                    "chunk_text": (
                        f"For the health issue '{condition}', the herb '{plant_name}' is recommended. "
                        f"The preparation is: {remedy.get('preparation', '')}"
                    ),
                    "condition": condition,
                    "plantName": plant_name,
                    "scientificName": remedy.get("scientificName", ""),
                    "preparation": remedy.get("preparation", ""),
                    "source": remedy.get("source", ""),
                }
            )
    return records


def pdf_record_id(file_name: str, index: int) -> str:
    return f"pdf-{_NON_ALNUM.sub('-', file_name).lower()}-chunk-{index}"


def build_pdf_records(
    file_name: str,
    text: str,
    chunk_size: int = 800,
    overlap: int = 150,
) -> list[dict[str, Any]]:
    """
    Chunk one PDF's text into records.

    Documents whose trimmed text is shorter than 50 characters produce no
    records.
    """
    if len(text.strip()) < MIN_DOCUMENT_CHARS:
        return []

    return [
        {
            "_id": pdf_record_id(file_name, i),
            "chunk_text": chunk,
            "source": f"PDF: {file_name}",
            "condition": PDF_CONDITION,
            "plantName": PDF_PLANT_NAME,
            "scientificName": PDF_PLANT_NAME,
            "preparation": chunk,
        }
        for i, chunk in enumerate(chunk_texts(text, chunk_size, overlap))
    ]
