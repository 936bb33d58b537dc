"""
Source document connectors.

A connector turns files in one directory into ``Document`` objects whose
text the ingestion pipeline chunks and upserts.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class DocumentType(str, Enum):
    TEXT = "text"
    PDF = "pdf"


@dataclass
class Document:
    """
    Text extracted from one source file.

    Attributes:
        content: Extracted text
        doc_type: Kind of source the text came from
        source_path: Path of the source file, if it came from disk
        metadata: Extraction details such as ``total_pages``
    """

    content: str = ""
    doc_type: DocumentType = DocumentType.TEXT
    source_path: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def char_count(self) -> int:
        return len(self.content)

    @property
    def file_name(self) -> str:
        return Path(self.source_path).name if self.source_path else ""


class FileConnector(ABC):
    """
    Reads source files of one kind from a directory.

    Subclasses set ``suffix`` and implement ``load``.
    """

    suffix: str = ""

    def __init__(self, directory: Path | str = "."):
        self.directory = Path(directory)
        self._error: Optional[str] = None

    @property
    def last_error(self) -> Optional[str]:
        """Why the most recent ``load`` returned nothing."""
        return self._error

    def discover(self) -> list[Path]:
        """Matching files directly under the directory, sorted by name."""
        if not self.directory.is_dir():
            return []
        return sorted(
            p for p in self.directory.iterdir() if p.is_file() and p.name.lower().endswith(self.suffix)
        )

    def resolve(self, name: str | Path) -> Path:
        path = Path(name)
        return path if path.is_absolute() else self.directory / path

    def check_readable(self, path: Path) -> Optional[str]:
        """Reason the file cannot be read, or None when it can."""
        if not path.exists():
            return f"File not found: {path}"
        if not path.is_file():
            return f"Not a file: {path}"
        if path.stat().st_size == 0:
            return f"File is empty: {path}"
        return None

    @abstractmethod
    async def load(self, name: str | Path) -> Optional[Document]:
        """
        Extract one file.

        Args:
            name: File name relative to the directory, or an absolute path

        Returns:
            The extracted document, or None with ``last_error`` set
        """
