"""
PDF connector: full-document text extraction with PyPDF2.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Optional

from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

from garden_shared.clients.connectors.base import Document, DocumentType, FileConnector

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"


class PDFConnector(FileConnector):
    """Extracts the text of every page of a PDF into one document."""

    suffix = ".pdf"

    async def load(self, name: str | Path) -> Optional[Document]:
        path = self.resolve(name)
        self._error = self.check_readable(path)
        if self._error:
            logger.error(self._error)
            return None

        with open(path, "rb") as fh:
            return self._extract(fh, str(path))

    def _extract(self, stream: BinaryIO, source_path: str) -> Optional[Document]:
        try:
            reader = PdfReader(stream)
            pages = [page.extract_text() or "" for page in reader.pages]
        except (PdfReadError, OSError, ValueError) as e:
            logger.error("PDF extraction failed for %s: %s", source_path, e)
            self._error = str(e)
            return None

        return Document(
            content=PAGE_SEPARATOR.join(pages),
            doc_type=DocumentType.PDF,
            source_path=source_path,
            metadata={"total_pages": len(pages)},
        )
