"""
Connectors for knowledge-base ingestion.

Turn source files into text documents for the vector index.
"""

from garden_shared.clients.connectors.base import Document, DocumentType, FileConnector
from garden_shared.clients.connectors.pdf import PDFConnector

__all__ = [
    "Document",
    "DocumentType",
    "FileConnector",
    "PDFConnector",
]
