"""Statement ingestion: document bytes → page text → raw transaction rows."""

from .pdf_pages import PageTextExtractor, PdfPlumberPageExtractor
from .statement_text import flatten_pages, iter_raw_records

__all__ = [
    "PageTextExtractor",
    "PdfPlumberPageExtractor",
    "flatten_pages",
    "iter_raw_records",
]
