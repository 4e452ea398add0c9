"""Document → page text collaborator.

:class:`PageTextExtractor` is the narrow interface the pipeline depends on;
:class:`PdfPlumberPageExtractor` implements it with ``pdfplumber`` over the
raw document bytes. Any failure to open or read the document is reported as
:class:`~statement_import.errors.ExtractionError`; a page without a text layer
contributes an empty string.
"""

from __future__ import annotations

import io
from collections.abc import Sequence
from typing import Protocol

import pdfplumber

from ..errors import ExtractionError
from ..logging_setup import get_logger

_logger = get_logger("statement_import.ingest.pdf_pages")


class PageTextExtractor(Protocol):
    def extract_pages(self, document: bytes) -> Sequence[str]:
        """Return the text of each page, in page order."""
        ...


class PdfPlumberPageExtractor:
    """Extract per-page text from PDF bytes with ``pdfplumber``."""

    def extract_pages(self, document: bytes) -> list[str]:
        if not document:
            raise ExtractionError("Error processing PDF: document is empty")
        try:
            with pdfplumber.open(io.BytesIO(document)) as pdf:
                pages = [(page.extract_text() or "") for page in pdf.pages]
        except Exception as exc:  # pdfminer raises a wide range of parse errors
            raise ExtractionError(f"Error processing PDF: {exc}") from exc
        _logger.debug("extracted %d page(s) of text", len(pages))
        return pages


__all__ = ["PageTextExtractor", "PdfPlumberPageExtractor"]
