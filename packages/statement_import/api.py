"""Public API surface for the ``statement_import`` package.

:func:`import_statement` here is the entry point used by front ends: it wires
the default collaborators (``pdfplumber`` page text and the SQLAlchemy store)
into :func:`statement_import.pipeline.import_statement`. Callers that need
other collaborators use the pipeline function directly.
"""

from __future__ import annotations

from .ingest.pdf_pages import PdfPlumberPageExtractor
from .models import ImportBatch, ImportResult
from .persistence import SqlAlchemyTransactionStore
from .pipeline import import_statement as _import_statement
from .pipeline import parse_statement as _parse_statement


def import_statement(
    owner: str,
    document: bytes,
    *,
    database_url: str | None = None,
) -> ImportResult:
    """Import a PDF statement into ``owner``'s ledger.

    ``database_url`` overrides ``DATABASE_URL``. Raises
    :class:`~statement_import.errors.ImportFailure` subclasses on failure.
    """

    return _import_statement(
        owner,
        document,
        pages=PdfPlumberPageExtractor(),
        store=SqlAlchemyTransactionStore(database_url=database_url),
    )


def parse_statement(document: bytes) -> ImportBatch:
    """Parse and classify a PDF statement without persisting anything."""

    return _parse_statement(document, pages=PdfPlumberPageExtractor())


__all__ = ["import_statement", "parse_statement"]
