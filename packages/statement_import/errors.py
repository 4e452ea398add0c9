"""Failure kinds surfaced by :func:`statement_import.pipeline.import_statement`.

Every failure is an :class:`ImportFailure` so callers (the CLI, a UI) can
catch one type. Per-record parse problems are not errors: those rows are
dropped during normalization. Classification has no failure mode.
"""

from __future__ import annotations


class ImportFailure(Exception):
    """Base class for a failed import. Nothing was written to the store."""


class ExtractionError(ImportFailure):
    """The document could not be read into text (corrupt, encrypted, not a PDF)."""


class LayoutMismatchError(ImportFailure):
    """Text was extracted but no transaction rows were recognised in it.

    A real statement always contains at least one recognisable row, so this
    almost always means the statement layout changed.
    """

    hint = "The statement format might have changed."

    def __init__(self, message: str, *, text_preview: str = "") -> None:
        super().__init__(f"{message} {self.hint}")
        self.text_preview = text_preview


class StoreError(ImportFailure):
    """The transaction store failed a range query or insert.

    The underlying driver/ORM exception is chained as ``__cause__``.
    """


__all__ = [
    "ImportFailure",
    "ExtractionError",
    "LayoutMismatchError",
    "StoreError",
]
