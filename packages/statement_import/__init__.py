"""Public interface for the ``statement_import`` package.

Symbol re-exports only; no runtime logic lives here.
"""

from .api import import_statement, parse_statement
from .errors import ExtractionError, ImportFailure, LayoutMismatchError, StoreError
from .models import (
    ImportBatch,
    ImportResult,
    RawRecord,
    Transaction,
    TransactionKind,
)

__all__ = [
    # API
    "import_statement",
    "parse_statement",
    # Errors
    "ImportFailure",
    "ExtractionError",
    "LayoutMismatchError",
    "StoreError",
    # Models / types
    "RawRecord",
    "Transaction",
    "TransactionKind",
    "ImportBatch",
    "ImportResult",
]
