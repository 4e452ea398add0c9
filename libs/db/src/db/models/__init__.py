"""Shared SQLAlchemy models registry for the ledger database.

Currently includes the ledger transaction table used by ``statement_import``.
"""

from .ledger import Base, LedgerTransaction

__all__ = [
    "Base",
    "LedgerTransaction",
]
