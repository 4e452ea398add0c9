# ruff: noqa: I001
"""Persistence integration for statement_import.

Functions here read and write the ``ledger_transactions`` table owned by
``libs/db``. They take an explicit SQLAlchemy session; the caller owns the
transaction scope.

:class:`SqlAlchemyTransactionStore` packages them behind the
:class:`TransactionStore` interface the import pipeline depends on. Each
store call runs in its own short session scope, so an import is
query-then-insert rather than one database transaction. Two imports for the
same owner running at the same time can therefore both insert the same new
row; callers are expected to serialize imports per owner.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from typing import Any, Protocol

from pydantic import ValidationError
from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.client import session_scope
from db.models.ledger import LedgerTransaction
from .errors import StoreError
from .logging_setup import get_logger
from .models import StoredTransaction, Transaction

_logger = get_logger("statement_import.persistence")


# ---------------------------------------------------------------------------
# Session-level operations
# ---------------------------------------------------------------------------


def query_range(
    session: Session,
    *,
    owner: str,
    date_from: date,
    date_to: date,
) -> list[Transaction]:
    """Return the owner's transactions with ``date_from <= date <= date_to``.

    Rows are returned in ``(date, id)`` order and validated through
    :class:`~statement_import.models.StoredTransaction`.
    """

    if date_from > date_to:
        raise ValueError(f"empty date range: {date_from} > {date_to}")

    stmt = (
        select(LedgerTransaction)
        .where(LedgerTransaction.owner_id == owner)
        .where(LedgerTransaction.date >= date_from)
        .where(LedgerTransaction.date <= date_to)
        .order_by(LedgerTransaction.date, LedgerTransaction.id)
    )
    rows = session.execute(stmt).scalars().all()
    return [StoredTransaction.model_validate(row).to_transaction() for row in rows]


def _to_row(owner: str, tx: Transaction) -> dict[str, Any]:
    return {
        "owner_id": owner,
        "kind": tx.kind.value,
        "amount": tx.amount,
        "category": tx.category,
        "date": tx.date,
        "description": tx.description.strip(),
    }


def bulk_insert(
    session: Session,
    *,
    owner: str,
    transactions: Iterable[Transaction],
) -> int:
    """Insert ``transactions`` for ``owner`` in one statement; return the count."""

    payloads = [_to_row(owner, tx) for tx in transactions]
    if not payloads:
        return 0
    session.execute(insert(LedgerTransaction), payloads)
    return len(payloads)


# ---------------------------------------------------------------------------
# Store interface
# ---------------------------------------------------------------------------


class TransactionStore(Protocol):
    def query_range(self, owner: str, date_from: date, date_to: date) -> Sequence[Transaction]:
        """Return stored transactions for ``owner`` within the inclusive range."""
        ...

    def bulk_insert(self, owner: str, transactions: Sequence[Transaction]) -> int:
        """Persist ``transactions`` for ``owner`` and return how many were written."""
        ...


class SqlAlchemyTransactionStore:
    """:class:`TransactionStore` backed by the shared ``db`` engine.

    SQLAlchemy failures, and stored rows that fail validation on the way out,
    are re-raised as :class:`StoreError` with the original exception chained.
    Nothing is retried.
    """

    def __init__(self, *, database_url: str | None = None) -> None:
        self.database_url = database_url

    def query_range(self, owner: str, date_from: date, date_to: date) -> list[Transaction]:
        try:
            with session_scope(database_url=self.database_url) as session:
                return query_range(session, owner=owner, date_from=date_from, date_to=date_to)
        except (SQLAlchemyError, ValidationError) as exc:
            raise StoreError(f"range query failed: {exc}") from exc

    def bulk_insert(self, owner: str, transactions: Sequence[Transaction]) -> int:
        try:
            with session_scope(database_url=self.database_url) as session:
                n = bulk_insert(session, owner=owner, transactions=transactions)
        except SQLAlchemyError as exc:
            raise StoreError(f"insert failed: {exc}") from exc
        _logger.debug("inserted %d row(s) for owner %s", n, owner)
        return n


__all__ = [
    "query_range",
    "bulk_insert",
    "TransactionStore",
    "SqlAlchemyTransactionStore",
]
