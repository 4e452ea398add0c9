"""Data models for ``statement_import``.

All amounts are magnitudes in the ledger's single base currency. The pipeline
never converts currencies: a statement in another currency must be converted
before its transactions enter the pipeline. The sign of a movement is carried
only by :class:`TransactionKind`.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, field_validator

# ---------------------------------------------------------------------------
# Pipeline records
# ---------------------------------------------------------------------------


class RawRecord(NamedTuple):
    """A lexical match from statement text, not yet validated.

    Produced and consumed within a single extraction pass; never persisted.
    """

    description_text: str
    date_text: str
    """``DD.MM.YY`` as printed on the statement."""

    amount_text: str
    """Signed amount with space thousands separators and a decimal comma."""


class TransactionKind(StrEnum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True, slots=True)
class Transaction:
    """A canonical ledger movement.

    ``amount`` is always strictly positive; direction is expressed by
    ``kind``. There is no external identifier: for de-duplication the
    identity of a transaction is ``(date, amount, description)``.
    ``category`` is ``None`` until the classifier (or a user) assigns one.
    """

    date: date
    kind: TransactionKind
    amount: Decimal
    description: str
    category: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal) or not self.amount.is_finite():
            raise ValueError(f"Transaction.amount must be a finite Decimal, got {self.amount!r}")
        if self.amount <= 0:
            raise ValueError(
                f"Transaction.amount must be positive (sign is carried by kind), got {self.amount}"
            )


@dataclass(frozen=True, slots=True)
class ImportBatch:
    """Newly parsed transactions from one import call, in statement order."""

    transactions: tuple[Transaction, ...]

    @classmethod
    def of(cls, transactions: Iterable[Transaction]) -> ImportBatch:
        return cls(tuple(transactions))

    def __len__(self) -> int:
        return len(self.transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.transactions)

    def date_span(self) -> tuple[date, date]:
        """Return ``(min_date, max_date)`` over the batch.

        Raises ``ValueError`` for an empty batch, which has no span.
        """

        if not self.transactions:
            raise ValueError("date_span() of an empty ImportBatch")
        dates = [tx.date for tx in self.transactions]
        return min(dates), max(dates)


@dataclass(frozen=True, slots=True)
class ImportResult:
    """Outcome of a successful import.

    ``inserted == 0`` is a valid, informative outcome (every parsed record was
    already in the ledger), not an error.
    """

    inserted: int
    duplicates: int
    parsed: int

    @property
    def is_noop(self) -> bool:
        return self.inserted == 0


# ---------------------------------------------------------------------------
# Store row DTO
# ---------------------------------------------------------------------------


class StoredTransaction(BaseModel):
    """Validated view of a persisted ledger row.

    Built from ORM rows (``from_attributes``) so that anything the store hands
    back to the reconciler has already been checked against the
    :class:`Transaction` invariants.
    """

    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    date: dt.date
    kind: TransactionKind
    amount: Decimal
    description: str = ""
    category: str | None = None

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, v: str | None) -> str:
        return "" if v is None else v

    @field_validator("amount")
    @classmethod
    def _amount_positive(cls, v: Decimal) -> Decimal:
        if not v.is_finite() or v <= 0:
            raise ValueError("stored amount must be a positive finite number")
        return v

    def to_transaction(self) -> Transaction:
        return Transaction(
            date=self.date,
            kind=self.kind,
            amount=self.amount,
            description=self.description,
            category=self.category,
        )


__all__ = [
    "RawRecord",
    "TransactionKind",
    "Transaction",
    "ImportBatch",
    "ImportResult",
    "StoredTransaction",
]
