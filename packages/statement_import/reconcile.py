"""Import de-duplication against transactions already in the ledger.

Statements carry no stable transaction id, so a row is identified by its
composite key ``(date, amount, trimmed description)``. Membership is counted,
not tested: if the ledger holds one ``2024-01-05 / 100 / Cafe`` row and the
statement lists two, exactly one of the two is new. A plain set lookup would
drop both.

Rows that differ in amount or date (e.g. a corrected re-issue) are different
keys and are always treated as new.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple

from .models import Transaction


class CompositeKey(NamedTuple):
    date: str
    amount: str
    description: str


class Reconciliation(NamedTuple):
    """Split of an import batch into new rows and rows already stored."""

    to_insert: list[Transaction]
    duplicates: list[Transaction]


def _fmt_amount(d: Decimal) -> str:
    # Stored amounts come back as Numeric(18, 2); quantize so 1500 == 1500.00.
    return f"{d.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):.2f}"


def composite_key(tx: Transaction) -> CompositeKey:
    return CompositeKey(
        date=tx.date.isoformat(),
        amount=_fmt_amount(tx.amount),
        description=tx.description.strip(),
    )


def partition(batch: Iterable[Transaction], existing: Iterable[Transaction]) -> Reconciliation:
    """Partition ``batch`` into new and already-present transactions.

    ``existing`` is consumed once to seed per-key counts, so its order never
    matters. Each batch row whose key still has a positive count consumes one
    occurrence and is reported as a duplicate; every other row is new. Both
    output lists keep ``batch`` order.
    """

    remaining = Counter(composite_key(tx) for tx in existing)

    to_insert: list[Transaction] = []
    duplicates: list[Transaction] = []
    for tx in batch:
        key = composite_key(tx)
        if remaining[key] > 0:
            remaining[key] -= 1
            duplicates.append(tx)
        else:
            to_insert.append(tx)
    return Reconciliation(to_insert=to_insert, duplicates=duplicates)


def reconcile(batch: Iterable[Transaction], existing: Iterable[Transaction]) -> list[Transaction]:
    """Return the subset of ``batch`` not already present in ``existing``."""

    return partition(batch, existing).to_insert


__all__ = [
    "CompositeKey",
    "Reconciliation",
    "composite_key",
    "partition",
    "reconcile",
]
