"""Statement fixtures and collaborator fakes for pipeline tests.

``SAMPLE_PAGES`` mimics the page text of a two-page card statement: a header
with the opening balance, six transaction rows (the last two identical), and
a totals footer. The expected parse is ``SAMPLE_EXPECTED``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from statement_import.errors import ExtractionError, StoreError
from statement_import.models import Transaction, TransactionKind

SAMPLE_PAGES: tuple[str, ...] = (
    "Выписка по карте за период с 01.01.24 по 31.01.24\n"
    "Остаток на 01.01.24 10 000,00 ₸\n"
    "MAGNUM CAFE #12 05.01.24 - 1 500,00 ₸\n"
    "Пополнение с карты 06.01.24 + 2 000,00 ₸\n"
    "Yandex Go 07.01.24 −850,00 ₸\n",
    "Perevod Aigerim 08.01.24 - 5 000,00 ₸\n"
    "KFC Almaty 09.01.24 - 3 200,00 ₸\n"
    "KFC Almaty 09.01.24 - 3 200,00 ₸\n"
    "Всего пополнений 31.01.24 + 2 000,00 ₸\n",
)

SAMPLE_EXPECTED: tuple[tuple[date, TransactionKind, Decimal, str, str], ...] = (
    (date(2024, 1, 5), TransactionKind.EXPENSE, Decimal("1500"), "MAGNUM CAFE #12", "Groceries"),
    (date(2024, 1, 6), TransactionKind.INCOME, Decimal("2000"), "Пополнение с карты", "Other income"),
    (date(2024, 1, 7), TransactionKind.EXPENSE, Decimal("850"), "Yandex Go", "Transport"),
    (date(2024, 1, 8), TransactionKind.EXPENSE, Decimal("5000"), "Perevod Aigerim", "Transfers"),
    (date(2024, 1, 9), TransactionKind.EXPENSE, Decimal("3200"), "KFC Almaty", "Dining Out"),
    (date(2024, 1, 9), TransactionKind.EXPENSE, Decimal("3200"), "KFC Almaty", "Dining Out"),
)


def tx(
    day: str,
    amount: str,
    description: str,
    kind: TransactionKind = TransactionKind.EXPENSE,
    category: str | None = None,
) -> Transaction:
    """Shorthand: ``tx("2024-01-05", "100", "Cafe")``."""

    return Transaction(
        date=date.fromisoformat(day),
        kind=kind,
        amount=Decimal(amount),
        description=description,
        category=category,
    )


class FakePageExtractor:
    """Returns fixed page text and records the documents it was given."""

    def __init__(self, pages: Sequence[str] = SAMPLE_PAGES) -> None:
        self.pages = list(pages)
        self.calls: list[bytes] = []

    def extract_pages(self, document: bytes) -> list[str]:
        self.calls.append(document)
        return list(self.pages)


class BrokenPageExtractor:
    def extract_pages(self, document: bytes) -> list[str]:
        raise ExtractionError("Error processing PDF: file is damaged")


@dataclass
class InMemoryStore:
    """Dict-backed :class:`TransactionStore` with optional failure injection."""

    rows: dict[str, list[Transaction]] = field(default_factory=dict)
    fail_query: bool = False
    fail_insert: bool = False
    queries: list[tuple[str, date, date]] = field(default_factory=list)
    inserts: list[tuple[str, list[Transaction]]] = field(default_factory=list)

    def query_range(self, owner: str, date_from: date, date_to: date) -> list[Transaction]:
        self.queries.append((owner, date_from, date_to))
        if self.fail_query:
            raise StoreError("range query failed: connection refused")
        return [t for t in self.rows.get(owner, []) if date_from <= t.date <= date_to]

    def bulk_insert(self, owner: str, transactions: Sequence[Transaction]) -> int:
        self.inserts.append((owner, list(transactions)))
        if self.fail_insert:
            raise StoreError("insert failed: connection reset")
        self.rows.setdefault(owner, []).extend(transactions)
        return len(transactions)
