"""Keyword-based category inference for imported transactions.

Categories are assigned by an ordered list of :class:`CategoryRule` entries,
evaluated first-match-wins against the upper-cased description. Order is part
of the contract: ``"MAGNUM CAFE #12"`` matches both the groceries and the
dining rule and resolves to groceries because that rule comes first. Broad
catch-alls belong at the end, and the per-kind default applies only when no
rule matches.

This is a heuristic. Wrong guesses are expected and are corrected by the user
after import; nothing here can fail. A category the user already set survives
re-categorization as long as it belongs to the vocabulary of the
transaction's kind.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from .models import Transaction, TransactionKind

# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------

DEFAULT_INCOME_CATEGORY = "Other income"
DEFAULT_EXPENSE_CATEGORY = "Purchases"

EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Groceries",
    "Transport",
    "Housing",
    "Entertainment",
    "Health",
    "Education",
    "Dining Out",
    "Clothing",
    "Transfers",
    DEFAULT_EXPENSE_CATEGORY,
    "Other",
)

INCOME_CATEGORIES: tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Gifts",
    "Investments",
    "Sales",
    "Refunds",
    "Transfers",
    DEFAULT_INCOME_CATEGORY,
    "Other",
)


def categories_for(kind: TransactionKind) -> tuple[str, ...]:
    return INCOME_CATEGORIES if kind is TransactionKind.INCOME else EXPENSE_CATEGORIES


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class CategoryRule(NamedTuple):
    """Assign ``category`` when any of ``keywords`` occurs in the description.

    Keywords are matched as upper-case substrings.
    """

    category: str
    keywords: tuple[str, ...]

    def matches(self, description_upper: str) -> bool:
        return any(k in description_upper for k in self.keywords)


DEFAULT_RULES: tuple[CategoryRule, ...] = (
    CategoryRule("Groceries", ("MAGNUM",)),
    CategoryRule("Transport", ("ONAY", "TAXI", "UBER", "YANDEX")),
    CategoryRule("Dining Out", ("CAFE", "DONER", "RESTAURANT", "KFC")),
    CategoryRule("Health", ("PHARMACY", "APTEKA")),
    CategoryRule("Transfers", ("PEREVOD", "ПЕРЕВОД")),
)


class KeywordClassifier:
    """First-match-wins classifier over an ordered rule list."""

    def __init__(self, rules: Iterable[CategoryRule] = DEFAULT_RULES) -> None:
        self.rules: tuple[CategoryRule, ...] = tuple(
            CategoryRule(r.category, tuple(k.upper() for k in r.keywords)) for r in rules
        )

    def classify(self, description: str, kind: TransactionKind) -> str:
        upper = description.upper()
        for rule in self.rules:
            if rule.matches(upper):
                return rule.category
        if kind is TransactionKind.INCOME:
            return DEFAULT_INCOME_CATEGORY
        return DEFAULT_EXPENSE_CATEGORY

    def known_categories(self, kind: TransactionKind) -> frozenset[str]:
        """Categories valid for ``kind``: its vocabulary plus every rule output."""

        return frozenset(categories_for(kind)) | {r.category for r in self.rules}

    def categorize(self, tx: Transaction) -> Transaction:
        """Return ``tx`` with a category.

        A category already on ``tx`` is kept when it is one of
        :meth:`known_categories` for its kind. A blank category, or one from the
        other kind's vocabulary (``Salary`` on an expense), is replaced by
        :meth:`classify`.
        """

        current = (tx.category or "").strip()
        if current in self.known_categories(tx.kind):
            if current == tx.category:
                return tx
            return dataclasses.replace(tx, category=current)
        return dataclasses.replace(tx, category=self.classify(tx.description, tx.kind))

    def categorize_all(self, transactions: Sequence[Transaction]) -> list[Transaction]:
        return [self.categorize(tx) for tx in transactions]


_default_classifier = KeywordClassifier()


def classify(description: str, kind: TransactionKind) -> str:
    """Classify with :data:`DEFAULT_RULES`."""

    return _default_classifier.classify(description, kind)


def categorize(tx: Transaction) -> Transaction:
    return _default_classifier.categorize(tx)


__all__ = [
    "DEFAULT_INCOME_CATEGORY",
    "DEFAULT_EXPENSE_CATEGORY",
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "categories_for",
    "CategoryRule",
    "DEFAULT_RULES",
    "KeywordClassifier",
    "classify",
    "categorize",
]
