"""RawRecord → Transaction normalization.

Dates are printed as ``DD.MM.YY``; two-digit years are always read as 20YY,
so dates before 2000 are not representable.

Amounts look like ``- 1 500,00`` or ``+2 000,00``: spaces (including
non-breaking ones) group thousands, a comma marks decimals, and debits may
use the U+2212 minus glyph.

A row that cannot be normalized is dropped (``normalize_record`` returns
``None``) rather than failing the whole import.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation

from .ingest.statement_text import CURRENCY_MARKER, MINUS_GLYPH
from .logging_setup import get_logger
from .models import RawRecord, Transaction, TransactionKind

# Used when the statement row carries no merchant text at all.
PLACEHOLDER_DESCRIPTION = "(statement transaction)"

_DATE_RE = re.compile(r"^(\d{2})\.(\d{2})\.(\d{2})$")
_WS_RE = re.compile(r"\s+")

_logger = get_logger("statement_import.normalizers")


# ---------------------------------------------------------------------------
# Field parsers
# ---------------------------------------------------------------------------


def parse_statement_date(raw: str) -> date:
    """Parse ``DD.MM.YY`` into a calendar date in the 2000s."""

    m = _DATE_RE.match(raw.strip())
    if m is None:
        raise ValueError(f"invalid DD.MM.YY date: {raw!r}")
    day, month, year = (int(part) for part in m.groups())
    try:
        return date(2000 + year, month, day)
    except ValueError as exc:
        raise ValueError(f"invalid calendar date: {raw!r}") from exc


def parse_signed_amount(raw: str) -> Decimal:
    """Parse a statement amount into a signed ``Decimal``.

    A trailing currency marker (``₸`` or its ``T`` rendering) is ignored.
    """

    s = _WS_RE.sub("", raw).rstrip(CURRENCY_MARKER + "T")
    s = s.replace(",", ".").replace(MINUS_GLYPH, "-")
    if not s:
        raise ValueError("amount is empty")
    try:
        d = Decimal(s)
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount: {raw!r}") from exc
    if not d.is_finite():
        raise ValueError(f"invalid amount: {raw!r}")
    return d


def clean_text(value: str) -> str:
    return _WS_RE.sub(" ", value).strip()


# ---------------------------------------------------------------------------
# Record normalization
# ---------------------------------------------------------------------------


def normalize_record(raw: RawRecord) -> Transaction | None:
    """Convert a :class:`RawRecord` into a :class:`Transaction`.

    Mapping rules:
    - ``date``: ``DD.MM.YY`` → ``date(20YY, MM, DD)``
    - ``kind``: ``income`` when the signed amount is positive, else ``expense``
    - ``amount``: absolute value of the signed amount
    - ``description``: cleaned text, or :data:`PLACEHOLDER_DESCRIPTION`
    - ``category``: left unset for the classifier

    Returns ``None`` when the date or amount does not parse, or the amount is
    zero (a zero movement cannot satisfy ``amount > 0``).
    """

    try:
        tx_date = parse_statement_date(raw.date_text)
        signed = parse_signed_amount(raw.amount_text)
    except ValueError as exc:
        _logger.debug("dropping unparseable row: %s", exc)
        return None

    if signed == 0:
        _logger.debug("dropping zero-amount row dated %s", raw.date_text)
        return None

    kind = TransactionKind.INCOME if signed > 0 else TransactionKind.EXPENSE
    description = clean_text(raw.description_text) or PLACEHOLDER_DESCRIPTION
    return Transaction(
        date=tx_date,
        kind=kind,
        amount=abs(signed),
        description=description,
    )


__all__ = [
    "PLACEHOLDER_DESCRIPTION",
    "parse_statement_date",
    "parse_signed_amount",
    "clean_text",
    "normalize_record",
]
