"""Record extraction from flattened bank-statement text.

The targeted statement prints one row per transaction as::

    <description> DD.MM.YY <signed amount> ₸

with spaces as thousands separators and a decimal comma, e.g.
``MAGNUM CAFE #12 05.01.24 - 1 500,00 ₸``. Page text is flattened to a single
whitespace-collapsed line before matching, so rows are recovered purely from
the token order above; the layout is an input contract, not something this
module can negotiate.

Contract
--------
- :func:`iter_raw_records` is a lazy, single forward pass over the text: each
  search resumes where the previous row ended.
- Summary rows (balance/total lines) are skipped.
- The description capture runs from the end of the previous match, so it can
  carry a running-balance figure. Only the text after the last ``₸`` in the
  capture is kept as the description.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from ..logging_setup import get_logger
from ..models import RawRecord

# Currency marker printed after every amount. Some PDF fonts extract it as a
# plain "T", which the row pattern accepts as well.
CURRENCY_MARKER = "₸"

# U+2212, used by the statement instead of an ASCII hyphen for debits.
MINUS_GLYPH = "−"

# Substrings identifying summary rows: "balance" and "total".
SUMMARY_MARKERS: tuple[str, ...] = ("Остаток", "Всего")

# Date, signed amount and currency marker. The description is whatever text
# lies between the previous row and the start of this match.
ROW_TAIL_RE = re.compile(
    r"\s(\d{2}\.\d{2}\.\d{2})\s([+\-" + MINUS_GLYPH + r"]?\s?[\d\s]+,\d{2})\s?[₸T]"
)

_WS_RE = re.compile(r"\s+")

_logger = get_logger("statement_import.ingest.statement_text")


def flatten_pages(pages: Iterable[str]) -> str:
    """Join page texts and collapse every whitespace run to a single space."""

    joined = " ".join(p for p in pages if p)
    return _WS_RE.sub(" ", joined).strip()


def _is_summary_row(description: str) -> bool:
    return any(marker in description for marker in SUMMARY_MARKERS)


def clean_description(captured: str) -> str:
    """Return the merchant text from a raw description capture.

    When the capture contains the currency marker (a balance figure leaked in
    from the preceding row), keep only what follows its last occurrence.
    """

    text = captured.strip()
    cut = text.rfind(CURRENCY_MARKER)
    if cut != -1:
        text = text[cut + len(CURRENCY_MARKER) :].strip()
    return text


def iter_raw_records(text: str) -> Iterator[RawRecord]:
    """Yield a :class:`RawRecord` for every transaction row in ``text``.

    ``text`` should already be flattened (see :func:`flatten_pages`). Rows
    whose description contains a summary marker are skipped.
    """

    pos = 0
    while True:
        match = ROW_TAIL_RE.search(text, pos)
        if match is None:
            return
        raw_description = text[pos : match.start()]
        date_text, amount_text = match.groups()
        pos = match.end()
        if _is_summary_row(raw_description):
            _logger.debug("skipping summary row dated %s", date_text)
            continue
        yield RawRecord(
            description_text=clean_description(raw_description),
            date_text=date_text,
            amount_text=amount_text,
        )


__all__ = [
    "CURRENCY_MARKER",
    "MINUS_GLYPH",
    "SUMMARY_MARKERS",
    "ROW_TAIL_RE",
    "flatten_pages",
    "clean_description",
    "iter_raw_records",
]
