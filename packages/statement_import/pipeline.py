"""Statement import orchestration.

Public API:
    - :func:`parse_statement`: document → classified :class:`ImportBatch`
    - :func:`build_batch`: flattened text → classified :class:`ImportBatch`
    - :func:`import_statement`: document → ledger insert, with de-duplication

Steps of :func:`import_statement`, each attempted exactly once:

1. page text from the extraction collaborator, flattened;
2. extract → normalize → classify into an :class:`ImportBatch`;
3. the batch's ``[min_date, max_date]`` span;
4. the owner's stored transactions over that span;
5. reconcile (multiset membership on the composite key);
6. bulk-insert the new subset, unless it is empty.

Only steps 1, 4 and 6 touch the outside world. Step 4 needs the span from
step 2, so the external calls are strictly sequential.
"""

from __future__ import annotations

from .errors import ExtractionError, LayoutMismatchError
from .ingest.pdf_pages import PageTextExtractor
from .ingest.statement_text import flatten_pages, iter_raw_records
from .logging_setup import get_logger
from .models import ImportBatch, ImportResult, Transaction
from .normalizers import normalize_record
from .persistence import TransactionStore
from .reconcile import partition
from .rules import KeywordClassifier

_PREVIEW_CHARS = 500

_logger = get_logger("statement_import.pipeline")


def build_batch(text: str, *, classifier: KeywordClassifier | None = None) -> ImportBatch:
    """Extract, normalize, and classify every transaction row in ``text``.

    Raises :class:`LayoutMismatchError` when ``text`` yields no rows at all,
    or when every recognised row was rejected by the normalizer.
    """

    clf = classifier or KeywordClassifier()
    raw_count = 0
    normalized: list[Transaction] = []
    for raw in iter_raw_records(text):
        raw_count += 1
        tx = normalize_record(raw)
        if tx is not None:
            normalized.append(tx)
    transactions = clf.categorize_all(normalized)

    preview = text[:_PREVIEW_CHARS]
    if raw_count == 0:
        _logger.warning("no transaction rows recognised; text preview: %r", preview)
        raise LayoutMismatchError(
            "Could not recognize transactions.", text_preview=preview
        )
    if not transactions:
        _logger.warning(
            "all %d recognised row(s) were rejected; text preview: %r", raw_count, preview
        )
        raise LayoutMismatchError(
            f"None of the {raw_count} recognized rows could be parsed.", text_preview=preview
        )

    dropped = raw_count - len(transactions)
    if dropped:
        _logger.info("dropped %d unparseable row(s)", dropped)
    return ImportBatch.of(transactions)


def parse_statement(
    document: bytes,
    *,
    pages: PageTextExtractor,
    classifier: KeywordClassifier | None = None,
) -> ImportBatch:
    """Run extraction and classification without touching the store."""

    text = flatten_pages(pages.extract_pages(document))
    if not text:
        raise ExtractionError("Error processing PDF: the document contains no text layer")
    batch = build_batch(text, classifier=classifier)
    _logger.info("parsed %d transaction(s) from statement", len(batch))
    return batch


def import_statement(
    owner: str,
    document: bytes,
    *,
    pages: PageTextExtractor,
    store: TransactionStore,
    classifier: KeywordClassifier | None = None,
) -> ImportResult:
    """Import a statement document into ``owner``'s ledger.

    Returns an :class:`ImportResult`; ``inserted == 0`` means every parsed
    row was already stored and is not an error. Failures raise an
    :class:`~statement_import.errors.ImportFailure` subclass and leave the
    ledger untouched.
    """

    batch = parse_statement(document, pages=pages, classifier=classifier)

    date_from, date_to = batch.date_span()
    existing = store.query_range(owner, date_from, date_to)
    _logger.info(
        "found %d stored transaction(s) between %s and %s",
        len(existing),
        date_from.isoformat(),
        date_to.isoformat(),
    )

    result = partition(batch, existing)
    if not result.to_insert:
        _logger.info("no new transactions (%d duplicate(s) skipped)", len(result.duplicates))
        return ImportResult(inserted=0, duplicates=len(result.duplicates), parsed=len(batch))

    inserted = store.bulk_insert(owner, result.to_insert)
    _logger.info(
        "inserted %d transaction(s), skipped %d duplicate(s)", inserted, len(result.duplicates)
    )
    return ImportResult(inserted=inserted, duplicates=len(result.duplicates), parsed=len(batch))


__all__ = ["build_batch", "parse_statement", "import_statement"]
