# ruff: noqa: I001
"""CLI for the ``statement_import`` package.

Command handlers (``cmd_*``) return a process exit code and report failures
as a single ``Error: ...`` line on stderr; the Typer commands below are thin
wrappers around them. Environment variables (notably ``DATABASE_URL``) are
loaded from a local ``.env`` using ``python-dotenv`` without overriding values
already set. Business logic lives in ``statement_import.pipeline``.
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from db.client import resolve_database_url
from dotenv import load_dotenv
from typer.models import OptionInfo

from .errors import ImportFailure
from .logging_setup import configure_logging


# ---- Small module-level helpers ---------------------------------------------


def _read_pdf(pdf_path: str) -> bytes | None:
    """Read ``pdf_path`` or print an error and return ``None``."""

    if Path(pdf_path).suffix.lower() != ".pdf":
        print("Error: Please select a PDF file.", file=sys.stderr)
        return None
    try:
        with open(pdf_path, "rb") as f:
            return f.read()
    except FileNotFoundError:
        print(f"Error: File not found: {pdf_path}", file=sys.stderr)
    except PermissionError:
        print(f"Error: Permission denied: {pdf_path}", file=sys.stderr)
    except OSError as e:
        print(f"Error: Unexpected failure reading '{pdf_path}': {e}", file=sys.stderr)
    return None


def _require_database_url(database_url: str | None) -> bool:
    try:
        resolve_database_url(database_url)
    except RuntimeError:
        print(
            "Error: DATABASE_URL is not set; pass --database-url or set it in .env.",
            file=sys.stderr,
        )
        return False
    return True


# ---- Command handlers ---------------------------------------------------------


def cmd_import_statement(
    pdf_path: str,
    *,
    owner: str,
    database_url: str | None = None,
) -> int:
    """Import a PDF statement into ``owner``'s ledger.

    Prints ``Successfully added: N`` when new rows were stored, or a
    duplicates notice when every row was already present. Returns ``0`` in
    both cases and ``1`` on any failure.
    """

    from .api import import_statement

    if not owner.strip():
        print("Error: --owner must not be empty.", file=sys.stderr)
        return 1
    if not _require_database_url(database_url):
        return 1

    document = _read_pdf(pdf_path)
    if document is None:
        return 1

    try:
        result = import_statement(owner.strip(), document, database_url=database_url)
    except ImportFailure as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result.is_noop:
        print("No new transactions found (duplicates skipped).")
    else:
        print(f"Successfully added: {result.inserted}")
        if result.duplicates:
            print(f"Duplicates skipped: {result.duplicates}")
    return 0


def cmd_parse_statement(pdf_path: str) -> int:
    """Parse a statement and print one tab-separated line per transaction.

    Columns: ``date, kind, amount, category, description``. Nothing is
    persisted.
    """

    from .api import parse_statement

    document = _read_pdf(pdf_path)
    if document is None:
        return 1

    try:
        batch = parse_statement(document)
    except ImportFailure as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for tx in batch:
        print(f"{tx.date.isoformat()}\t{tx.kind}\t{tx.amount:.2f}\t{tx.category}\t{tx.description}")
    return 0


def cmd_list_transactions(
    *,
    owner: str,
    date_from: date,
    date_to: date,
    database_url: str | None = None,
) -> int:
    """Print ``owner``'s stored transactions between two dates (inclusive)."""

    from .persistence import SqlAlchemyTransactionStore

    if not _require_database_url(database_url):
        return 1
    if date_from > date_to:
        print("Error: --date-from must not be after --date-to.", file=sys.stderr)
        return 1

    store = SqlAlchemyTransactionStore(database_url=database_url)
    try:
        rows = store.query_range(owner, date_from, date_to)
    except ImportFailure as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for tx in rows:
        category = tx.category or ""
        print(f"{tx.date.isoformat()}\t{tx.kind}\t{tx.amount:.2f}\t{category}\t{tx.description}")
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Import bank statement PDFs into a ledger without duplicating rows on "
        "re-import. Loads DATABASE_URL from a local .env before running."
    ),
)

# Module-level option objects to satisfy ruff B008 (no calls in parameter
# defaults).
PDF_PATH_OPTION: OptionInfo = typer.Option(
    ...,
    "--pdf-path",
    help="Path to the statement PDF",
    dir_okay=False,
    file_okay=True,
    exists=False,
)
OWNER_OPTION: OptionInfo = typer.Option(..., "--owner", help="Ledger owner identifier")


@app.command("import-statement")
def import_statement_cmd(
    pdf_path: Annotated[Path, PDF_PATH_OPTION],
    owner: Annotated[str, OWNER_OPTION],
    database_url: Annotated[
        str | None,
        typer.Option("--database-url", help="Override DATABASE_URL (falls back to env var)."),
    ] = None,
) -> None:
    """Parse a statement and add its new transactions to the ledger."""

    raise typer.Exit(cmd_import_statement(str(pdf_path), owner=owner, database_url=database_url))


@app.command("parse-statement")
def parse_statement_cmd(pdf_path: Annotated[Path, PDF_PATH_OPTION]) -> None:
    """Dry run: print the transactions a statement would import."""

    raise typer.Exit(cmd_parse_statement(str(pdf_path)))


@app.command("list-transactions")
def list_transactions_cmd(
    owner: Annotated[str, OWNER_OPTION],
    date_from: Annotated[
        str, typer.Option("--date-from", help="First day, YYYY-MM-DD (inclusive)")
    ],
    date_to: Annotated[str, typer.Option("--date-to", help="Last day, YYYY-MM-DD (inclusive)")],
    database_url: Annotated[
        str | None,
        typer.Option("--database-url", help="Override DATABASE_URL (falls back to env var)."),
    ] = None,
) -> None:
    """Show stored transactions for an owner within a date range."""

    try:
        start = date.fromisoformat(date_from)
        end = date.fromisoformat(date_to)
    except ValueError as e:
        print(f"Error: invalid date: {e}", file=sys.stderr)
        raise typer.Exit(1) from e
    raise typer.Exit(
        cmd_list_transactions(owner=owner, date_from=start, date_to=end, database_url=database_url)
    )


@app.callback()
def _root(
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Log level name or number (default: STATEMENT_IMPORT_LOG_LEVEL or INFO).",
        ),
    ] = None,
) -> None:
    """Load ``.env`` from the working directory and configure logging."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level, force=True)


if __name__ == "__main__":  # pragma: no cover
    app()
