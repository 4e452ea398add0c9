"""DB helpers for tests: bootstrap a temporary SQLite DB and seed ledger rows."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from db import Base
from db.client import get_engine, session_scope
from db.models.ledger import LedgerTransaction
from sqlalchemy import func, select
from statement_import.models import Transaction
from statement_import.persistence import bulk_insert


def bootstrap_sqlite_db(db_file: Path) -> str:
    """Create a SQLite database file, initialize the schema, and return the URL.

    A file-backed database (rather than ``:memory:``) lets every SQLAlchemy
    connection in the pool see the same state.
    """

    url = f"sqlite+pysqlite:///{db_file}"
    db_file.parent.mkdir(parents=True, exist_ok=True)
    engine = get_engine(database_url=url)
    Base.metadata.create_all(bind=engine)
    return url


def seed_transactions(database_url: str, owner: str, transactions: Iterable[Transaction]) -> int:
    with session_scope(database_url=database_url) as session:
        return bulk_insert(session, owner=owner, transactions=transactions)


def count_rows(database_url: str, owner: str | None = None) -> int:
    stmt = select(func.count()).select_from(LedgerTransaction)
    if owner is not None:
        stmt = stmt.where(LedgerTransaction.owner_id == owner)
    with session_scope(database_url=database_url) as session:
        return session.execute(stmt).scalar_one()


def fetch_rows(database_url: str, owner: str) -> list[LedgerTransaction]:
    stmt = (
        select(LedgerTransaction)
        .where(LedgerTransaction.owner_id == owner)
        .order_by(LedgerTransaction.id)
    )
    with session_scope(database_url=database_url) as session:
        return list(session.execute(stmt).scalars().all())
