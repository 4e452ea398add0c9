"""SQLAlchemy engine/session helpers for the ledger database.

Usage
-----
from db.client import session_scope

with session_scope(database_url=url) as s:
    s.execute(...)

Engines are created lazily, one per database URL, and reused for the life of
the process. Without an explicit ``database_url`` the URL comes from
``DATABASE_URL``.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

# URL -> (engine, session factory)
_REGISTRY: dict[str, tuple[Engine, sessionmaker[Session]]] = {}


def resolve_database_url(override: str | None = None) -> str:
    url = override or os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set; cannot initialize database client")
    return url


def _create(url: str) -> tuple[Engine, sessionmaker[Session]]:
    engine = create_engine(url, pool_pre_ping=True)
    factory = sessionmaker(bind=engine, expire_on_commit=False, class_=Session)
    return engine, factory


def get_engine(*, database_url: str | None = None) -> Engine:
    """Return the engine for ``database_url`` (or ``DATABASE_URL``)."""

    url = resolve_database_url(database_url)
    if url not in _REGISTRY:
        _REGISTRY[url] = _create(url)
    return _REGISTRY[url][0]


def dispose_engine(*, database_url: str | None = None) -> None:
    """Dispose one engine by URL, or every engine when no URL is given."""

    urls = [database_url] if database_url is not None else list(_REGISTRY)
    for url in urls:
        entry = _REGISTRY.pop(url, None)
        if entry is not None:
            entry[0].dispose()


def get_session(*, database_url: str | None = None) -> Session:
    get_engine(database_url=database_url)
    return _REGISTRY[resolve_database_url(database_url)][1]()


@contextmanager
def session_scope(*, database_url: str | None = None) -> Iterator[Session]:
    """Commit on success, roll back on any exception, always close."""

    session = get_session(database_url=database_url)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = [
    "resolve_database_url",
    "get_engine",
    "dispose_engine",
    "get_session",
    "session_scope",
]
