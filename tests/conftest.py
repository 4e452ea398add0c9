"""Pytest configuration for test isolation.

``db.client`` caches one engine per URL for the life of the process, and each
test bootstraps its own SQLite file. An autouse fixture disposes every cached
engine around each test and clears ``DATABASE_URL`` so a developer's
``.env``/shell setting can never leak into a test run.

CLI invocations install a log handler on whatever ``sys.stderr`` is current,
which under ``CliRunner`` is a capture buffer closed after the call. The
package logger is therefore restored after every test, and CLI log output is
limited to warnings so it does not interleave with command output.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import statement_import.logging_setup as logging_setup
from db.client import dispose_engine

from tests.helpers.db import bootstrap_sqlite_db


@pytest.fixture(autouse=True)
def _isolate_database(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    dispose_engine()
    yield
    dispose_engine()


@pytest.fixture(autouse=True)
def _isolate_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv(logging_setup.LEVEL_ENV_VAR, "WARNING")
    logger = logging.getLogger(logging_setup.PACKAGE_LOGGER)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    monkeypatch.setattr(logging_setup, "_handler", None)
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """URL of a fresh, schema-initialized SQLite file database."""

    return bootstrap_sqlite_db(tmp_path / "ledger.sqlite3")
