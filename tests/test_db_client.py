import pytest
from db.client import dispose_engine, get_engine, resolve_database_url

from tests.helpers.db import bootstrap_sqlite_db, count_rows


def test_engines_are_cached_per_url(tmp_path):
    a = bootstrap_sqlite_db(tmp_path / "a.sqlite3")
    b = bootstrap_sqlite_db(tmp_path / "b.sqlite3")

    assert get_engine(database_url=a) is get_engine(database_url=a)
    assert get_engine(database_url=a) is not get_engine(database_url=b)
    assert count_rows(a) == count_rows(b) == 0


def test_dispose_single_url_keeps_the_others(tmp_path):
    a = bootstrap_sqlite_db(tmp_path / "a.sqlite3")
    b = bootstrap_sqlite_db(tmp_path / "b.sqlite3")
    engine_a = get_engine(database_url=a)
    engine_b = get_engine(database_url=b)

    dispose_engine(database_url=a)

    assert get_engine(database_url=a) is not engine_a
    assert get_engine(database_url=b) is engine_b


def test_database_url_falls_back_to_env(monkeypatch, tmp_path):
    url = f"sqlite+pysqlite:///{tmp_path / 'env.sqlite3'}"
    monkeypatch.setenv("DATABASE_URL", url)
    assert resolve_database_url() == url
    assert resolve_database_url("sqlite+pysqlite://") == "sqlite+pysqlite://"


def test_missing_database_url_raises():
    with pytest.raises(RuntimeError, match="DATABASE_URL is not set"):
        get_engine()
