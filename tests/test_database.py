import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from app import database
from app.database import create_db_engine


@pytest.fixture
def timed_engine(monkeypatch):
    monkeypatch.setattr(database, "DB_LOG_SLOW_QUERIES", True)
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    yield engine
    engine.dispose()


def test_failed_statements_do_not_leak_query_timers(timed_engine):
    with timed_engine.connect() as conn:
        for _ in range(3):
            with pytest.raises(OperationalError):
                conn.execute(text("SELECT * FROM no_such_table"))

        assert conn.info.get("query_start_time", []) == []

        conn.execute(text("SELECT 1"))
        assert conn.info["query_start_time"] == []


def test_sqlite_enforces_foreign_keys(timed_engine):
    with timed_engine.connect() as conn:
        assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
