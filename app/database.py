import logging
import time
from typing import Optional

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import (
    DATABASE_URL,
    DB_LOG_SLOW_QUERIES,
    DB_MAX_OVERFLOW,
    DB_POOL_RECYCLE,
    DB_POOL_SIZE,
    DB_POOL_TIMEOUT,
    DB_SLOW_QUERY_THRESHOLD,
)

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(database_url: Optional[str] = None, **kwargs) -> Engine:
    """
    Build the SQLAlchemy engine for the configured database.

    SQLite gets ``check_same_thread=False`` and foreign key enforcement; every
    other backend gets the pooled settings from the environment. Extra keyword
    arguments are passed straight to ``create_engine``.
    """
    url = database_url or DATABASE_URL
    is_sqlite = url.startswith("sqlite")

    if is_sqlite:
        options = {"connect_args": {"check_same_thread": False}}
    else:
        options = {
            "pool_pre_ping": True,  # Test connections before using
            "pool_recycle": DB_POOL_RECYCLE,
            "pool_size": DB_POOL_SIZE,
            "max_overflow": DB_MAX_OVERFLOW,
            "pool_timeout": DB_POOL_TIMEOUT,
        }
    options.update(kwargs)

    try:
        engine = create_engine(url, echo=False, **options)
    except Exception as e:
        logger.error(f"❌ Failed to create database engine: {e}")
        raise

    if is_sqlite:

        @event.listens_for(engine, "connect")
        def enable_sqlite_foreign_keys(dbapi_connection, _connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    else:
        logger.info(
            f"📊 Connection pool: size={DB_POOL_SIZE}, max_overflow={DB_MAX_OVERFLOW}, timeout={DB_POOL_TIMEOUT}s"
        )

    # Slow query logging for performance monitoring
    if DB_LOG_SLOW_QUERIES:

        @event.listens_for(engine, "before_cursor_execute")
        def before_cursor_execute(conn, _cursor, statement, _parameters, context, _executemany):
            conn.info.setdefault("query_start_time", []).append(time.time())

        @event.listens_for(engine, "after_cursor_execute")
        def after_cursor_execute(conn, _cursor, statement, _parameters, context, _executemany):
            total = time.time() - conn.info["query_start_time"].pop(-1)
            if total > DB_SLOW_QUERY_THRESHOLD:
                logger.warning(f"🐌 Slow query ({total:.2f}s): {statement[:200]}...")

        @event.listens_for(engine, "handle_error")
        def discard_query_start_time(exception_context):
            # after_cursor_execute never runs for a failed statement
            conn = exception_context.connection
            if conn is not None and conn.info.get("query_start_time"):
                conn.info["query_start_time"].pop(-1)

    logger.info("✅ Database engine created successfully")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet"""
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine, checkfirst=True)


def get_db(request: Request):
    """Yield a session bound to the engine owned by the running application"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
