import logging
import sqlite3
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, URL, make_url
from sqlalchemy.pool import StaticPool

from catalog.config import Settings, get_settings

logger = logging.getLogger(__name__)


def resolve_database_url(database_url: str, database_name: Optional[str] = None) -> URL:
    url = make_url(database_url)
    if database_name:
        url = url.set(database=database_name)
    return url


def _is_sqlite_memory(url: URL) -> bool:
    if url.database in (None, "", ":memory:"):
        return True
    return url.query.get("mode") == "memory"


def build_engine(
    database_url: str,
    *,
    database_name: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
) -> Engine:
    """Create an engine with the per-backend deadline applied.

    SQLite gets the deadline as its busy timeout, PostgreSQL as
    ``statement_timeout``.
    """
    url = resolve_database_url(database_url, database_name)
    backend = url.get_backend_name()

    connect_args: dict[str, object] = {}
    engine_kwargs: dict[str, object] = dict(pool_pre_ping=True)
    is_sqlite = backend == "sqlite"
    is_memory = False

    if is_sqlite:
        is_memory = _is_sqlite_memory(url)
        connect_args = {"check_same_thread": False}
        if timeout_seconds:
            connect_args["timeout"] = timeout_seconds
        if is_memory:
            engine_kwargs.update(poolclass=StaticPool)
    elif backend == "postgresql" and timeout_seconds:
        connect_args = {"options": f"-c statement_timeout={int(timeout_seconds * 1000)}"}

    engine = create_engine(url, connect_args=connect_args, **engine_kwargs)

    if is_sqlite and not is_memory:
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragmas(dbapi_connection, _connection_record):
            cursor = dbapi_connection.cursor()
            try:
                try:
                    cursor.execute("PRAGMA journal_mode=WAL")
                    cursor.execute("PRAGMA synchronous=NORMAL")
                except sqlite3.DatabaseError:
                    logger.debug("SQLite WAL mode unavailable for %s", url.database)
            finally:
                cursor.close()

    return engine


app_settings: Settings = get_settings()

engine = build_engine(
    app_settings.DATABASE_URL,
    database_name=app_settings.DATABASE_NAME,
    timeout_seconds=app_settings.QUERY_TIMEOUT_SECONDS,
)


__all__ = ["build_engine", "engine", "resolve_database_url"]
