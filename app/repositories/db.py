"""DuckDB connection management."""

import threading
from pathlib import Path

import duckdb
from loguru import logger

from app.models import ALL_DDL
from settings import DB_PATH

_local = threading.local()


def db_exists(path: str = DB_PATH) -> bool:
    """Check if database file exists."""
    return Path(path).exists()


def _tables_exist(conn: duckdb.DuckDBPyConnection) -> bool:
    """Check if main tables already exist."""
    result = conn.execute(
        "SELECT COUNT(*) FROM information_schema.tables WHERE table_name = 'proposal'"
    ).fetchone()
    return result[0] > 0


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Initialize all tables from DDL statements (idempotent - uses IF NOT EXISTS)."""
    if _tables_exist(conn):
        return

    for ddl in ALL_DDL:
        conn.execute(ddl)
    logger.info("DB tables initialized")


def _ensure_db_exists(path: str) -> None:
    """Create DB with tables if it doesn't exist."""
    if not db_exists(path):
        logger.warning("DB not found: {}. Creating empty DB.", path)
        conn = duckdb.connect(path)
        init_tables(conn)
        conn.close()


def _connections() -> dict[tuple[str, bool], duckdb.DuckDBPyConnection]:
    if not hasattr(_local, "conns"):
        _local.conns = {}
    return _local.conns


def get_db(path: str = DB_PATH, read_only: bool = False) -> duckdb.DuckDBPyConnection:
    """Get thread-local connection for a database path."""
    conns = _connections()
    key = (path, read_only)
    if key not in conns:
        _ensure_db_exists(path)
        conn = duckdb.connect(path, read_only=read_only)
        if not read_only:
            init_tables(conn)
        conns[key] = conn
        logger.debug("DB connected: {} (read_only={})", path, read_only)
    return conns[key]


def close_db(path: str | None = None) -> None:
    """Close thread-local connections (all, or those for one path)."""
    conns = _connections()
    for key in [k for k in conns if path is None or k[0] == path]:
        conns.pop(key).close()
        logger.debug("DB connection closed: {}", key[0])


def reconnect_db(path: str = DB_PATH, read_only: bool = False) -> duckdb.DuckDBPyConnection:
    """Force reconnect."""
    close_db(path)
    return get_db(path, read_only)
