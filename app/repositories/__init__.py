"""Repositories package - storage adapters behind one interface."""

from loguru import logger

from app.models.core import DEMO_USERS
from app.repositories.base import BaseRepository
from app.repositories.database import DatabaseRepository
from app.repositories.db import (
    close_db,
    get_db,
    init_tables,
    reconnect_db,
)
from app.repositories.memory import MemoryRepository

SOURCES = ("memory", "duckdb")


def create_repository(source: str, db_path: str | None = None) -> BaseRepository:
    """Build the repository for a data source name. Memory stores start with the demo users."""
    if source == "memory":
        return MemoryRepository(users=list(DEMO_USERS))
    if source == "duckdb":
        return DatabaseRepository(db_path)
    logger.error("Unknown data source: {}", source)
    raise ValueError(f"Unknown data source: {source}. Expected one of {', '.join(SOURCES)}")


__all__ = [
    # DB
    "get_db",
    "close_db",
    "reconnect_db",
    "init_tables",
    # Base
    "BaseRepository",
    # Backends
    "MemoryRepository",
    "DatabaseRepository",
    "create_repository",
]
