"""Database infrastructure for SQL-backed GnuCash books.

This module creates and reuses the SQLAlchemy engine connected to the GnuCash
database (PostgreSQL, MySQL or SQLite).
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from gnc_ledger.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    A ``.env`` file in the working directory is loaded first.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    SQLite book files get the default pool; server databases get a small pool
    with health checks.
    """
    if db_url.startswith("sqlite"):
        return create_engine(db_url, future=True)
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_gnucash_engine: Optional[Engine] = None


def get_gnucash_engine(db_url: str | None = None) -> Engine:
    """Get a singleton SQLAlchemy engine for the GnuCash database.

    Args:
        db_url: Optional URL; ``GNUCASH_DB_URL`` is read when omitted.

    Returns:
        Engine: Lazily initialized engine connected to the GnuCash backend.
    """
    global _gnucash_engine
    if _gnucash_engine is None:
        _gnucash_engine = _create_engine(
            db_url or _get_env_var("GNUCASH_DB_URL")
        )
    return _gnucash_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine."""

    def __init__(self, db_url: str | None = None) -> None:
        self._db_url = db_url

    def get_gnucash_engine(self) -> Engine:
        """Get the engine for the GnuCash database."""
        return get_gnucash_engine(self._db_url)


__all__ = ["get_gnucash_engine", "SqlAlchemyDatabaseEngineAdapter"]
