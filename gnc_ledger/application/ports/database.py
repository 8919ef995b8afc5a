"""Database port for SQL-backed GnuCash books.

Infrastructure implementations hide engine configuration (URLs, pooling)
behind this protocol so ledger sources depend only on it.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the SQLAlchemy engine of a GnuCash database."""

    def get_gnucash_engine(self) -> Engine:
        """Get the engine for the GnuCash database.

        Returns:
            Engine: SQLAlchemy engine connected to the GnuCash backend.
        """


__all__ = ["DatabaseEnginePort"]
