"""Composition root for wiring infrastructure adapters."""

from gnc_ledger.application.ports.database import DatabaseEnginePort
from gnc_ledger.application.ports.ledger_source import LedgerSourcePort
from gnc_ledger.application.use_cases.load_book import (
    LoadBookUseCase,
    LoadResult,
)
from gnc_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from gnc_ledger.infrastructure.ledger_source_factory import (
    create_ledger_source,
)
from gnc_ledger.infrastructure.logging.logger import get_app_logger
from gnc_ledger.infrastructure.settings import LedgerSettings


def build_database_adapter(
    settings: LedgerSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter instance."""
    db_url = settings.db_url if settings is not None else None
    return SqlAlchemyDatabaseEngineAdapter(db_url)


def build_ledger_source(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
) -> LedgerSourcePort:
    """Return the configured ledger source."""
    resolved_settings = settings or LedgerSettings.from_env()
    resolved_db = db_port or build_database_adapter(resolved_settings)
    return create_ledger_source(
        resolved_db,
        logger=get_app_logger(),
        settings=resolved_settings,
    )


def load_book(
    source: LedgerSourcePort | None = None,
    settings: LedgerSettings | None = None,
) -> LoadResult:
    """Load the configured book with its diagnostics."""
    resolved_settings = settings or LedgerSettings.from_env()
    resolved_source = source or build_ledger_source(settings=resolved_settings)
    return LoadBookUseCase(
        resolved_source,
        resolved_settings.base_currency,
        logger=get_app_logger(),
        eager_balances=resolved_settings.eager_balances,
    ).execute()


__all__ = ["build_database_adapter", "build_ledger_source", "load_book"]
