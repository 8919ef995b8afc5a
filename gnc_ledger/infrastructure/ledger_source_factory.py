"""Factory helpers to select the ledger source backend."""

from gnc_ledger.application.ports.database import DatabaseEnginePort
from gnc_ledger.application.ports.ledger_source import LedgerSourcePort
from gnc_ledger.infrastructure.logging.logger import get_app_logger
from gnc_ledger.infrastructure.piecash_ledger_source import PieCashLedgerSource
from gnc_ledger.infrastructure.settings import LedgerSettings
from gnc_ledger.infrastructure.sql_ledger_source import SqlAlchemyLedgerSource


def create_ledger_source(
    db_port: DatabaseEnginePort,
    logger=None,
    settings: LedgerSettings | None = None,
) -> LedgerSourcePort:
    """Return a ledger source implementation based on configuration.

    Args:
        db_port: Port providing access to the GnuCash engine (SQL backend).
        logger: Optional logger compatible with logging.Logger-like API.
        settings: Optional settings; read from the environment when omitted.

    Returns:
        LedgerSourcePort: Concrete source implementation.

    Raises:
        RuntimeError: If the piecash backend has no book to open.
        ValueError: If the backend name is unknown.
    """
    resolved_logger = logger or get_app_logger()
    resolved_settings = settings or LedgerSettings.from_env()
    backend = resolved_settings.backend

    if backend == "sqlalchemy":
        return SqlAlchemyLedgerSource(db_port)

    if backend == "piecash":
        if resolved_settings.piecash_file is None:
            raise RuntimeError("PieCash backend requires a PIECASH_FILE path.")
        return PieCashLedgerSource(
            resolved_settings.piecash_file,
            logger=resolved_logger,
        )

    raise ValueError(
        "Unsupported GnuCash backend: "
        f"{backend}. Expected sqlalchemy or piecash."
    )


__all__ = ["create_ledger_source"]
