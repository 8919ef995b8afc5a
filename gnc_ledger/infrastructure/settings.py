"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

from gnc_ledger.domain.constants import DEFAULT_BASE_CURRENCY
from gnc_ledger.infrastructure.logging.logger import get_app_logger
from gnc_ledger.utils.utils import get_project_root

_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for loading a GnuCash book into the ledger engine.

    Attributes:
        backend: Source identifier (sqlalchemy or piecash).
        piecash_file: Optional path or URI to the piecash book.
        db_url: Optional SQLAlchemy URL of a GnuCash SQL database.
        base_currency: Commodity id of the base currency (CURRENCY:EUR).
        eager_balances: Compute every running balance right after load.
    """

    backend: str = "sqlalchemy"
    piecash_file: Optional[Path | str] = None
    db_url: Optional[str] = None
    base_currency: str = DEFAULT_BASE_CURRENCY
    eager_balances: bool = False

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        backend = os.getenv("GNUCASH_BACKEND", "sqlalchemy").strip().lower()
        raw_piecash = os.getenv("PIECASH_FILE")
        logger = get_app_logger()
        if raw_piecash:
            piecash_file = cls._normalize_path(raw_piecash, logger=logger)
        else:
            piecash_file = cls._default_piecash_file(logger=logger)
        base_currency = cls._normalize_currency(
            os.getenv("LEDGER_BASE_CURRENCY", DEFAULT_BASE_CURRENCY)
        )
        eager = os.getenv("LEDGER_EAGER_BALANCES", "").strip().lower()
        return cls(
            backend=backend,
            piecash_file=piecash_file,
            db_url=os.getenv("GNUCASH_DB_URL") or None,
            base_currency=base_currency,
            eager_balances=eager in _TRUTHY,
        )

    @staticmethod
    def _normalize_currency(raw_value: str) -> str:
        """Accept ``EUR`` as a shorthand for ``CURRENCY:EUR``."""
        cleaned = raw_value.strip()
        if ":" in cleaned:
            namespace, _, mnemonic = cleaned.partition(":")
            return f"{namespace.upper()}:{mnemonic.upper()}"
        return f"CURRENCY:{cleaned.upper()}"

    @staticmethod
    def _normalize_path(
        raw_path: str,
        logger,
    ) -> Path | str:
        """Normalize the piecash file path or URI.

        Args:
            raw_path: Raw file path string.
            logger: Logger used for warnings.

        Returns:
            Path | str: Normalized filesystem path or URI string.
        """
        parsed = urlparse(raw_path)
        if parsed.scheme and parsed.scheme != "file":
            return raw_path
        if parsed.scheme == "file":
            raw_path = unquote(parsed.path)
        path = Path(raw_path).expanduser().resolve()
        if not path.exists():
            logger.warning(f"GnuCash book does not exist at {path}")
        return path

    @staticmethod
    def _default_piecash_file(logger) -> Path | None:
        """Return the single book found in ``data/``, if there is one."""
        data_dir = get_project_root() / "data"
        if not data_dir.exists():
            return None
        matches = sorted(data_dir.glob("*.gnucash"))
        if len(matches) == 1:
            return matches[0].resolve()
        if len(matches) > 1:
            logger.warning(
                "Multiple .gnucash files found in data/. "
                "Set PIECASH_FILE to choose one."
            )
        return None


__all__ = ["LedgerSettings"]
