"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_source import LedgerSourcePort

__all__ = ["DatabaseEnginePort", "LedgerSourcePort"]
