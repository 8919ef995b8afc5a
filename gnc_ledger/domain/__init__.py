"""Domain package for the ledger engine's core models and services."""

from .errors import (
    ArithmeticMismatchError,
    InputError,
    IntegrityError,
    LedgerError,
    LedgerLookupError,
    ParseError,
)
from .models import (
    ZERO,
    Account,
    Book,
    Commodity,
    CommodityAmount,
    CommodityRegistry,
    DateInterval,
    MultiCommodityAmount,
    Split,
    Transaction,
)
from .services.exchange_rates import ExchangeRateCurve, Interpolation
from .services import queries

__all__ = [
    "ArithmeticMismatchError",
    "InputError",
    "IntegrityError",
    "LedgerError",
    "LedgerLookupError",
    "ParseError",
    "ZERO",
    "Account",
    "Book",
    "Commodity",
    "CommodityAmount",
    "CommodityRegistry",
    "DateInterval",
    "MultiCommodityAmount",
    "Split",
    "Transaction",
    "ExchangeRateCurve",
    "Interpolation",
    "queries",
]
