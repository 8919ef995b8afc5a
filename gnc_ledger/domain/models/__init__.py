"""Domain models package."""

from .commodities import Commodity, CommodityRegistry, make_commodity_id
from .amounts import (
    ZERO,
    Amount,
    CommodityAmount,
    MultiCommodityAmount,
    ZeroAmount,
)
from .ledger import Account, Split, Transaction
from .intervals import DateInterval
from .records import (
    AccountRecord,
    CommodityRecord,
    PriceRecord,
    SplitRecord,
    TransactionRecord,
)
from .diagnostics import Diagnostic, Diagnostics
from .accounts import AccountBalanceDTO, AccountTotalDTO
from .book import Book

__all__ = [
    "Commodity",
    "CommodityRegistry",
    "make_commodity_id",
    "ZERO",
    "Amount",
    "CommodityAmount",
    "MultiCommodityAmount",
    "ZeroAmount",
    "Account",
    "Split",
    "Transaction",
    "DateInterval",
    "AccountRecord",
    "CommodityRecord",
    "PriceRecord",
    "SplitRecord",
    "TransactionRecord",
    "Diagnostic",
    "Diagnostics",
    "AccountBalanceDTO",
    "AccountTotalDTO",
    "Book",
]
