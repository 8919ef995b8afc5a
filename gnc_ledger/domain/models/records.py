"""Records handed over by ledger sources before the book is built."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class CommodityRecord:
    """Row describing a commodity."""

    namespace: str
    mnemonic: str
    full_name: str | None = None
    fraction: int = 100


@dataclass(frozen=True)
class AccountRecord:
    """Row describing an account; ``commodity_id`` may be None for ROOT."""

    guid: str
    name: str
    account_type: str
    commodity_id: str | None
    parent_guid: str | None
    commodity_scu: int = 100
    description: str | None = None


@dataclass(frozen=True)
class TransactionRecord:
    """Row describing a transaction header."""

    guid: str
    currency_id: str
    post_date: date | datetime | str
    enter_date: date | datetime | str | None = None
    num: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class SplitRecord:
    """Row describing a split; amounts are Decimals or ``n/d`` literals."""

    guid: str
    transaction_guid: str
    account_guid: str
    value: Decimal | str
    quantity: Decimal | str
    memo: str | None = None
    reconcile_state: str = "n"


@dataclass(frozen=True)
class PriceRecord:
    """Price-history sample: one ``commodity`` is worth ``value`` ``currency``."""

    commodity_id: str
    currency_id: str
    date: date | datetime | str
    value: Decimal | str
    source: str | None = None


__all__ = [
    "CommodityRecord",
    "AccountRecord",
    "TransactionRecord",
    "SplitRecord",
    "PriceRecord",
]
