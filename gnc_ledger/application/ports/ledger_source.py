"""Application port for reading raw ledger records."""

from typing import Protocol

from gnc_ledger.domain.models.records import (
    AccountRecord,
    CommodityRecord,
    PriceRecord,
    SplitRecord,
    TransactionRecord,
)


class LedgerSourcePort(Protocol):
    """Port exposing the records a book is built from.

    Identifiers are stable strings; cross references (account parent, split
    account, split transaction, commodity ids) use those identifiers.
    """

    def fetch_commodities(self) -> list[CommodityRecord]:
        """Return every commodity of the book."""

    def fetch_accounts(self) -> list[AccountRecord]:
        """Return every account, including the root."""

    def fetch_transactions(self) -> list[TransactionRecord]:
        """Return every transaction header."""

    def fetch_splits(self) -> list[SplitRecord]:
        """Return every split."""

    def fetch_prices(self) -> list[PriceRecord]:
        """Return the whole price history."""


__all__ = [
    "LedgerSourcePort",
    "AccountRecord",
    "CommodityRecord",
    "PriceRecord",
    "SplitRecord",
    "TransactionRecord",
]
