"""Shared fixtures for application tests: an in-memory ledger source."""

from datetime import date, datetime, timezone

import pytest

from gnc_ledger.domain.models.records import (
    AccountRecord,
    CommodityRecord,
    PriceRecord,
    SplitRecord,
    TransactionRecord,
)


class FakeLedgerSource:
    """Ledger source returning canned records."""

    def __init__(self) -> None:
        self.commodities = [
            CommodityRecord("CURRENCY", "EUR", "Euro"),
            CommodityRecord("CURRENCY", "USD", "US Dollar"),
            CommodityRecord("NASDAQ", "ACME", "Acme Corp", fraction=10000),
        ]
        self.accounts = [
            AccountRecord("root", "Root Account", "ROOT", None, None),
            AccountRecord("assets", "Assets", "asset", "CURRENCY:EUR", "root"),
            AccountRecord("bank", "Bank", "bank", "CURRENCY:EUR", "assets"),
            AccountRecord("broker", "Broker", "stock", "NASDAQ:ACME", "assets"),
            AccountRecord("income", "Income", "income", "CURRENCY:EUR", "root"),
            AccountRecord("usd", "Dollars", "bank", "CURRENCY:USD", "assets"),
        ]
        self.transactions = [
            TransactionRecord(
                "salary",
                "CURRENCY:EUR",
                "2020-01-01 10:59:00",
                "2020-01-01 11:00:00",
                "1",
                "Salary",
            ),
            TransactionRecord(
                "buy",
                "CURRENCY:EUR",
                date(2020, 1, 10),
                datetime(2020, 1, 10, 9, tzinfo=timezone.utc),
                None,
                "Buy ACME",
            ),
            TransactionRecord(
                "fx",
                "CURRENCY:EUR",
                "2020-01-14 23:00:00",
            ),
        ]
        self.splits = [
            SplitRecord("s1", "salary", "bank", "100000/100", "100000/100"),
            SplitRecord("s2", "salary", "income", "-100000/100", "-100000/100"),
            SplitRecord("s3", "buy", "bank", "-300", "-300"),
            SplitRecord("s4", "buy", "broker", "300", "2/1", memo="2 shares"),
            SplitRecord("s5", "fx", "bank", "-90", "-90"),
            SplitRecord("s6", "fx", "usd", "90", "100"),
        ]
        self.prices = [
            PriceRecord("NASDAQ:ACME", "CURRENCY:EUR", "2020-01-10", "150"),
            PriceRecord("NASDAQ:ACME", "CURRENCY:EUR", "2020-01-20", "170"),
            PriceRecord("CURRENCY:EUR", "CURRENCY:USD", "2020-01-01", "5/4"),
            PriceRecord("NASDAQ:ACME", "CURRENCY:USD", "2020-01-10", "160"),
        ]

    def fetch_commodities(self):
        return list(self.commodities)

    def fetch_accounts(self):
        return list(self.accounts)

    def fetch_transactions(self):
        return list(self.transactions)

    def fetch_splits(self):
        return list(self.splits)

    def fetch_prices(self):
        return list(self.prices)


@pytest.fixture
def source() -> FakeLedgerSource:
    return FakeLedgerSource()
