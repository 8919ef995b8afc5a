"""Shared fixtures: a small USD-based book with an EUR savings account."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from gnc_ledger.domain.models.book import Book
from gnc_ledger.domain.models.commodities import CommodityRegistry
from gnc_ledger.domain.models.ledger import Account, Split, Transaction


def utc(year: int, month: int, day: int, hour: int = 0) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.fixture
def registry() -> CommodityRegistry:
    commodities = CommodityRegistry("CURRENCY:USD")
    commodities.register("CURRENCY:USD", namespace="CURRENCY", mnemonic="USD")
    eur = commodities.register(
        "CURRENCY:EUR",
        namespace="CURRENCY",
        mnemonic="EUR",
    )
    eur.exchange_rate.set(utc(2020, 1, 1), Decimal("0.9"))
    commodities.base_currency.exchange_rate.set(utc(2000, 1, 1), Decimal("1"))
    return commodities


def _transaction(guid, currency, day, legs, num=""):
    splits = tuple(
        Split(
            guid=f"{guid}-{index}",
            transaction_guid=guid,
            account_guid=account_guid,
            value=Decimal(value),
            quantity=Decimal(quantity),
        )
        for index, (account_guid, value, quantity) in enumerate(legs)
    )
    return Transaction(
        guid=guid,
        currency=currency,
        post_date=day,
        enter_date=day,
        num=num,
        description=f"tx {guid}",
        splits=splits,
    )


@pytest.fixture
def book(registry) -> Book:
    usd = registry.get("CURRENCY:USD")
    eur = registry.get("CURRENCY:EUR")
    accounts = [
        Account("root", "Root Account", "ROOT", None),
        Account("assets", "Assets", "ASSET", usd, "root"),
        Account("checking", "Checking", "BANK", usd, "assets"),
        Account("savings", "Savings", "BANK", eur, "assets"),
        Account("income", "Income", "INCOME", usd, "root"),
    ]
    transactions = [
        _transaction(
            "t2",
            usd,
            utc(2020, 1, 5),
            [("checking", "-40", "-40"), ("income", "40", "40")],
        ),
        _transaction(
            "t1",
            usd,
            utc(2020, 1, 1),
            [("checking", "100", "100"), ("income", "-100", "-100")],
        ),
        _transaction(
            "t3",
            usd,
            utc(2020, 1, 3),
            [("savings", "45", "50"), ("income", "-45", "-45")],
        ),
        _transaction(
            "t4",
            usd,
            utc(2020, 2, 10),
            [("checking", "25", "25"), ("income", "-25", "-25")],
        ),
    ]
    return Book(registry, accounts, transactions)
