"""Tests for GetAccountBalancesUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from gnc_ledger.application.use_cases.get_account_balances import (
    GetAccountBalancesUseCase,
)
from gnc_ledger.application.use_cases.load_book import LoadBookUseCase
from gnc_ledger.domain.errors import LedgerLookupError


@pytest.fixture
def book(source):
    return LoadBookUseCase(source, "CURRENCY:EUR", logger=MagicMock()).execute().book


def test_execute_returns_sorted_converted_balances(book) -> None:
    """Balances are converted to the base currency by default."""
    balances = GetAccountBalancesUseCase(book, logger=MagicMock()).execute(
        as_of=date(2020, 1, 31),
    )

    by_name = {item.full_name: item for item in balances}
    assert [item.full_name for item in balances] == [
        "Assets",
        "Assets:Bank",
        "Assets:Broker",
        "Assets:Dollars",
        "Income",
    ]
    assert by_name["Assets:Bank"].balance == Decimal("610")
    assert by_name["Assets:Broker"].balance == Decimal("300")
    assert by_name["Assets:Dollars"].balance == Decimal("80")
    assert by_name["Assets"].balance == Decimal("990")
    assert by_name["Assets"].depth == 1
    assert by_name["Assets:Bank"].depth == 2
    assert by_name["Income"].balance == Decimal("-1000")
    assert {item.currency_code for item in balances} == {"EUR"}


def test_execute_without_subaccounts(book) -> None:
    balances = GetAccountBalancesUseCase(book, logger=MagicMock()).execute(
        as_of=date(2020, 1, 31),
        include_subaccounts=False,
    )

    assert {item.full_name: item.balance for item in balances}["Assets"] == 0


def test_execute_resolves_mnemonic_currency(book) -> None:
    balances = GetAccountBalancesUseCase(book, logger=MagicMock()).execute(
        as_of=date(2020, 1, 31),
        target_currency="USD",
    )

    dollars = next(item for item in balances if item.full_name == "Assets:Dollars")
    assert dollars.currency_code == "USD"
    assert dollars.balance == Decimal("100")


def test_execute_unknown_currency_raises(book) -> None:
    with pytest.raises(LedgerLookupError):
        GetAccountBalancesUseCase(book, logger=MagicMock()).execute(
            as_of=date(2020, 1, 31),
            target_currency="XYZ",
        )
