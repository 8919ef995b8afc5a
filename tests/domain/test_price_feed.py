"""Tests for price-history ingestion."""

from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from gnc_ledger.domain.constants import (
    PRICE_DEGENERATE_RATE,
    PRICE_NOT_AGAINST_BASE,
)
from gnc_ledger.domain.errors import LedgerLookupError
from gnc_ledger.domain.models.commodities import CommodityRegistry
from gnc_ledger.domain.models.diagnostics import Diagnostics
from gnc_ledger.domain.models.records import PriceRecord
from gnc_ledger.domain.services.price_feed import ingest_prices


@pytest.fixture
def commodities() -> CommodityRegistry:
    registry = CommodityRegistry("CURRENCY:EUR")
    for identifier in ("CURRENCY:EUR", "CURRENCY:USD", "CURRENCY:GBP"):
        registry.register(identifier)
    registry.register("NASDAQ:AAPL")
    return registry


def test_prices_land_on_the_right_curves(commodities) -> None:
    diagnostics = Diagnostics()
    prices = [
        PriceRecord("NASDAQ:AAPL", "CURRENCY:EUR", "2020-01-02 10:59:00", "15000/100"),
        PriceRecord("CURRENCY:EUR", "CURRENCY:USD", date(2020, 1, 3), "11/10"),
    ]

    stored = ingest_prices(commodities, prices, diagnostics)

    assert stored == 2
    assert len(diagnostics) == 0
    jan_2 = datetime(2020, 1, 2, tzinfo=timezone.utc)
    jan_3 = datetime(2020, 1, 3, tzinfo=timezone.utc)
    assert commodities.get("NASDAQ:AAPL").exchange_rate[jan_2] == Decimal("150")
    assert commodities.get("CURRENCY:USD").exchange_rate[jan_3] == (
        Decimal("1") / Decimal("1.1")
    )
    base_curve = commodities.base_currency.exchange_rate
    assert base_curve.get(datetime(2030, 1, 1, tzinfo=timezone.utc)) == 1


def test_unusable_prices_become_diagnostics(commodities) -> None:
    logger = MagicMock()
    diagnostics = Diagnostics(logger=logger)
    prices = [
        PriceRecord("NASDAQ:AAPL", "CURRENCY:USD", "2020-01-02", "150"),
        PriceRecord("CURRENCY:USD", "CURRENCY:EUR", "2020-01-02", "1/0"),
        PriceRecord("CURRENCY:GBP", "CURRENCY:EUR", "2020-01-02", "-2"),
        PriceRecord("CURRENCY:EUR", "CURRENCY:EUR", "2020-01-02", "1"),
    ]

    stored = ingest_prices(commodities, prices, diagnostics)

    assert stored == 0
    assert len(diagnostics.by_code(PRICE_NOT_AGAINST_BASE)) == 1
    assert len(diagnostics.by_code(PRICE_DEGENERATE_RATE)) == 3
    assert logger.warning.call_count == 4
    assert len(commodities.get("CURRENCY:USD").exchange_rate) == 0


def test_unknown_commodity_raises(commodities) -> None:
    with pytest.raises(LedgerLookupError):
        ingest_prices(
            commodities,
            [PriceRecord("NYSE:IBM", "CURRENCY:EUR", "2020-01-02", "1")],
            Diagnostics(),
        )
