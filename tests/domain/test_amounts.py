"""Tests for commodity amounts and their arithmetic."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from gnc_ledger.domain.errors import (
    ArithmeticMismatchError,
    InputError,
    LedgerLookupError,
)
from gnc_ledger.domain.models.amounts import (
    ZERO,
    CommodityAmount,
    MultiCommodityAmount,
)
from gnc_ledger.domain.models.commodities import CommodityRegistry

JAN_1 = datetime(2020, 1, 1, tzinfo=timezone.utc)


def test_convert_to_base_uses_rate(registry) -> None:
    """100 EUR at 0.9 should read 90.00 USD."""
    eur = registry.get("CURRENCY:EUR")
    usd = registry.get("CURRENCY:USD")

    converted = CommodityAmount(Decimal("100"), eur, JAN_1).convert_to(usd)

    assert converted.commodity is usd
    assert converted.timepoint == JAN_1
    assert f"{converted.quantity:.2f}" == "90.00"
    assert str(converted) == "$90.00 on 2020-01-01"


def test_round_trip_conversion(registry) -> None:
    """Converting there and back should recover the quantity."""
    eur = registry.get("CURRENCY:EUR")
    gbp = registry.register("CURRENCY:GBP", namespace="CURRENCY")
    gbp.exchange_rate.set(JAN_1, Decimal("1.2"))
    original = CommodityAmount(Decimal("123.45"), eur, JAN_1)

    restored = original.convert_to(gbp).convert_to(eur)

    assert restored.commodity is eur
    assert abs(restored.quantity - original.quantity) < Decimal("1e-20")


def test_adding_different_commodities_raises(registry) -> None:
    """Amounts in different commodities cannot be added directly."""
    usd = registry.get("CURRENCY:USD")
    eur = registry.get("CURRENCY:EUR")

    with pytest.raises(ArithmeticMismatchError):
        CommodityAmount(Decimal("50"), usd, JAN_1) + CommodityAmount(
            Decimal("20"), eur, JAN_1
        )


def test_addition_keeps_common_timepoint_only(registry) -> None:
    """Timepoints survive only when both operands agree."""
    usd = registry.get("CURRENCY:USD")
    first = CommodityAmount(Decimal("1"), usd, JAN_1)

    same = first + CommodityAmount(Decimal("2"), usd, JAN_1)
    other = first - CommodityAmount(Decimal("2"), usd, date(2020, 1, 2))

    assert same == CommodityAmount(Decimal("3"), usd, JAN_1)
    assert other.quantity == Decimal("-1")
    assert other.timepoint is None


def test_zero_is_additive_identity(registry) -> None:
    """ZERO should vanish in sums and compare equal to 0."""
    usd = registry.get("CURRENCY:USD")
    amount = CommodityAmount(Decimal("7"), usd, JAN_1)

    assert ZERO + amount is amount
    assert amount + ZERO is amount
    assert sum([amount, amount]) == CommodityAmount(Decimal("14"), usd, JAN_1)
    assert ZERO == 0
    assert not ZERO
    assert -ZERO is ZERO
    assert ZERO.convert_to(usd) == CommodityAmount(Decimal("0"), usd)


def test_scalar_arithmetic_keeps_commodity(registry) -> None:
    usd = registry.get("CURRENCY:USD")
    amount = CommodityAmount(Decimal("10"), usd, JAN_1)

    assert (amount * 3).quantity == Decimal("30")
    assert (2 * amount).quantity == Decimal("20")
    assert (amount / 4).quantity == Decimal("2.5")
    assert abs(-amount) == amount


def test_convert_without_timepoint_raises(registry) -> None:
    """Conversions need a timepoint; same-commodity ones do not."""
    usd = registry.get("CURRENCY:USD")
    eur = registry.get("CURRENCY:EUR")
    amount = CommodityAmount(Decimal("10"), eur)

    assert amount.convert_to(eur) is amount
    with pytest.raises(ArithmeticMismatchError):
        amount.convert_to(usd)


def test_amount_requires_commodity_and_aware_time(registry) -> None:
    usd = registry.get("CURRENCY:USD")

    with pytest.raises(InputError):
        CommodityAmount(Decimal("1"), None)
    with pytest.raises(InputError):
        CommodityAmount(Decimal("1"), usd, datetime(2020, 1, 1))


def test_multi_amount_with_zero_components_equals_zero(registry) -> None:
    """Cancelled components should disappear from the sum."""
    usd = registry.get("CURRENCY:USD")
    eur = registry.get("CURRENCY:EUR")
    multi = MultiCommodityAmount(timepoint=JAN_1)
    multi.add_in_place(Decimal("5"), usd)
    multi.add_in_place(Decimal("3"), eur)
    multi.add_in_place(Decimal("-5"), usd)
    multi.add_in_place(Decimal("-3"), eur)

    assert multi == 0
    assert len(multi) == 0
    assert list(multi) == []
    assert str(multi) == "0"


def test_multi_amount_sums_and_converts(registry) -> None:
    usd = registry.get("CURRENCY:USD")
    eur = registry.get("CURRENCY:EUR")
    multi = MultiCommodityAmount(timepoint=JAN_1)
    multi.add_in_place(CommodityAmount(Decimal("10"), usd, JAN_1))
    multi.add_in_place(CommodityAmount(Decimal("100"), eur, JAN_1))

    assert len(multi) == 2
    assert multi[usd] == Decimal("10")
    assert multi != 0
    assert multi.timepoint == JAN_1
    assert multi.convert_to(usd).quantity == Decimal("100.0")
    assert (multi - CommodityAmount(Decimal("10"), usd)).commodities() == [eur]
    assert (-multi)[eur] == Decimal("-100")

    with pytest.raises(ArithmeticMismatchError):
        multi == 5


def test_multi_amount_clears_timepoint_on_mismatch(registry) -> None:
    usd = registry.get("CURRENCY:USD")
    multi = MultiCommodityAmount(timepoint=JAN_1)

    multi.add_in_place(CommodityAmount(Decimal("1"), usd, date(2020, 2, 1)))

    assert multi.timepoint is None
    with pytest.raises(TypeError):
        multi.add_in_place("not an amount")


def test_with_timepoint_moves_amount_in_time(registry) -> None:
    usd = registry.get("CURRENCY:USD")
    amount = CommodityAmount(Decimal("3"), usd)

    moved = amount.with_timepoint(date(2020, 1, 1))

    assert moved.timepoint == JAN_1
    assert moved.quantity == Decimal("3")
    assert amount.timepoint is None
    assert ZERO.with_timepoint(JAN_1) is ZERO


def test_multi_amount_in_place_transforms(registry) -> None:
    """Negate, scale and apply should act on every component."""
    usd = registry.get("CURRENCY:USD")
    eur = registry.get("CURRENCY:EUR")
    multi = MultiCommodityAmount(timepoint=JAN_1)
    multi.add_in_place(Decimal("2"), usd)
    multi.add_in_place(Decimal("-3"), eur)

    multi.negate_in_place()
    multi.scale_in_place(2)
    multi.apply_in_place(lambda quantity: quantity + 1)

    assert multi[usd] == Decimal("-3")
    assert multi[eur] == Decimal("7")
    assert multi.timepoint == JAN_1


def test_multi_amount_apply_returns_copy(registry) -> None:
    usd = registry.get("CURRENCY:USD")
    multi = MultiCommodityAmount()
    multi.add_in_place(Decimal("-4"), usd)

    result = multi.apply(abs)

    assert result[usd] == Decimal("4")
    assert multi[usd] == Decimal("-4")


def test_find_by_mnemonic_prefers_currencies() -> None:
    """A currency should win over a security sharing its mnemonic."""
    registry = CommodityRegistry("CURRENCY:EUR")
    registry.register("NASDAQ:EUR", namespace="NASDAQ", mnemonic="EUR")
    eur = registry.register(
        "CURRENCY:EUR",
        namespace="CURRENCY",
        mnemonic="EUR",
    )
    acme = registry.register(
        "NASDAQ:ACME",
        namespace="NASDAQ",
        mnemonic="ACME",
    )

    assert registry.find_by_mnemonic("eur") is eur
    assert registry.find_by_mnemonic(" ACME ") is acme
    with pytest.raises(LedgerLookupError):
        registry.find_by_mnemonic("GBP")
