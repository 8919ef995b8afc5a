"""Single- and multi-commodity amounts.

An amount is either ``ZERO``, the commodity-less additive identity, or a
``CommodityAmount`` carrying a quantity, a commodity and an optional UTC
timepoint. The timepoint is what makes conversion between commodities
possible: rates are read from each commodity's exchange-rate curve at that
instant.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Union

from gnc_ledger.domain.errors import ArithmeticMismatchError, InputError
from gnc_ledger.domain.models.commodities import Commodity
from gnc_ledger.domain.services.dates import to_utc_datetime
from gnc_ledger.domain.services.exchange_rates import Interpolation
from gnc_ledger.utils.decimal_utils import coerce_decimal

_CURRENCY_FORMATS = {
    "GBP": "£{quantity}{when}",
    "EUR": "€{quantity}{when}",
    "USD": "${quantity}{when}",
}


def _is_scalar(value) -> bool:
    return isinstance(value, (Decimal, int)) and not isinstance(value, bool)


def _rate_to_base(commodity: Commodity, timepoint: datetime) -> Decimal:
    if commodity.is_base_currency:
        return Decimal("1")
    return commodity.exchange_rate.get(timepoint, Interpolation.LINEAR)


class ZeroAmount:
    """The commodity-less zero. Adding it to any amount is a no-op."""

    __slots__ = ()
    _instance: ZeroAmount | None = None

    def __new__(cls) -> ZeroAmount:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    quantity = Decimal("0")
    commodity = None
    timepoint = None

    def __add__(self, other):
        if isinstance(other, (ZeroAmount, CommodityAmount)):
            return other
        if _is_scalar(other) and other == 0:
            return self
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, (ZeroAmount, CommodityAmount)):
            return -other
        if _is_scalar(other) and other == 0:
            return self
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, (ZeroAmount, CommodityAmount)):
            return other
        if _is_scalar(other) and other == 0:
            return self
        return NotImplemented

    def __neg__(self) -> ZeroAmount:
        return self

    def __abs__(self) -> ZeroAmount:
        return self

    def __mul__(self, other):
        if _is_scalar(other):
            return self
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if _is_scalar(other):
            return self
        return NotImplemented

    def __eq__(self, other) -> bool:
        if isinstance(other, ZeroAmount):
            return True
        if _is_scalar(other):
            return other == 0
        return NotImplemented

    def __hash__(self) -> int:
        return hash(Decimal("0"))

    def __bool__(self) -> bool:
        return False

    def with_timepoint(self, timepoint: datetime | None) -> ZeroAmount:
        return self

    def convert_to(self, target: Commodity) -> CommodityAmount:
        """Return a zero quantity of ``target``."""
        return CommodityAmount(Decimal("0"), target)

    def __repr__(self) -> str:
        return "ZERO"

    __str__ = __repr__


ZERO = ZeroAmount()


@dataclass(frozen=True)
class CommodityAmount:
    """A quantity of one commodity, optionally pinned to a UTC timepoint.

    Arithmetic between two amounts requires the same commodity and keeps the
    timepoint only when both operands agree on it. Scalar multiplication and
    division keep both commodity and timepoint.
    """

    quantity: Decimal
    commodity: Commodity
    timepoint: datetime | None = None

    def __post_init__(self) -> None:
        if self.commodity is None:
            raise InputError(
                "CommodityAmount requires a commodity; use ZERO for the "
                "commodity-less zero"
            )
        object.__setattr__(self, "quantity", coerce_decimal(self.quantity))
        if self.timepoint is not None:
            object.__setattr__(
                self,
                "timepoint",
                to_utc_datetime(self.timepoint),
            )

    def with_timepoint(self, timepoint: datetime | None) -> CommodityAmount:
        """Return the same quantity and commodity at another timepoint."""
        return CommodityAmount(self.quantity, self.commodity, timepoint)

    def _combine(self, other: CommodityAmount, quantity: Decimal, verb: str):
        if other.commodity is not self.commodity:
            raise ArithmeticMismatchError(
                f"Cannot {verb} amounts because commodities differ: "
                f"{self.commodity} and {other.commodity}"
            )
        timepoint = (
            self.timepoint if self.timepoint == other.timepoint else None
        )
        return CommodityAmount(quantity, self.commodity, timepoint)

    def __add__(self, other):
        if isinstance(other, ZeroAmount):
            return self
        if isinstance(other, CommodityAmount):
            return self._combine(other, self.quantity + other.quantity, "add")
        return NotImplemented

    def __radd__(self, other):
        # Lets ``sum()`` start from the integer 0.
        if _is_scalar(other) and other == 0:
            return self
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, ZeroAmount):
            return self
        if isinstance(other, CommodityAmount):
            return self._combine(
                other,
                self.quantity - other.quantity,
                "subtract",
            )
        return NotImplemented

    def __rsub__(self, other):
        if _is_scalar(other) and other == 0:
            return -self
        return NotImplemented

    def __neg__(self) -> CommodityAmount:
        return CommodityAmount(-self.quantity, self.commodity, self.timepoint)

    def __abs__(self) -> CommodityAmount:
        return CommodityAmount(abs(self.quantity), self.commodity, self.timepoint)

    def __mul__(self, other):
        if _is_scalar(other):
            return CommodityAmount(
                self.quantity * other,
                self.commodity,
                self.timepoint,
            )
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if _is_scalar(other):
            return CommodityAmount(
                self.quantity / other,
                self.commodity,
                self.timepoint,
            )
        return NotImplemented

    def __bool__(self) -> bool:
        return self.quantity != 0

    def convert_to(self, target: Commodity) -> CommodityAmount:
        """Convert to another commodity at this amount's timepoint.

        Args:
            target: Commodity to express the amount in.

        Returns:
            CommodityAmount: Converted amount carrying the same timepoint.

        Raises:
            ArithmeticMismatchError: If a conversion is needed and the amount
                has no timepoint.
            LedgerLookupError: If a required exchange-rate curve is empty.
        """
        if target is self.commodity:
            return self
        if self.timepoint is None:
            raise ArithmeticMismatchError(
                f"Cannot convert {self} to {target} because it has no timepoint"
            )
        from_rate = _rate_to_base(self.commodity, self.timepoint)
        to_rate = _rate_to_base(target, self.timepoint)
        return CommodityAmount(
            self.quantity * from_rate / to_rate,
            target,
            self.timepoint,
        )

    def __str__(self) -> str:
        when = ""
        if self.timepoint is not None:
            when = f" on {self.timepoint.date().isoformat()}"
        mnemonic = self.commodity.mnemonic or self.commodity.identifier
        template = _CURRENCY_FORMATS.get(mnemonic)
        if template is not None:
            return template.format(quantity=f"{self.quantity:,.2f}", when=when)
        if mnemonic == "UAH":
            return f"{self.quantity:,.0f} грн{when}"
        return f"{mnemonic} {self.quantity:,.2f}{when}"


Amount = Union[ZeroAmount, CommodityAmount]


class MultiCommodityAmount:
    """A sparse sum of quantities across several commodities.

    Iteration and ``len()`` only see non-zero components, so an instance
    whose components are all zero has length 0 and equals the literal ``0``.
    Equality ignores the timepoint. Operators return new instances; hot loops
    should use the ``*_in_place`` methods instead.
    """

    def __init__(
        self,
        quantities: dict[Commodity, Decimal] | None = None,
        timepoint: datetime | None = None,
    ) -> None:
        self._quantities: dict[Commodity, Decimal] = {}
        for commodity, quantity in (quantities or {}).items():
            self._quantities[commodity] = coerce_decimal(quantity)
        self.timepoint = (
            to_utc_datetime(timepoint) if timepoint is not None else None
        )

    @classmethod
    def from_amount(cls, amount: Amount) -> MultiCommodityAmount:
        if isinstance(amount, ZeroAmount) or amount.quantity == 0:
            return cls(timepoint=amount.timepoint)
        return cls({amount.commodity: amount.quantity}, amount.timepoint)

    def copy(self) -> MultiCommodityAmount:
        result = MultiCommodityAmount()
        result._quantities = dict(self._quantities)
        result.timepoint = self.timepoint
        return result

    def _components(self) -> Iterator[CommodityAmount]:
        for commodity, quantity in self._quantities.items():
            if quantity != 0:
                yield CommodityAmount(quantity, commodity, self.timepoint)

    def __iter__(self) -> Iterator[CommodityAmount]:
        return self._components()

    def __len__(self) -> int:
        return sum(1 for quantity in self._quantities.values() if quantity != 0)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __getitem__(self, commodity: Commodity) -> Decimal:
        return self._quantities.get(commodity, Decimal("0"))

    def commodities(self) -> list[Commodity]:
        """Return the commodities with a non-zero quantity."""
        return [amount.commodity for amount in self]

    def add_in_place(self, other, commodity: Commodity | None = None) -> None:
        """Add an amount, a multi-amount, or a raw quantity of ``commodity``.

        Adding an amount with a different timepoint clears this timepoint.
        Raw quantities leave the timepoint untouched.
        """
        if commodity is not None:
            self._quantities[commodity] = (
                self._quantities.get(commodity, Decimal("0"))
                + coerce_decimal(other)
            )
            return
        if isinstance(other, ZeroAmount):
            return
        if isinstance(other, CommodityAmount):
            self._quantities[other.commodity] = (
                self._quantities.get(other.commodity, Decimal("0"))
                + other.quantity
            )
        elif isinstance(other, MultiCommodityAmount):
            for key, quantity in other._quantities.items():
                self._quantities[key] = (
                    self._quantities.get(key, Decimal("0")) + quantity
                )
        else:
            raise TypeError(
                f"Cannot add {type(other).__name__} to MultiCommodityAmount"
            )
        if self.timepoint != other.timepoint:
            self.timepoint = None

    def negate_in_place(self) -> None:
        for commodity in list(self._quantities):
            self._quantities[commodity] = -self._quantities[commodity]

    def scale_in_place(self, factor) -> None:
        factor = coerce_decimal(factor)
        for commodity in list(self._quantities):
            self._quantities[commodity] *= factor

    def apply_in_place(self, func: Callable[[Decimal], Decimal]) -> None:
        """Replace every quantity ``q`` with ``func(q)``."""
        for commodity in list(self._quantities):
            self._quantities[commodity] = func(self._quantities[commodity])

    def apply(self, func: Callable[[Decimal], Decimal]) -> MultiCommodityAmount:
        result = self.copy()
        result.apply_in_place(func)
        return result

    def __add__(self, other):
        if not isinstance(
            other,
            (ZeroAmount, CommodityAmount, MultiCommodityAmount),
        ):
            if _is_scalar(other) and other == 0:
                return self.copy()
            return NotImplemented
        result = self.copy()
        result.add_in_place(other)
        return result

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, MultiCommodityAmount):
            negated = other.copy()
            negated.negate_in_place()
            return self + negated
        if isinstance(other, (ZeroAmount, CommodityAmount)):
            return self + (-other)
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, (ZeroAmount, CommodityAmount)):
            return MultiCommodityAmount.from_amount(other) - self
        return NotImplemented

    def __neg__(self) -> MultiCommodityAmount:
        result = self.copy()
        result.negate_in_place()
        return result

    def __mul__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        result = self.copy()
        result.scale_in_place(other)
        return result

    __rmul__ = __mul__

    def __eq__(self, other) -> bool:
        if isinstance(other, (ZeroAmount, CommodityAmount)):
            other = MultiCommodityAmount.from_amount(other)
        if isinstance(other, MultiCommodityAmount):
            return self._non_zero() == other._non_zero()
        if _is_scalar(other):
            if other != 0:
                raise ArithmeticMismatchError(
                    "A MultiCommodityAmount can only be compared to the number 0"
                )
            return len(self) == 0
        return NotImplemented

    __hash__ = None

    def _non_zero(self) -> dict[Commodity, Decimal]:
        return {
            commodity: quantity
            for commodity, quantity in self._quantities.items()
            if quantity != 0
        }

    def convert_to(self, target: Commodity) -> CommodityAmount:
        """Convert every component to ``target`` and sum the results.

        Raises:
            ArithmeticMismatchError: If a component needs conversion and this
                amount has no timepoint.
        """
        result: Amount = CommodityAmount(Decimal("0"), target, self.timepoint)
        for amount in self:
            result = result + amount.convert_to(target)
        return result

    def __str__(self) -> str:
        parts = [str(amount) for amount in self]
        return " + ".join(parts) if parts else "0"

    def __repr__(self) -> str:
        components = ", ".join(
            f"{commodity.identifier}={quantity}"
            for commodity, quantity in self._non_zero().items()
        )
        return f"MultiCommodityAmount({components}, timepoint={self.timepoint})"


__all__ = [
    "Amount",
    "ZERO",
    "ZeroAmount",
    "CommodityAmount",
    "MultiCommodityAmount",
]
