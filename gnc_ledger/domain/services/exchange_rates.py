"""Time-keyed exchange-rate curve with interpolation policies."""

from bisect import bisect_left
from collections.abc import Iterator
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum

from gnc_ledger.domain.errors import InputError, LedgerLookupError
from gnc_ledger.domain.services.dates import require_utc
from gnc_ledger.utils.decimal_utils import coerce_decimal

_TICK = timedelta(microseconds=1)


class Interpolation(Enum):
    """How ``ExchangeRateCurve.get`` resolves a time between samples."""

    EXACT = "exact"
    NEAREST = "nearest"
    NEAREST_BEFORE = "nearest_before"
    NEAREST_AFTER = "nearest_after"
    LINEAR = "linear"


class ExchangeRateCurve:
    """Sorted series of UTC timepoints to rates.

    Extrapolation always uses the single available neighbour, so the samples
    ``5, 8, 12`` read as ``5, 5, 5, 8, 12, 12, 12`` outside their range.
    """

    def __init__(self) -> None:
        self._times: list[datetime] = []
        self._rates: dict[datetime, Decimal] = {}

    def set(self, time: datetime, rate) -> None:
        """Insert a sample, overwriting any sample at the same instant.

        Args:
            time: UTC timepoint of the sample.
            rate: Rate value; anything ``coerce_decimal`` accepts.

        Raises:
            InputError: If ``time`` is not a UTC datetime, or ``rate`` is not
                positive.
        """
        require_utc(time, "exchange-rate sample time")
        value = coerce_decimal(rate)
        if value <= 0:
            raise InputError(f"Exchange rate must be positive, got {value}")
        if time not in self._rates:
            self._times.insert(bisect_left(self._times, time), time)
        self._rates[time] = value

    def __setitem__(self, time: datetime, rate) -> None:
        self.set(time, rate)

    def __getitem__(self, time: datetime) -> Decimal:
        return self.get(time, Interpolation.EXACT)

    def get(
        self,
        time: datetime,
        mode: Interpolation = Interpolation.LINEAR,
    ) -> Decimal:
        """Return the rate at ``time`` under the given interpolation mode.

        Args:
            time: UTC timepoint to query.
            mode: Interpolation policy between samples.

        Returns:
            Decimal: Stored, nearest, or interpolated rate.

        Raises:
            InputError: If ``time`` is not a UTC datetime.
            LedgerLookupError: If the curve is empty, or ``mode`` is EXACT and
                no sample exists at ``time``.
        """
        require_utc(time, "exchange-rate query time")
        if not self._times:
            raise LedgerLookupError(
                "Cannot get a value from an empty exchange-rate curve"
            )
        if mode is Interpolation.EXACT:
            try:
                return self._rates[time]
            except KeyError:
                raise LedgerLookupError(
                    f"No exchange-rate sample at {time.isoformat()}"
                ) from None

        if time in self._rates:
            return self._rates[time]
        right = bisect_left(self._times, time)
        if right == 0:
            return self._rates[self._times[0]]
        if right == len(self._times):
            return self._rates[self._times[-1]]

        left_time = self._times[right - 1]
        right_time = self._times[right]
        left_rate = self._rates[left_time]
        right_rate = self._rates[right_time]

        if mode is Interpolation.NEAREST_BEFORE:
            return left_rate
        if mode is Interpolation.NEAREST_AFTER:
            return right_rate
        if mode is Interpolation.NEAREST:
            span_left = time - left_time
            span_right = right_time - time
            return left_rate if span_left <= span_right else right_rate
        if mode is Interpolation.LINEAR:
            span_left = Decimal((time - left_time) // _TICK)
            span_right = Decimal((right_time - time) // _TICK)
            return left_rate + (right_rate - left_rate) * span_left / (
                span_left + span_right
            )
        raise NotImplementedError(f"Unsupported interpolation mode: {mode}")

    def first(self) -> tuple[datetime, Decimal]:
        """Return the earliest sample."""
        if not self._times:
            raise LedgerLookupError("Exchange-rate curve is empty")
        return self._times[0], self._rates[self._times[0]]

    def last(self) -> tuple[datetime, Decimal]:
        """Return the latest sample."""
        if not self._times:
            raise LedgerLookupError("Exchange-rate curve is empty")
        return self._times[-1], self._rates[self._times[-1]]

    def __iter__(self) -> Iterator[tuple[datetime, Decimal]]:
        for time in self._times:
            yield time, self._rates[time]

    def __len__(self) -> int:
        return len(self._times)

    def __contains__(self, time) -> bool:
        return time in self._rates

    def __repr__(self) -> str:
        return f"ExchangeRateCurve(samples={len(self._times)})"


__all__ = ["ExchangeRateCurve", "Interpolation"]
