"""Inclusive date intervals truncated to whole UTC days."""

import calendar
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta

from gnc_ledger.domain.services.dates import to_utc_day, utc_midnight


@dataclass(frozen=True, init=False)
class DateInterval:
    """Days from ``start`` to ``end``, both inclusive, as midnight UTC."""

    start: datetime
    end: datetime

    def __init__(self, start, end) -> None:
        object.__setattr__(self, "start", to_utc_day(start))
        object.__setattr__(self, "end", to_utc_day(end))

    def contains(self, value) -> bool:
        """Return True when the UTC day of ``value`` lies in the interval."""
        day = to_utc_day(value)
        return self.start <= day <= self.end

    __contains__ = contains

    def iter_months(self) -> Iterator["DateInterval"]:
        """Yield consecutive month-aligned sub-intervals covering this one.

        The first piece starts at ``start``; every piece ends on the last day
        of its month, so the final piece may extend past ``end``.
        """
        current = self.start
        while current <= self.end:
            year, month = current.year, current.month + 1
            if month > 12:
                year, month = year + 1, 1
            next_start = utc_midnight(
                current.date().replace(year=year, month=month, day=1)
            )
            yield DateInterval(current, next_start - timedelta(days=1))
            current = next_start

    @property
    def total_months(self) -> float:
        """Length in months, counting partial months by their day share."""
        start_days = calendar.monthrange(self.start.year, self.start.month)[1]
        end_days = calendar.monthrange(self.end.year, self.end.month)[1]
        months = float(
            (self.end.year * 12 + self.end.month)
            - (self.start.year * 12 + self.start.month)
            + 1
        )
        months -= (self.start.day - 1) / start_days
        months -= (end_days - self.end.day) / end_days
        return months

    def __str__(self) -> str:
        return f"{self.start:%Y-%m-%d}..{self.end:%Y-%m-%d}"


__all__ = ["DateInterval"]
