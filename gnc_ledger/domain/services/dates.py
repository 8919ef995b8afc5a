"""UTC date helpers used by the ledger engine."""

import calendar
from datetime import date, datetime, time, timedelta, timezone

from gnc_ledger.domain.errors import InputError, ParseError

_GNC_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S%z",
    "%Y-%m-%d %H:%M:%S",
    "%Y%m%d%H%M%S",
    "%Y-%m-%d",
)


def is_utc(value: datetime) -> bool:
    """Return True when ``value`` is timezone-aware with a zero UTC offset."""
    return value.tzinfo is not None and value.utcoffset() == timedelta(0)


def require_utc(value: datetime, what: str = "time") -> datetime:
    """Return ``value`` unchanged or raise if it is not a UTC datetime.

    Raises:
        InputError: If ``value`` is naive or carries a non-zero offset.
    """
    if not isinstance(value, datetime) or not is_utc(value):
        raise InputError(f"The {what} must be a UTC datetime, got {value!r}")
    return value


def utc_midnight(day: date) -> datetime:
    """Return midnight UTC of the given calendar day."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def to_utc_datetime(value) -> datetime:
    """Normalize a date or an aware datetime to a UTC datetime.

    Plain dates map to midnight UTC. Aware datetimes are converted to UTC.

    Raises:
        InputError: If ``value`` is a naive datetime or not a date at all.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise InputError(f"Naive datetime is not accepted: {value!r}")
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return utc_midnight(value)
    raise InputError(f"Expected a date or datetime, got {value!r}")


def to_utc_day(value) -> datetime:
    """Truncate a date or aware datetime to midnight UTC of its UTC day."""
    return utc_midnight(to_utc_datetime(value).date())


def parse_gnc_date(value) -> datetime:
    """Parse a GnuCash posting date into midnight UTC of the intended day.

    GnuCash writes posting dates as a date with a zeroed time and a local
    offset, which some versions shift into the previous evening. Times at or
    after 20:00 therefore belong to the following day.

    Args:
        value: Timestamp string, date or datetime.

    Returns:
        datetime: Midnight UTC of the posting day.

    Raises:
        ParseError: If the string matches none of the known formats.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return utc_midnight(value)
    else:
        parsed = _parse_timestamp(str(value))
    if parsed.hour >= 20:
        return utc_midnight((parsed + timedelta(hours=12)).date())
    return utc_midnight(parsed.date())


def parse_gnc_timestamp(value) -> datetime:
    """Parse a GnuCash entry timestamp into an aware UTC datetime.

    Naive values are taken to be UTC, which is how the SQL backend stores them.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return utc_midnight(value)
    else:
        parsed = _parse_timestamp(str(value))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _parse_timestamp(text: str) -> datetime:
    cleaned = text.strip()
    for fmt in _GNC_DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(cleaned)
    except ValueError as exc:
        raise ParseError(f'Cannot parse GnuCash date: "{text}"') from exc


def start_of_month(value: datetime) -> datetime:
    """Return the same time of day on the first day of the month."""
    return value.replace(day=1)


def end_of_month(value: datetime) -> datetime:
    """Return the same time of day on the last day of the month."""
    last_day = calendar.monthrange(value.year, value.month)[1]
    return value.replace(day=last_day)


__all__ = [
    "is_utc",
    "require_utc",
    "utc_midnight",
    "to_utc_datetime",
    "to_utc_day",
    "parse_gnc_date",
    "parse_gnc_timestamp",
    "start_of_month",
    "end_of_month",
]
