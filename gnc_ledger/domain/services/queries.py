"""Balance and total queries over a loaded book.

Point-in-time queries include every split whose posting date is on or before
``as_of``. Interval queries include splits whose posting day lies inside the
interval, both ends inclusive. Native sums are read from the balance cache as
the difference of two running balances; converted sums convert each split at
its own posting date before adding.
"""

from bisect import bisect_left, bisect_right
from collections.abc import Iterator
from datetime import datetime, timedelta
from decimal import Decimal

from gnc_ledger.domain.models.amounts import (
    ZERO,
    Amount,
    CommodityAmount,
    MultiCommodityAmount,
)
from gnc_ledger.domain.models.book import Book
from gnc_ledger.domain.models.commodities import Commodity
from gnc_ledger.domain.models.intervals import DateInterval
from gnc_ledger.domain.models.ledger import Account, Split
from gnc_ledger.domain.services.dates import to_utc_datetime


def _subtree(book: Book, account: Account) -> Iterator[Account]:
    yield account
    yield from book.iter_accounts(account)


def _range_until(
    book: Book,
    account: Account,
    as_of: datetime,
) -> tuple[int, int]:
    return 0, bisect_right(book.index.post_dates(account.guid), as_of)


def _range_within(
    book: Book,
    account: Account,
    interval: DateInterval,
) -> tuple[int, int]:
    dates = book.index.post_dates(account.guid)
    low = bisect_left(dates, interval.start)
    high = bisect_left(dates, interval.end + timedelta(days=1))
    return low, high


def _native_sum(book: Book, account: Account, low: int, high: int) -> Decimal:
    if high <= low:
        return Decimal("0")
    splits = book.index.splits(account.guid)
    total = book.cache.balance_after(splits[high - 1])
    if low > 0:
        total -= book.cache.balance_after(splits[low - 1])
    return total


def _splits_between(
    book: Book,
    account: Account,
    low: int,
    high: int,
) -> list[Split]:
    return book.index.splits(account.guid)[low:high]


def _native_amount(
    account: Account,
    quantity: Decimal,
    timepoint: datetime | None,
) -> Amount:
    if account.commodity is None:
        return ZERO
    return CommodityAmount(quantity, account.commodity, timepoint)


def _converted_sum(
    book: Book,
    splits: list[Split],
    target: Commodity,
) -> Decimal:
    total = Decimal("0")
    for split in splits:
        amount = book.split_amount(split)
        if amount is ZERO:
            continue
        total += amount.convert_to(target).quantity
    return total


def balance(book: Book, account: Account, as_of) -> Amount:
    """Sum of the account's own splits posted on or before ``as_of``.

    Args:
        book: Loaded book.
        account: Account to aggregate.
        as_of: Date or aware datetime; dates mean midnight UTC.

    Returns:
        Amount: Balance in the account's commodity, tagged with ``as_of``.
    """
    as_of_utc = to_utc_datetime(as_of)
    low, high = _range_until(book, account, as_of_utc)
    return _native_amount(
        account,
        _native_sum(book, account, low, high),
        as_of_utc,
    )


def balance_with_subaccounts(
    book: Book,
    account: Account,
    as_of,
) -> MultiCommodityAmount:
    """Like ``balance`` but merged across the whole account subtree."""
    as_of_utc = to_utc_datetime(as_of)
    result = MultiCommodityAmount(timepoint=as_of_utc)
    for current in _subtree(book, account):
        if current.commodity is None:
            continue
        low, high = _range_until(book, current, as_of_utc)
        result.add_in_place(
            _native_sum(book, current, low, high),
            current.commodity,
        )
    return result


def balance_converted(
    book: Book,
    account: Account,
    as_of,
    target: Commodity,
    *,
    include_subaccounts: bool = False,
) -> CommodityAmount:
    """Balance with every split converted to ``target`` at its post date."""
    as_of_utc = to_utc_datetime(as_of)
    accounts = (
        _subtree(book, account) if include_subaccounts else iter((account,))
    )
    converted = Decimal("0")
    for current in accounts:
        low, high = _range_until(book, current, as_of_utc)
        converted += _converted_sum(
            book,
            _splits_between(book, current, low, high),
            target,
        )
    return CommodityAmount(converted, target, as_of_utc)


def total(book: Book, account: Account, interval: DateInterval) -> Amount:
    """Sum of the account's own splits posted within ``interval``."""
    low, high = _range_within(book, account, interval)
    return _native_amount(account, _native_sum(book, account, low, high), None)


def total_with_subaccounts(
    book: Book,
    account: Account,
    interval: DateInterval,
) -> MultiCommodityAmount:
    """Like ``total`` but merged across the whole account subtree."""
    result = MultiCommodityAmount()
    for current in _subtree(book, account):
        if current.commodity is None:
            continue
        low, high = _range_within(book, current, interval)
        result.add_in_place(
            _native_sum(book, current, low, high),
            current.commodity,
        )
    return result


def total_converted(
    book: Book,
    account: Account,
    interval: DateInterval,
    target: Commodity,
    *,
    include_subaccounts: bool = False,
) -> CommodityAmount:
    """Interval total with every split converted to ``target``."""
    accounts = (
        _subtree(book, account) if include_subaccounts else iter((account,))
    )
    result = Decimal("0")
    for current in accounts:
        low, high = _range_within(book, current, interval)
        result += _converted_sum(
            book,
            _splits_between(book, current, low, high),
            target,
        )
    return CommodityAmount(result, target)


def _signed_total(
    book: Book,
    account: Account,
    interval: DateInterval,
    target: Commodity,
    include_subaccounts: bool,
    sign: int,
) -> CommodityAmount:
    accounts = (
        _subtree(book, account) if include_subaccounts else iter((account,))
    )
    result = Decimal("0")
    for current in accounts:
        low, high = _range_within(book, current, interval)
        picked = [
            split
            for split in _splits_between(book, current, low, high)
            if split.quantity * sign > 0
        ]
        result += _converted_sum(book, picked, target) * sign
    return CommodityAmount(result, target)


def total_debit(
    book: Book,
    account: Account,
    interval: DateInterval,
    target: Commodity,
    *,
    include_subaccounts: bool = False,
) -> CommodityAmount:
    """Sum of positive split quantities within ``interval``, in ``target``.

    Debits are picked and summed by ``quantity`` in the account's commodity,
    each split converted at its own post date. This departs from summing the
    split ``value`` in the transaction currency; the two differ whenever the
    transaction currency is not the account commodity and the booked value
    disagrees with the price history.
    """
    return _signed_total(
        book,
        account,
        interval,
        target,
        include_subaccounts,
        1,
    )


def total_credit(
    book: Book,
    account: Account,
    interval: DateInterval,
    target: Commodity,
    *,
    include_subaccounts: bool = False,
) -> CommodityAmount:
    """Sum of negated negative split quantities within ``interval``.

    Uses ``quantity`` rather than ``value``, like ``total_debit``.
    """
    return _signed_total(
        book,
        account,
        interval,
        target,
        include_subaccounts,
        -1,
    )


__all__ = [
    "balance",
    "balance_with_subaccounts",
    "balance_converted",
    "total",
    "total_with_subaccounts",
    "total_converted",
    "total_debit",
    "total_credit",
]
