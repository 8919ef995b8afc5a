"""Serializable account figures returned by use cases."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class AccountBalanceDTO:
    """Account balance converted to a target currency."""

    guid: str
    full_name: str
    account_type: str
    depth: int
    balance: Decimal
    currency_code: str


@dataclass(frozen=True)
class AccountTotalDTO:
    """Interval total of an account with its debit and credit legs.

    Attributes:
        full_name: Account path below the root.
        interval: Interval rendered as ``YYYY-MM-DD..YYYY-MM-DD``.
        total: Net movement within the interval.
        debit: Sum of increases.
        credit: Sum of decreases, as a positive number.
        currency_code: Currency mnemonic of the figures.
    """

    full_name: str
    interval: str
    total: Decimal
    debit: Decimal
    credit: Decimal
    currency_code: str


__all__ = ["AccountBalanceDTO", "AccountTotalDTO"]
