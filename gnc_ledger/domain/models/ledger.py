"""Immutable ledger entities: accounts, transactions and splits."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from gnc_ledger.domain.models.commodities import Commodity


@dataclass(frozen=True, eq=False)
class Account:
    """An account in the book's account tree.

    Attributes:
        guid: Unique account identifier.
        name: Account name, unique among its siblings.
        account_type: GnuCash account type (ROOT, BANK, EXPENSE, ...).
        commodity: Commodity the account's split quantities are held in.
        parent_guid: Parent account identifier, None for the root.
        commodity_scu: Smallest subdivision as a power of ten (100 = cents).
        description: Optional free-text description.
    """

    guid: str
    name: str
    account_type: str
    commodity: Commodity | None
    parent_guid: str | None = None
    commodity_scu: int = 100
    description: str | None = None

    @property
    def is_root(self) -> bool:
        return self.parent_guid is None


@dataclass(frozen=True, eq=False)
class Split:
    """One leg of a transaction.

    ``value`` is denominated in the transaction's currency and ``quantity``
    in the account's commodity.
    """

    guid: str
    transaction_guid: str
    account_guid: str
    value: Decimal
    quantity: Decimal
    memo: str | None = None
    reconcile_state: str = "n"


@dataclass(frozen=True, eq=False)
class Transaction:
    """A dated group of splits that should net to zero in ``currency``.

    Attributes:
        guid: Unique transaction identifier.
        currency: Commodity the split values are denominated in.
        post_date: Posting date as midnight UTC.
        enter_date: Entry timestamp in UTC.
        num: Free-form "num" token, often a cheque number.
        description: Transaction description.
        splits: The transaction's splits, in load order.
    """

    guid: str
    currency: Commodity
    post_date: datetime
    enter_date: datetime
    num: str = ""
    description: str | None = None
    splits: tuple[Split, ...] = field(default=())


__all__ = ["Account", "Split", "Transaction"]
