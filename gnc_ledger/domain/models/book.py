"""The book: owner of every ledger entity, the split index and the cache."""

import threading
from collections.abc import Iterable, Iterator
from datetime import datetime

from gnc_ledger.domain.errors import IntegrityError, LedgerLookupError
from gnc_ledger.domain.models.amounts import ZERO, Amount, CommodityAmount
from gnc_ledger.domain.models.commodities import Commodity, CommodityRegistry
from gnc_ledger.domain.models.ledger import Account, Split, Transaction
from gnc_ledger.domain.services.balance_cache import BalanceCache
from gnc_ledger.domain.services.ledger_index import LedgerIndex


class Book:
    """Immutable ledger data plus the derived index and balance cache.

    Entities are created once at load time. The only state that changes
    afterwards is the balance cache, guarded by a lock owned by the book.
    """

    def __init__(
        self,
        commodities: CommodityRegistry,
        accounts: Iterable[Account],
        transactions: Iterable[Transaction],
        guid: str | None = None,
    ) -> None:
        self.guid = guid
        self.commodities = commodities
        self._accounts: dict[str, Account] = {}
        self._transactions: dict[str, Transaction] = {}
        self._splits: dict[str, Split] = {}
        for account in accounts:
            if account.guid in self._accounts:
                raise IntegrityError(f"Duplicate account guid: {account.guid}")
            self._accounts[account.guid] = account
        for transaction in transactions:
            if transaction.guid in self._transactions:
                raise IntegrityError(
                    f"Duplicate transaction guid: {transaction.guid}"
                )
            self._transactions[transaction.guid] = transaction
            for split in transaction.splits:
                if split.guid in self._splits:
                    raise IntegrityError(f"Duplicate split guid: {split.guid}")
                self._splits[split.guid] = split
        self._lock = threading.RLock()
        self.index = LedgerIndex()
        self.cache = BalanceCache(self.index, self._lock)
        self.reindex()

    def reindex(self) -> None:
        """Rebuild the split index from scratch and drop cached balances."""
        with self._lock:
            self.index.rebuild(self._accounts, self._transactions.values())
            self.cache = BalanceCache(self.index, self._lock)

    @property
    def root(self) -> Account | None:
        return self.index.root

    @property
    def base_currency(self) -> Commodity:
        return self.commodities.base_currency

    def get_commodity(self, identifier: str) -> Commodity:
        return self.commodities.get(identifier)

    def get_account(self, guid: str) -> Account:
        try:
            return self._accounts[guid]
        except KeyError:
            raise LedgerLookupError(f"Unknown account: {guid}") from None

    def get_transaction(self, guid: str) -> Transaction:
        try:
            return self._transactions[guid]
        except KeyError:
            raise LedgerLookupError(f"Unknown transaction: {guid}") from None

    def get_split(self, guid: str) -> Split:
        try:
            return self._splits[guid]
        except KeyError:
            raise LedgerLookupError(f"Unknown split: {guid}") from None

    def find_account(self, full_name: str, separator: str = ":") -> Account:
        """Resolve an account from its path below the root.

        Raises:
            LedgerLookupError: If any path segment is missing.
        """
        current = self.root
        if current is None:
            raise LedgerLookupError(f"Unknown account: {full_name}")
        for name in full_name.split(separator):
            for child in self.index.children(current.guid):
                if child.name == name:
                    current = child
                    break
            else:
                raise LedgerLookupError(f"Unknown account: {full_name}")
        return current

    def parent(self, account: Account) -> Account | None:
        if account.parent_guid is None:
            return None
        return self.get_account(account.parent_guid)

    def depth(self, account: Account) -> int:
        """Return the number of ancestors; the root has depth 0."""
        depth = 0
        current = self.parent(account)
        while current is not None:
            depth += 1
            current = self.parent(current)
        return depth

    def full_name(self, account: Account, separator: str = ":") -> str:
        """Return the account path below the root, e.g. ``Assets:Checking``."""
        names = []
        current = account
        while current is not None and not current.is_root:
            names.append(current.name)
            current = self.parent(current)
        return separator.join(reversed(names))

    def iter_children(self, account: Account) -> Iterator[Account]:
        """Yield direct children sorted by name."""
        yield from self.index.children(account.guid)

    def iter_accounts(self, start: Account | None = None) -> Iterator[Account]:
        """Yield every account below ``start`` (default: root), depth first."""
        top = start or self.root
        if top is None:
            return
        for child in self.index.children(top.guid):
            yield child
            yield from self.iter_accounts(child)

    def iter_splits(self, account: Account) -> Iterator[Split]:
        """Yield the account's splits in global transaction order."""
        yield from self.index.splits(account.guid)

    def iter_transactions(self) -> Iterator[Transaction]:
        yield from self.index.transactions

    def transaction_of(self, split: Split) -> Transaction:
        return self.get_transaction(split.transaction_guid)

    def account_of(self, split: Split) -> Account:
        return self.get_account(split.account_guid)

    def split_amount(self, split: Split) -> Amount:
        """Quantity in the account's commodity, tagged with the post date."""
        account = self.account_of(split)
        if account.commodity is None:
            return ZERO
        return CommodityAmount(
            split.quantity,
            account.commodity,
            self.transaction_of(split).post_date,
        )

    def split_value(self, split: Split) -> CommodityAmount:
        """Value in the transaction's currency, tagged with the post date."""
        transaction = self.transaction_of(split)
        return CommodityAmount(
            split.value,
            transaction.currency,
            transaction.post_date,
        )

    def balance_after(self, split: Split) -> Amount:
        """Running balance of the split's account after this split."""
        account = self.account_of(split)
        balance = self.cache.balance_after(split)
        if account.commodity is None:
            return ZERO
        return CommodityAmount(
            balance,
            account.commodity,
            self.transaction_of(split).post_date,
        )

    def rebuild_balances(self) -> None:
        """Force the whole balance cache so later reads are lock-free."""
        self.cache.rebuild_all()

    def readable_description(self, split: Split) -> str:
        """Combine the split memo and the transaction description."""
        description = self.transaction_of(split).description or None
        memo = split.memo or None
        if description is None and memo is None:
            return "<???>"
        if description is None or description == memo:
            return memo
        if memo is None:
            return description
        return f"{memo} (({description}))"

    def earliest_date(self) -> datetime | None:
        transactions = self.index.transactions
        return transactions[0].post_date if transactions else None

    def latest_date(self) -> datetime | None:
        transactions = self.index.transactions
        return transactions[-1].post_date if transactions else None


__all__ = ["Book"]
