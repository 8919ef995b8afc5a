"""Per-account ordered split index and the account tree."""

from collections.abc import Iterable, Mapping
from datetime import datetime

from gnc_ledger.domain.errors import IntegrityError, LedgerLookupError
from gnc_ledger.domain.models.ledger import Account, Split, Transaction
from gnc_ledger.domain.services.ordering import transaction_sort_key


class LedgerIndex:
    """Splits grouped by account in global transaction order.

    ``rebuild`` replaces every grouping; nothing is updated incrementally.
    The sequences handed out are owned by the index and must not be mutated.
    """

    def __init__(self) -> None:
        self._root: Account | None = None
        self._children: dict[str, list[Account]] = {}
        self._transactions: list[Transaction] = []
        self._splits: dict[str, list[Split]] = {}
        self._post_dates: dict[str, list[datetime]] = {}
        self._positions: dict[str, int] = {}

    def rebuild(
        self,
        accounts: Mapping[str, Account],
        transactions: Iterable[Transaction],
    ) -> None:
        """Recompute the account tree and the per-account split order.

        Args:
            accounts: Accounts keyed by guid.
            transactions: All transactions of the book, in any order.

        Raises:
            IntegrityError: If more than one root account exists, or accounts
                exist but none of them is a root.
            LedgerLookupError: If a parent or split account is unknown.
        """
        self._rebuild_tree(accounts)
        self._rebuild_splits(accounts, transactions)

    def _rebuild_tree(self, accounts: Mapping[str, Account]) -> None:
        root = None
        children: dict[str, list[Account]] = {}
        for account in accounts.values():
            if account.parent_guid is None:
                if root is not None:
                    raise IntegrityError(
                        "Multiple root accounts found: "
                        f"{root.guid} and {account.guid}"
                    )
                root = account
                continue
            if account.parent_guid not in accounts:
                raise LedgerLookupError(
                    f"Account {account.guid} references unknown parent "
                    f"{account.parent_guid}"
                )
            children.setdefault(account.parent_guid, []).append(account)
        if root is None and accounts:
            raise IntegrityError("No root account found")
        for siblings in children.values():
            siblings.sort(key=lambda account: (account.name, account.guid))
        self._root = root
        self._children = children

    def _rebuild_splits(
        self,
        accounts: Mapping[str, Account],
        transactions: Iterable[Transaction],
    ) -> None:
        ordered = sorted(transactions, key=transaction_sort_key)
        splits: dict[str, list[Split]] = {}
        post_dates: dict[str, list[datetime]] = {}
        positions: dict[str, int] = {}
        for transaction in ordered:
            for split in transaction.splits:
                if split.account_guid not in accounts:
                    raise LedgerLookupError(
                        f"Split {split.guid} references unknown account "
                        f"{split.account_guid}"
                    )
                account_splits = splits.setdefault(split.account_guid, [])
                positions[split.guid] = len(account_splits)
                account_splits.append(split)
                post_dates.setdefault(split.account_guid, []).append(
                    transaction.post_date
                )
        self._transactions = ordered
        self._splits = splits
        self._post_dates = post_dates
        self._positions = positions

    @property
    def root(self) -> Account | None:
        return self._root

    @property
    def transactions(self) -> list[Transaction]:
        return self._transactions

    def children(self, account_guid: str) -> list[Account]:
        return self._children.get(account_guid, [])

    def splits(self, account_guid: str) -> list[Split]:
        return self._splits.get(account_guid, [])

    def post_dates(self, account_guid: str) -> list[datetime]:
        """Posting dates parallel to ``splits(account_guid)``."""
        return self._post_dates.get(account_guid, [])

    def position(self, split: Split) -> int:
        """Return the split's offset within its account's ordered list.

        Raises:
            LedgerLookupError: If the split is not part of the index.
        """
        try:
            return self._positions[split.guid]
        except KeyError:
            raise LedgerLookupError(
                f"Split {split.guid} is not indexed"
            ) from None

    def account_guids(self) -> list[str]:
        """Return the guids of accounts holding at least one split."""
        return list(self._splits)


__all__ = ["LedgerIndex"]
