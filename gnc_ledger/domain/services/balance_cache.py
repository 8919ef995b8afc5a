"""Running-balance cache keyed by split identity."""

import threading
from decimal import Decimal

from gnc_ledger.domain.models.ledger import Split
from gnc_ledger.domain.services.ledger_index import LedgerIndex


class BalanceCache:
    """Lazily computed running balance after each split.

    The balance after split ``S`` is the sum of its account's split
    quantities from the start of the account's ordered list up to and
    including ``S``. A value, once stored, never changes because the ledger
    is immutable after load. Every write happens under the book-scoped lock;
    reads of already computed values take no lock.
    """

    def __init__(
        self,
        index: LedgerIndex,
        lock=None,
    ) -> None:
        self._index = index
        self._lock = lock or threading.RLock()
        self._balances: dict[str, Decimal] = {}

    def is_computed(self, split: Split) -> bool:
        return split.guid in self._balances

    def balance_after(self, split: Split) -> Decimal:
        """Return the cached balance, computing it on first access."""
        cached = self._balances.get(split.guid)
        if cached is not None:
            return cached
        return self.rebuild(split, force=False)

    def rebuild(self, split: Split, force: bool = False) -> Decimal:
        """Compute the running balance up to ``split``.

        Without ``force`` the walk starts after the nearest predecessor that
        already has a value; with ``force`` it starts at the head of the list.

        Args:
            split: Target split.
            force: Ignore previously computed values.

        Returns:
            Decimal: Balance after ``split``.
        """
        with self._lock:
            splits = self._index.splits(split.account_guid)
            target = self._index.position(split)
            seed = -1
            total = Decimal("0")
            if not force:
                for position in range(target, -1, -1):
                    cached = self._balances.get(splits[position].guid)
                    if cached is not None:
                        seed, total = position, cached
                        break
            for position in range(seed + 1, target + 1):
                current = splits[position]
                total += current.quantity
                self._balances[current.guid] = total
            return total

    def rebuild_account(self, account_guid: str) -> None:
        """Force-rebuild every split of one account."""
        splits = self._index.splits(account_guid)
        if splits:
            self.rebuild(splits[-1], force=True)

    def rebuild_all(self) -> None:
        """Force-rebuild every account; later reads never take the lock."""
        with self._lock:
            for account_guid in self._index.account_guids():
                self.rebuild_account(account_guid)

    def __len__(self) -> int:
        return len(self._balances)


__all__ = ["BalanceCache"]
