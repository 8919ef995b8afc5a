"""PieCash-backed ledger source for GnuCash books."""

from contextlib import contextmanager
from decimal import Decimal
from pathlib import Path

from gnc_ledger.application.ports.ledger_source import LedgerSourcePort
from gnc_ledger.domain.models.commodities import make_commodity_id
from gnc_ledger.domain.models.records import (
    AccountRecord,
    CommodityRecord,
    PriceRecord,
    SplitRecord,
    TransactionRecord,
)
from gnc_ledger.infrastructure.gnucash_templates import (
    is_template_account,
    is_template_namespace,
)
from gnc_ledger.infrastructure.logging.logger import get_app_logger
from gnc_ledger.infrastructure.piecash_compat import (
    load_piecash,
    open_piecash_book,
)
from gnc_ledger.utils.decimal_utils import coerce_decimal, fraction_literal


class PieCashLedgerSource(LedgerSourcePort):
    """Ledger source reading a GnuCash book through piecash."""

    def __init__(self, book_path: Path | str, logger=None) -> None:
        """Initialize the source.

        Args:
            book_path: Path or URI to the GnuCash book supported by piecash.
            logger: Optional logger compatible with logging.Logger-like API.

        Raises:
            RuntimeError: If piecash is not installed.
        """
        try:
            self._piecash = load_piecash()
        except ImportError as exc:
            raise RuntimeError(
                "piecash is not installed; install it to use the piecash backend"
            ) from exc
        self._book_path = book_path
        self._logger = logger or get_app_logger()

    @contextmanager
    def _open_book(self):
        book = open_piecash_book(
            self._piecash,
            self._book_path,
            readonly=True,
            open_if_lock=True,
            check_exists=False,
        )
        try:
            yield book
        finally:
            close_method = getattr(book, "close", None)
            if callable(close_method):
                close_method()

    @staticmethod
    def _numeric(value) -> Decimal | str:
        """Return a Decimal, or a ``num/denom`` literal for rational values."""
        if value is None:
            return Decimal("0")
        if hasattr(value, "num") and hasattr(value, "denom"):
            return fraction_literal(value.num, value.denom)
        if hasattr(value, "numerator") and hasattr(value, "denominator"):
            return fraction_literal(value.numerator, value.denominator)
        return coerce_decimal(value)

    @staticmethod
    def _commodity_id(commodity) -> str | None:
        if commodity is None:
            return None
        return make_commodity_id(commodity.namespace, commodity.mnemonic)

    @staticmethod
    def _account_type(raw_type) -> str:
        if raw_type is None:
            return ""
        if hasattr(raw_type, "name"):
            return str(raw_type.name).upper()
        return str(raw_type).upper()

    def _is_template(self, account) -> bool:
        commodity = getattr(account, "commodity", None)
        return is_template_account(
            getattr(account, "name", None),
            self._account_type(getattr(account, "type", None)),
            getattr(commodity, "namespace", None),
        )

    def fetch_commodities(self) -> list[CommodityRecord]:
        """Return every non-template commodity of the book."""
        with self._open_book() as book:
            return [
                CommodityRecord(
                    namespace=commodity.namespace,
                    mnemonic=commodity.mnemonic,
                    full_name=getattr(commodity, "fullname", None),
                    fraction=int(getattr(commodity, "fraction", 100) or 100),
                )
                for commodity in book.commodities
                if not is_template_namespace(commodity.namespace)
            ]

    def fetch_accounts(self) -> list[AccountRecord]:
        """Return the root and every account below it, templates excluded."""
        with self._open_book() as book:
            candidates = []
            root = getattr(book, "root_account", None)
            if root is not None:
                candidates.append(root)
            candidates.extend(book.accounts)
            records: dict[str, AccountRecord] = {}
            for account in candidates:
                if account.guid in records or self._is_template(account):
                    continue
                parent = getattr(account, "parent", None)
                records[account.guid] = AccountRecord(
                    guid=account.guid,
                    name=account.name,
                    account_type=self._account_type(account.type),
                    commodity_id=self._commodity_id(account.commodity),
                    parent_guid=parent.guid if parent is not None else None,
                    commodity_scu=int(
                        getattr(account, "commodity_scu", 100) or 100
                    ),
                    description=getattr(account, "description", None),
                )
        return list(records.values())

    def fetch_transactions(self) -> list[TransactionRecord]:
        """Return every transaction that posts to a real account."""
        with self._open_book() as book:
            records = []
            for transaction in book.transactions:
                splits = list(getattr(transaction, "splits", []) or [])
                if splits and all(
                    self._is_template(split.account) for split in splits
                ):
                    continue
                records.append(
                    TransactionRecord(
                        guid=transaction.guid,
                        currency_id=self._commodity_id(transaction.currency),
                        post_date=transaction.post_date,
                        enter_date=getattr(transaction, "enter_date", None),
                        num=getattr(transaction, "num", None),
                        description=getattr(transaction, "description", None),
                    )
                )
        return records

    def fetch_splits(self) -> list[SplitRecord]:
        """Return every split of a non-template account."""
        with self._open_book() as book:
            return [
                SplitRecord(
                    guid=split.guid,
                    transaction_guid=split.transaction.guid,
                    account_guid=split.account.guid,
                    value=self._numeric(split.value),
                    quantity=self._numeric(split.quantity),
                    memo=getattr(split, "memo", None),
                    reconcile_state=getattr(split, "reconcile_state", "n") or "n",
                )
                for split in book.splits
                if not self._is_template(split.account)
            ]

    def fetch_prices(self) -> list[PriceRecord]:
        """Return the whole price history."""
        with self._open_book() as book:
            records = []
            for price in book.prices:
                value = getattr(price, "value", None)
                if value is None:
                    self._logger.warning("Skipping price with missing value")
                    continue
                records.append(
                    PriceRecord(
                        commodity_id=self._commodity_id(price.commodity),
                        currency_id=self._commodity_id(price.currency),
                        date=price.date,
                        value=self._numeric(value),
                        source=getattr(price, "source", None),
                    )
                )
        return records


__all__ = ["PieCashLedgerSource"]
