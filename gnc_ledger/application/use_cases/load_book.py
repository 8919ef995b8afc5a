"""Use case to build an in-memory book from a ledger source."""

from dataclasses import dataclass

from gnc_ledger.application.ports.ledger_source import LedgerSourcePort
from gnc_ledger.domain.errors import LedgerLookupError
from gnc_ledger.domain.models.book import Book
from gnc_ledger.domain.models.commodities import (
    CommodityRegistry,
    make_commodity_id,
)
from gnc_ledger.domain.models.diagnostics import Diagnostics
from gnc_ledger.domain.models.ledger import Account, Split, Transaction
from gnc_ledger.domain.models.records import (
    AccountRecord,
    SplitRecord,
    TransactionRecord,
)
from gnc_ledger.domain.services.dates import (
    parse_gnc_date,
    parse_gnc_timestamp,
)
from gnc_ledger.domain.services.numeric import parse_gnc_numeric
from gnc_ledger.domain.services.price_feed import ingest_prices
from gnc_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class LoadResult:
    """Loaded book plus the soft findings gathered while loading it."""

    book: Book
    diagnostics: Diagnostics


class LoadBookUseCase:
    """Read every record from a source and assemble a queryable book."""

    def __init__(
        self,
        source: LedgerSourcePort,
        base_currency_id: str,
        logger=None,
        eager_balances: bool = False,
    ) -> None:
        """Initialize the use case.

        Args:
            source: Port providing raw ledger records.
            base_currency_id: Identifier of the book's base currency, such as
                ``CURRENCY:EUR``.
            logger: Optional logger compatible with logging.Logger-like API.
            eager_balances: Compute every running balance right after load so
                the book can be shared by concurrent readers without locking.
        """
        self._source = source
        self._base_currency_id = base_currency_id
        self._logger = logger or get_app_logger()
        self._eager_balances = eager_balances

    def execute(self) -> LoadResult:
        """Load the book.

        Returns:
            LoadResult: The book and the diagnostics collected on the way.

        Raises:
            LedgerLookupError: On dangling identifiers or a missing base
                currency.
            ParseError: On malformed split amounts or dates.
            IntegrityError: On structural violations such as two roots.
        """
        diagnostics = Diagnostics(logger=self._logger)
        registry = self._build_registry()
        accounts = [
            self._build_account(record, registry)
            for record in self._source.fetch_accounts()
        ]
        transactions = self._build_transactions(
            self._source.fetch_transactions(),
            self._source.fetch_splits(),
            registry,
        )
        book = Book(registry, accounts, transactions)
        stored = ingest_prices(
            registry,
            self._source.fetch_prices(),
            diagnostics,
        )
        if self._eager_balances:
            book.rebuild_balances()
        self._logger.info(
            f"Loaded book with {len(accounts)} accounts, "
            f"{len(transactions)} transactions and {stored} prices "
            f"({len(diagnostics)} diagnostics)"
        )
        return LoadResult(book=book, diagnostics=diagnostics)

    def _build_registry(self) -> CommodityRegistry:
        registry = CommodityRegistry(self._base_currency_id)
        for record in self._source.fetch_commodities():
            registry.register(
                make_commodity_id(record.namespace, record.mnemonic),
                namespace=record.namespace,
                mnemonic=record.mnemonic,
                full_name=record.full_name,
                fraction=record.fraction,
            )
        if self._base_currency_id not in registry:
            raise LedgerLookupError(
                f"Base currency {self._base_currency_id} is not a commodity "
                "of this book"
            )
        return registry

    @staticmethod
    def _build_account(
        record: AccountRecord,
        registry: CommodityRegistry,
    ) -> Account:
        commodity = (
            registry.get(record.commodity_id) if record.commodity_id else None
        )
        return Account(
            guid=record.guid,
            name=record.name,
            account_type=(record.account_type or "").upper(),
            commodity=commodity,
            parent_guid=record.parent_guid or None,
            commodity_scu=record.commodity_scu,
            description=record.description,
        )

    @staticmethod
    def _build_split(record: SplitRecord) -> Split:
        return Split(
            guid=record.guid,
            transaction_guid=record.transaction_guid,
            account_guid=record.account_guid,
            value=parse_gnc_numeric(record.value),
            quantity=parse_gnc_numeric(record.quantity),
            memo=record.memo or None,
            reconcile_state=record.reconcile_state,
        )

    def _build_transactions(
        self,
        transaction_records: list[TransactionRecord],
        split_records: list[SplitRecord],
        registry: CommodityRegistry,
    ) -> list[Transaction]:
        splits_by_transaction: dict[str, list[Split]] = {
            record.guid: [] for record in transaction_records
        }
        for record in split_records:
            bucket = splits_by_transaction.get(record.transaction_guid)
            if bucket is None:
                raise LedgerLookupError(
                    f"Split {record.guid} references unknown transaction "
                    f"{record.transaction_guid}"
                )
            bucket.append(self._build_split(record))

        transactions = []
        for record in transaction_records:
            post_date = parse_gnc_date(record.post_date)
            enter_date = (
                parse_gnc_timestamp(record.enter_date)
                if record.enter_date is not None
                else post_date
            )
            transactions.append(
                Transaction(
                    guid=record.guid,
                    currency=registry.get(record.currency_id),
                    post_date=post_date,
                    enter_date=enter_date,
                    num=record.num or "",
                    description=record.description,
                    splits=tuple(splits_by_transaction[record.guid]),
                )
            )
        return transactions


__all__ = ["LoadBookUseCase", "LoadResult"]
