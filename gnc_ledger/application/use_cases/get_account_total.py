"""Use case to compute an account's movement over a date interval."""

from datetime import date

from gnc_ledger.domain.models.accounts import AccountTotalDTO
from gnc_ledger.domain.models.book import Book
from gnc_ledger.domain.models.commodities import Commodity
from gnc_ledger.domain.models.intervals import DateInterval
from gnc_ledger.domain.services import queries
from gnc_ledger.infrastructure.logging.logger import get_app_logger


class GetAccountTotalUseCase:
    """Compute total, debit and credit of one account within an interval."""

    def __init__(self, book: Book, logger=None) -> None:
        """Initialize the use case.

        Args:
            book: Loaded book to query.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._book = book
        self._logger = logger or get_app_logger()

    def execute(
        self,
        account_name: str,
        start_date: date,
        end_date: date,
        target_currency: str | None = None,
        include_subaccounts: bool = False,
    ) -> AccountTotalDTO:
        """Return the interval figures for an account.

        Args:
            account_name: Account path below the root, e.g. ``Assets:Bank``.
            start_date: First day of the interval, inclusive.
            end_date: Last day of the interval, inclusive.
            target_currency: Currency mnemonic or commodity id; defaults to
                the account's own commodity.
            include_subaccounts: Include the whole account subtree.

        Returns:
            AccountTotalDTO: Total, debit and credit in the target currency.
        """
        account = self._book.find_account(account_name)
        interval = DateInterval(start_date, end_date)
        target = self._resolve_currency(target_currency, account.commodity)
        kwargs = {"include_subaccounts": include_subaccounts}
        result = AccountTotalDTO(
            full_name=self._book.full_name(account),
            interval=str(interval),
            total=queries.total_converted(
                self._book, account, interval, target, **kwargs
            ).quantity,
            debit=queries.total_debit(
                self._book, account, interval, target, **kwargs
            ).quantity,
            credit=queries.total_credit(
                self._book, account, interval, target, **kwargs
            ).quantity,
            currency_code=target.mnemonic or target.identifier,
        )
        self._logger.info(
            f"Computed totals for {result.full_name} over {result.interval}"
        )
        return result

    def _resolve_currency(
        self,
        target_currency: str | None,
        fallback: Commodity | None,
    ) -> Commodity:
        if not target_currency:
            return fallback or self._book.base_currency
        if target_currency in self._book.commodities:
            return self._book.get_commodity(target_currency)
        return self._book.commodities.find_by_mnemonic(target_currency)


__all__ = ["GetAccountTotalUseCase", "AccountTotalDTO"]
