"""Use case to compute account balances in a target currency."""

from datetime import date

from gnc_ledger.domain.models.accounts import AccountBalanceDTO
from gnc_ledger.domain.models.book import Book
from gnc_ledger.domain.services import queries
from gnc_ledger.infrastructure.logging.logger import get_app_logger


class GetAccountBalancesUseCase:
    """Compute the balance of every account, converted to one currency."""

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
        as_of: date,
        target_currency: str | None = None,
        include_subaccounts: bool = True,
    ) -> list[AccountBalanceDTO]:
        """Return account balances as of a date.

        Args:
            as_of: Date (or aware datetime) the balances are taken at.
            target_currency: Currency mnemonic or commodity id for conversion;
                defaults to the book's base currency.
            include_subaccounts: Roll each subtree into its parent's figure.

        Returns:
            list[AccountBalanceDTO]: Balances sorted by account path.
        """
        target = self._resolve_currency(target_currency)
        balances = []
        for account in self._book.iter_accounts():
            converted = queries.balance_converted(
                self._book,
                account,
                as_of,
                target,
                include_subaccounts=include_subaccounts,
            )
            balances.append(
                AccountBalanceDTO(
                    guid=account.guid,
                    full_name=self._book.full_name(account),
                    account_type=account.account_type,
                    depth=self._book.depth(account),
                    balance=converted.quantity,
                    currency_code=target.mnemonic or target.identifier,
                )
            )
        balances = sorted(
            balances,
            key=lambda item: (item.full_name.lower(), item.guid),
        )
        self._logger.info(
            f"Computed {len(balances)} account balances in "
            f"{target.identifier} as of {as_of}"
        )
        return balances

    def _resolve_currency(self, target_currency: str | None):
        if not target_currency:
            return self._book.base_currency
        if target_currency in self._book.commodities:
            return self._book.get_commodity(target_currency)
        return self._book.commodities.find_by_mnemonic(target_currency)


__all__ = ["GetAccountBalancesUseCase", "AccountBalanceDTO"]
