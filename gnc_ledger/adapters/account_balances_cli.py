"""CLI adapter printing every account balance in one currency."""

from datetime import date
import os

from gnc_ledger.adapters.cli_inputs import parse_date, parse_flag
from gnc_ledger.application.use_cases.get_account_balances import (
    GetAccountBalancesUseCase,
)
from gnc_ledger.domain.errors import LedgerError
from gnc_ledger.infrastructure.container import load_book
from gnc_ledger.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Print converted balances of every account as of ``LEDGER_AS_OF``."""
    logger = get_app_logger()
    raw_as_of = os.getenv("LEDGER_AS_OF")
    as_of = parse_date(raw_as_of, logger)
    if raw_as_of and as_of is None:
        return
    as_of = as_of or date.today()
    target_currency = os.getenv("LEDGER_CURRENCY") or None
    include_subaccounts = parse_flag(
        os.getenv("LEDGER_INCLUDE_SUBACCOUNTS"),
        default=True,
    )

    try:
        result = load_book()
        balances = GetAccountBalancesUseCase(
            result.book,
            logger=logger,
        ).execute(
            as_of=as_of,
            target_currency=target_currency,
            include_subaccounts=include_subaccounts,
        )
    except (LedgerError, RuntimeError) as exc:
        logger.error(str(exc))
        return

    print(f"Account balances as of {as_of}")
    for item in balances:
        indent = "  " * max(item.depth - 1, 0)
        print(
            f"{indent}{item.full_name}: "
            f"{item.balance:,.2f} {item.currency_code}"
        )
    if result.diagnostics:
        print(f"{len(result.diagnostics)} price entries were skipped")


if __name__ == "__main__":  # pragma: no cover
    main()
