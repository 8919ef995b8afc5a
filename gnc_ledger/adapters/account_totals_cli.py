"""CLI adapter printing interval totals of one account."""

import os

from gnc_ledger.adapters.cli_inputs import parse_date, parse_flag
from gnc_ledger.application.use_cases.get_account_total import (
    GetAccountTotalUseCase,
)
from gnc_ledger.domain.errors import LedgerError
from gnc_ledger.infrastructure.container import load_book
from gnc_ledger.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Print total, debit and credit of ``LEDGER_ACCOUNT`` in an interval."""
    logger = get_app_logger()
    account_name = os.getenv("LEDGER_ACCOUNT")
    if not account_name:
        logger.warning("LEDGER_ACCOUNT is required, e.g. Assets:Checking.")
        return
    start_date = parse_date(os.getenv("LEDGER_START"), logger)
    end_date = parse_date(os.getenv("LEDGER_END"), logger)
    if start_date is None or end_date is None:
        logger.warning("LEDGER_START and LEDGER_END must both be set.")
        return
    if end_date < start_date:
        logger.warning("LEDGER_END must not be before LEDGER_START.")
        return

    try:
        result = load_book()
        totals = GetAccountTotalUseCase(result.book, logger=logger).execute(
            account_name=account_name,
            start_date=start_date,
            end_date=end_date,
            target_currency=os.getenv("LEDGER_CURRENCY") or None,
            include_subaccounts=parse_flag(
                os.getenv("LEDGER_INCLUDE_SUBACCOUNTS")
            ),
        )
    except (LedgerError, RuntimeError) as exc:
        logger.error(str(exc))
        return

    print(f"{totals.full_name} ({totals.interval})")
    print(f"total={totals.total:,.2f} {totals.currency_code}")
    print(f"debit={totals.debit:,.2f} {totals.currency_code}")
    print(f"credit={totals.credit:,.2f} {totals.currency_code}")


if __name__ == "__main__":  # pragma: no cover
    main()
