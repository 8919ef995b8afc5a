"""Application use cases package."""

from .load_book import LoadBookUseCase, LoadResult
from .get_account_balances import GetAccountBalancesUseCase, AccountBalanceDTO
from .get_account_total import GetAccountTotalUseCase, AccountTotalDTO

__all__ = [
    "LoadBookUseCase",
    "LoadResult",
    "GetAccountBalancesUseCase",
    "AccountBalanceDTO",
    "GetAccountTotalUseCase",
    "AccountTotalDTO",
]
