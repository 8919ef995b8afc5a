"""Domain constants for the ledger engine."""

from datetime import datetime, timezone

DEFAULT_BASE_CURRENCY = "CURRENCY:EUR"

# The base currency's own curve always carries this single fixed sample.
BASE_CURRENCY_REFERENCE_DATE = datetime(2000, 1, 1, tzinfo=timezone.utc)

PRICE_NOT_AGAINST_BASE = "price-not-against-base"
PRICE_DEGENERATE_RATE = "price-degenerate-rate"


__all__ = [
    "DEFAULT_BASE_CURRENCY",
    "BASE_CURRENCY_REFERENCE_DATE",
    "PRICE_NOT_AGAINST_BASE",
    "PRICE_DEGENERATE_RATE",
]
