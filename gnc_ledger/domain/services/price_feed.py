"""Ingestion of the price history into exchange-rate curves."""

from collections.abc import Iterable
from decimal import Decimal

from gnc_ledger.domain.constants import (
    BASE_CURRENCY_REFERENCE_DATE,
    PRICE_DEGENERATE_RATE,
    PRICE_NOT_AGAINST_BASE,
)
from gnc_ledger.domain.errors import ParseError
from gnc_ledger.domain.models.commodities import CommodityRegistry
from gnc_ledger.domain.models.diagnostics import Diagnostics
from gnc_ledger.domain.models.records import PriceRecord
from gnc_ledger.domain.services.dates import parse_gnc_date
from gnc_ledger.domain.services.numeric import parse_gnc_numeric


def ingest_prices(
    registry: CommodityRegistry,
    prices: Iterable[PriceRecord],
    diagnostics: Diagnostics,
) -> int:
    """Store every usable price sample on the matching commodity curve.

    A sample quoted in the base currency lands on the commodity's curve as is.
    A sample of the base currency quoted in another currency lands on that
    currency's curve inverted. Samples with neither side in the base currency,
    or with a rate that is unparseable or not positive, are skipped and
    reported. Afterwards the base currency's curve gets its fixed sample of 1.

    Args:
        registry: Commodities of the book, including the base currency.
        prices: Price-history records.
        diagnostics: Sink for skipped samples.

    Returns:
        int: Number of samples stored.

    Raises:
        LedgerLookupError: If a record references an unknown commodity, or the
            base currency is not registered.
    """
    base = registry.base_currency
    stored = 0
    for record in prices:
        commodity = registry.get(record.commodity_id)
        currency = registry.get(record.currency_id)
        subject = f"{record.commodity_id}/{record.currency_id}@{record.date}"
        if commodity is currency:
            diagnostics.add(
                PRICE_DEGENERATE_RATE,
                f"Skipping price {subject}: quoted against itself",
                subject,
            )
            continue
        if commodity is not base and currency is not base:
            diagnostics.add(
                PRICE_NOT_AGAINST_BASE,
                f"Skipping price {subject}: not quoted against the base "
                f"currency {base.identifier}",
                subject,
            )
            continue
        try:
            rate = parse_gnc_numeric(record.value)
        except ParseError:
            rate = None
        if rate is None or rate <= 0:
            diagnostics.add(
                PRICE_DEGENERATE_RATE,
                f"Skipping price {subject}: degenerate rate {record.value!r}",
                subject,
            )
            continue
        when = parse_gnc_date(record.date)
        if currency is base:
            commodity.exchange_rate.set(when, rate)
        else:
            currency.exchange_rate.set(when, Decimal("1") / rate)
        stored += 1
    base.exchange_rate.set(BASE_CURRENCY_REFERENCE_DATE, Decimal("1"))
    return stored


__all__ = ["ingest_prices"]
