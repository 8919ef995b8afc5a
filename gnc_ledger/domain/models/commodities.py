"""Commodity identity and the book-wide commodity registry."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from gnc_ledger.domain.errors import LedgerLookupError
from gnc_ledger.domain.services.exchange_rates import ExchangeRateCurve


def make_commodity_id(namespace: str | None, mnemonic: str) -> str:
    """Return the ``namespace:mnemonic`` identifier used for commodities."""
    if not namespace:
        return mnemonic
    return f"{namespace}:{mnemonic}"


@dataclass(eq=False)
class Commodity:
    """A traded unit: currency, stock, fund or any other commodity.

    Commodities compare by identity. ``exchange_rate`` holds the number of
    base-currency units per one unit of this commodity.

    Attributes:
        identifier: Unique identifier, ``namespace:mnemonic`` for GnuCash data.
        namespace: GnuCash namespace (CURRENCY, NASDAQ, ...), when known.
        mnemonic: Short symbol (EUR, ACME, ...).
        full_name: Optional descriptive name.
        fraction: Smallest subdivision as a power of ten (100 for cents).
        is_base_currency: True for the book's base currency.
        exchange_rate: Rate curve against the base currency.
    """

    identifier: str
    namespace: str | None = None
    mnemonic: str | None = None
    full_name: str | None = None
    fraction: int = 100
    is_base_currency: bool = False
    exchange_rate: ExchangeRateCurve = field(
        default_factory=ExchangeRateCurve,
        repr=False,
    )

    def __post_init__(self) -> None:
        if self.mnemonic is None:
            namespace, sep, mnemonic = self.identifier.partition(":")
            if sep:
                self.namespace = self.namespace or namespace
                self.mnemonic = mnemonic
            else:
                self.mnemonic = self.identifier

    def __str__(self) -> str:
        return self.identifier


class CommodityRegistry:
    """Commodities of one book, keyed by identifier."""

    def __init__(self, base_currency_id: str) -> None:
        self._base_currency_id = base_currency_id
        self._commodities: dict[str, Commodity] = {}

    @property
    def base_currency_id(self) -> str:
        return self._base_currency_id

    @property
    def base_currency(self) -> Commodity:
        """Return the base currency commodity.

        Raises:
            LedgerLookupError: If the base currency was never registered.
        """
        return self.get(self._base_currency_id)

    def register(
        self,
        identifier: str,
        *,
        namespace: str | None = None,
        mnemonic: str | None = None,
        full_name: str | None = None,
        fraction: int = 100,
    ) -> Commodity:
        """Register a commodity, returning the existing one on a repeat id."""
        existing = self._commodities.get(identifier)
        if existing is not None:
            return existing
        commodity = Commodity(
            identifier=identifier,
            namespace=namespace,
            mnemonic=mnemonic,
            full_name=full_name,
            fraction=fraction,
            is_base_currency=identifier == self._base_currency_id,
        )
        self._commodities[identifier] = commodity
        return commodity

    def get(self, identifier: str) -> Commodity:
        """Return the commodity for ``identifier``.

        Raises:
            LedgerLookupError: If no such commodity is registered.
        """
        try:
            return self._commodities[identifier]
        except KeyError:
            raise LedgerLookupError(
                f"Unknown commodity: {identifier}"
            ) from None

    def find_by_mnemonic(self, mnemonic: str) -> Commodity:
        """Return the commodity whose mnemonic matches, currencies first.

        Raises:
            LedgerLookupError: If no commodity carries that mnemonic.
        """
        wanted = mnemonic.strip().upper()
        matches = [
            commodity
            for commodity in self._commodities.values()
            if (commodity.mnemonic or "").upper() == wanted
        ]
        if not matches:
            raise LedgerLookupError(f"Unknown commodity mnemonic: {mnemonic}")
        matches.sort(
            key=lambda commodity: (
                (commodity.namespace or "").upper()
                not in ("CURRENCY", "ISO4217"),
                commodity.identifier,
            )
        )
        return matches[0]

    def __contains__(self, identifier) -> bool:
        return identifier in self._commodities

    def __iter__(self) -> Iterator[Commodity]:
        return iter(self._commodities.values())

    def __len__(self) -> int:
        return len(self._commodities)


__all__ = ["Commodity", "CommodityRegistry", "make_commodity_id"]
