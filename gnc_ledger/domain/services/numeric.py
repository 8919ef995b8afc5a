"""Parsing of GnuCash numeric literals."""

from decimal import Decimal, InvalidOperation

from gnc_ledger.domain.errors import ParseError


def parse_gnc_numeric(value) -> Decimal:
    """Parse a plain decimal or an ``n/d`` fraction literal.

    Args:
        value: Literal such as ``"12.50"`` or ``"1250/100"``. Decimal and int
            values are passed through.

    Returns:
        Decimal: Parsed quantity.

    Raises:
        ParseError: If the literal is neither form, or the denominator is zero.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Decimal(value)
    if not isinstance(value, str):
        raise ParseError(f"Cannot parse GnuCash numeric value: {value!r}")

    text = value.strip()
    try:
        plain = Decimal(text)
    except InvalidOperation:
        plain = None
    if plain is not None:
        if not plain.is_finite():
            raise ParseError(f'Cannot parse GnuCash numeric value: "{value}"')
        return plain

    parts = text.split("/")
    if len(parts) != 2:
        raise ParseError(f'Cannot parse GnuCash numeric value: "{value}"')
    try:
        num = Decimal(parts[0].strip())
        denom = Decimal(parts[1].strip())
    except InvalidOperation as exc:
        raise ParseError(
            f'Cannot parse GnuCash numeric value: "{value}"'
        ) from exc
    if denom == 0 or not num.is_finite() or not denom.is_finite():
        raise ParseError(f'Cannot parse GnuCash numeric value: "{value}"')
    return num / denom


__all__ = ["parse_gnc_numeric"]
