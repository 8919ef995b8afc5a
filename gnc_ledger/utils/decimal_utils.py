"""Helpers for Decimal normalization."""

from decimal import Decimal


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, piecash or a parsed record.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    return Decimal(str(value))


def fraction_literal(num, denom) -> str:
    """Render a numerator/denominator pair as a GnuCash ``n/d`` literal.

    Args:
        num: Numerator as stored by GnuCash.
        denom: Denominator as stored by GnuCash.

    Returns:
        str: Literal such as ``"12345/100"``.
    """
    return f"{int(num)}/{int(denom)}"


__all__ = ["coerce_decimal", "fraction_literal"]
