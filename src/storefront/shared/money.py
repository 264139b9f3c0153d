"""Monetary arithmetic helpers.

Prices are stored as floats on aggregates. Any comparison or sum that decides
what a customer pays goes through ``Decimal`` rounded to cents.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def parse_amount(value) -> Decimal:
    """Read an amount exactly as given, without rounding.

    Raises ``decimal.InvalidOperation`` when ``value`` is not a number.
    """
    return Decimal(str(value).strip())


def to_money(value) -> Decimal:
    """Convert a float, int, str or Decimal into a cent-precision Decimal."""
    if value is None:
        value = 0
    return parse_amount(value).quantize(CENT, rounding=ROUND_HALF_UP)


def same_amount(submitted, expected) -> bool:
    """True when ``submitted`` equals ``expected`` exactly.

    Only ``expected`` is brought to cents; a submitted amount carrying extra
    precision is a different amount.
    """
    return parse_amount(submitted) == to_money(expected)


def line_total(price, quantity) -> Decimal:
    return to_money(to_money(price) * quantity)
