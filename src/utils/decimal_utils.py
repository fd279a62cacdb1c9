"""Helpers for Decimal normalization at the storage edge."""

from decimal import ROUND_HALF_EVEN, Decimal

MONEY_PLACES = 2
PRICE_PLACES = 4
QUANTITY_PLACES = 6


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_decimal(value, places: int) -> Decimal:
    """Coerce a value to Decimal and round it to a fixed number of places.

    Args:
        value: Raw numeric value from SQL or adapters.
        places: Number of fractional digits to keep.

    Returns:
        Decimal: Fixed-point value with exactly ``places`` fractional digits.
    """
    quantum = Decimal(1).scaleb(-places)
    return coerce_decimal(value).quantize(quantum, rounding=ROUND_HALF_EVEN)


def to_money(value) -> Decimal:
    """Return a monetary amount with cent precision."""
    return quantize_decimal(value, MONEY_PLACES)


def to_price(value) -> Decimal:
    """Return a unit price or rate with four decimal places."""
    return quantize_decimal(value, PRICE_PLACES)


def to_quantity(value) -> Decimal:
    """Return a holding quantity with six decimal places."""
    return quantize_decimal(value, QUANTITY_PLACES)


__all__ = [
    "coerce_decimal",
    "quantize_decimal",
    "to_money",
    "to_price",
    "to_quantity",
]
