"""Domain services package."""

from .normalization import normalize_email, normalize_symbol, normalize_text
from .validation import validate_balance_sign

__all__ = [
    "normalize_email",
    "normalize_symbol",
    "normalize_text",
    "validate_balance_sign",
]
