"""Domain normalization helpers."""


def normalize_symbol(symbol: str) -> str:
    """Normalize asset ticker symbols.

    Args:
        symbol: Raw symbol from the request layer.

    Returns:
        str: Stripped, upper-cased symbol.
    """
    return symbol.strip().upper()


def normalize_email(email: str) -> str:
    """Normalize investor e-mail addresses for the unique index."""
    return email.strip().lower()


def normalize_text(value: str | None) -> str | None:
    """Strip optional free-text fields, mapping blank values to None."""
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


__all__ = ["normalize_symbol", "normalize_email", "normalize_text"]
