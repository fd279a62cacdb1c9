"""Shared helpers for use cases running inside a ledger unit of work."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError


def utc_now() -> datetime:
    """Return the current UTC time as a naive datetime for storage."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@contextmanager
def log_storage_failure(logger, operation: str) -> Iterator[None]:
    """Log a storage engine failure once and re-raise it unchanged.

    Args:
        logger: Logger compatible with logging.Logger-like API.
        operation: Human readable name of the attempted operation.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(f"{operation} failed: {exc}")
        raise


__all__ = ["utc_now", "log_storage_failure"]
