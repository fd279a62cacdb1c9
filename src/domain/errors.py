"""Domain errors raised by ledger use cases.

A missing mutation target is not an error: use cases return ``None`` or
``False`` for it. The classes below cover every other abnormal condition
that must reach the request layer.
"""


class LedgerError(RuntimeError):
    """Base class for ledger consistency errors."""


class ValidationPreconditionError(LedgerError):
    """Raised when a create or move references a parent that does not exist."""


class ConflictBlockedError(LedgerError):
    """Raised when dependent records block a delete or reclassification.

    Attributes:
        dependent_count: Number of records that block the operation.
    """

    def __init__(self, message: str, dependent_count: int) -> None:
        super().__init__(message)
        self.dependent_count = dependent_count


__all__ = [
    "LedgerError",
    "ValidationPreconditionError",
    "ConflictBlockedError",
]
