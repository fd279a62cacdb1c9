"""Domain policies package."""

from .posting_rules import (
    POSTING_RULES,
    posting_delta,
    posting_effect,
    reversal_delta,
)

__all__ = [
    "POSTING_RULES",
    "posting_delta",
    "posting_effect",
    "reversal_delta",
]
