"""Domain package for ledger rules and core models."""

from .constants import (
    CREDIT_NORMAL_CATEGORIES,
    DEBIT_NORMAL_CATEGORIES,
    AccountCategory,
    AssetType,
    FundType,
    InvestorType,
    PostingDirection,
)
from .errors import (
    ConflictBlockedError,
    LedgerError,
    ValidationPreconditionError,
)
from .models import Account, Asset, Fund, Investor, Portfolio, Transaction
from .policies import posting_delta, posting_effect, reversal_delta

__all__ = [
    "AccountCategory",
    "AssetType",
    "FundType",
    "InvestorType",
    "PostingDirection",
    "CREDIT_NORMAL_CATEGORIES",
    "DEBIT_NORMAL_CATEGORIES",
    "ConflictBlockedError",
    "LedgerError",
    "ValidationPreconditionError",
    "Account",
    "Asset",
    "Fund",
    "Investor",
    "Portfolio",
    "Transaction",
    "posting_delta",
    "posting_effect",
    "reversal_delta",
]
