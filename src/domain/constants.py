"""Domain constants for the back-office ledger."""

from enum import Enum


class AccountCategory(str, Enum):
    """Closed set of account categories."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"


class PostingDirection(str, Enum):
    """Posting side of a transaction.

    ``DEBIT`` is the increase side and ``CREDIT`` the decrease side; the
    arithmetic sign depends on the account category.
    """

    DEBIT = "debit"
    CREDIT = "credit"


class FundType(str, Enum):
    EQUITY = "equity"
    FIXED_INCOME = "fixed_income"
    MIXED = "mixed"
    ALTERNATIVE = "alternative"


class InvestorType(str, Enum):
    INDIVIDUAL = "individual"
    INSTITUTIONAL = "institutional"


class AssetType(str, Enum):
    STOCK = "stock"
    BOND = "bond"
    ETF = "etf"
    MUTUAL_FUND = "mutual_fund"
    COMMODITY = "commodity"
    REAL_ESTATE = "real_estate"
    ALTERNATIVE = "alternative"


DEBIT_NORMAL_CATEGORIES = (
    AccountCategory.ASSET,
    AccountCategory.EXPENSE,
)

CREDIT_NORMAL_CATEGORIES = (
    AccountCategory.LIABILITY,
    AccountCategory.EQUITY,
    AccountCategory.REVENUE,
)


__all__ = [
    "AccountCategory",
    "PostingDirection",
    "FundType",
    "InvestorType",
    "AssetType",
    "DEBIT_NORMAL_CATEGORIES",
    "CREDIT_NORMAL_CATEGORIES",
]
