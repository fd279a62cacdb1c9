"""Domain models package."""

from .accounts import Account, Transaction
from .finance import Asset, Fund, Investor, Portfolio
from .inputs import (
    CreateAccountInput,
    CreateAssetInput,
    CreateFundInput,
    CreateInvestorInput,
    CreatePortfolioInput,
    CreateTransactionInput,
    UpdateAccountInput,
    UpdateAssetInput,
    UpdateFundInput,
    UpdateInvestorInput,
    UpdatePortfolioInput,
    UpdateTransactionInput,
)
from .invariants import (
    AccountBalanceDrift,
    LedgerInvariantReport,
    PortfolioValueDrift,
)

__all__ = [
    "Account",
    "Transaction",
    "Asset",
    "Fund",
    "Investor",
    "Portfolio",
    "CreateAccountInput",
    "CreateAssetInput",
    "CreateFundInput",
    "CreateInvestorInput",
    "CreatePortfolioInput",
    "CreateTransactionInput",
    "UpdateAccountInput",
    "UpdateAssetInput",
    "UpdateFundInput",
    "UpdateInvestorInput",
    "UpdatePortfolioInput",
    "UpdateTransactionInput",
    "AccountBalanceDrift",
    "LedgerInvariantReport",
    "PortfolioValueDrift",
]
