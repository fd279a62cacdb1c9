"""Application use cases package."""

from .asset_rollup import (
    CreateAssetUseCase,
    DeleteAssetUseCase,
    UpdateAssetUseCase,
)
from .check_ledger_invariants import CheckLedgerInvariantsUseCase
from .manage_entities import (
    CreateAccountUseCase,
    CreateFundUseCase,
    CreateInvestorUseCase,
    CreatePortfolioUseCase,
    UpdateAccountUseCase,
    UpdateFundUseCase,
    UpdateInvestorUseCase,
    UpdatePortfolioUseCase,
)
from .referential_integrity import (
    DeleteAccountUseCase,
    DeleteFundUseCase,
    DeleteInvestorUseCase,
    DeletePortfolioUseCase,
)
from .transaction_ledger import (
    CreateTransactionUseCase,
    DeleteTransactionUseCase,
    UpdateTransactionUseCase,
)

__all__ = [
    "CreateAssetUseCase",
    "DeleteAssetUseCase",
    "UpdateAssetUseCase",
    "CheckLedgerInvariantsUseCase",
    "CreateAccountUseCase",
    "CreateFundUseCase",
    "CreateInvestorUseCase",
    "CreatePortfolioUseCase",
    "UpdateAccountUseCase",
    "UpdateFundUseCase",
    "UpdateInvestorUseCase",
    "UpdatePortfolioUseCase",
    "DeleteAccountUseCase",
    "DeleteFundUseCase",
    "DeleteInvestorUseCase",
    "DeletePortfolioUseCase",
    "CreateTransactionUseCase",
    "DeleteTransactionUseCase",
    "UpdateTransactionUseCase",
]
