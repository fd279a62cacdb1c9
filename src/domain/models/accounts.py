"""Domain models for ledger accounts and their transactions."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.domain.constants import AccountCategory, PostingDirection


@dataclass(frozen=True)
class Account:
    """Ledger account with its running balance.

    Attributes:
        opening_balance: Balance the account was created with. The running
            balance always equals this value plus the signed effect of the
            account's current transactions.
    """

    id: int
    name: str
    account_number: str
    category: AccountCategory
    balance: Decimal
    opening_balance: Decimal
    description: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Single-sided posting against one account."""

    id: int
    account_id: int
    direction: PostingDirection
    amount: Decimal
    description: str | None
    transaction_date: datetime
    reference_number: str | None
    created_at: datetime
    updated_at: datetime


__all__ = ["Account", "Transaction"]
