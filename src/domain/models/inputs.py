"""Validated input structures handed over by the request layer.

The request layer checks positivity, closed-set membership and id types
before building these objects. On update inputs, ``None`` means "leave the
field unchanged".
"""

from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from typing import Any

from src.domain.constants import (
    AccountCategory,
    AssetType,
    FundType,
    InvestorType,
    PostingDirection,
)


def _provided_fields(instance, exclude: tuple[str, ...] = ("id",)) -> dict[str, Any]:
    """Return the dataclass fields that carry a value."""
    return {
        field.name: getattr(instance, field.name)
        for field in fields(instance)
        if field.name not in exclude and getattr(instance, field.name) is not None
    }


@dataclass(frozen=True)
class CreateAccountInput:
    name: str
    account_number: str
    category: AccountCategory
    balance: Decimal
    description: str | None = None


@dataclass(frozen=True)
class UpdateAccountInput:
    id: int
    name: str | None = None
    account_number: str | None = None
    category: AccountCategory | None = None
    description: str | None = None

    def provided_fields(self) -> dict[str, Any]:
        return _provided_fields(self)


@dataclass(frozen=True)
class CreateTransactionInput:
    account_id: int
    direction: PostingDirection
    amount: Decimal
    transaction_date: datetime
    description: str | None = None
    reference_number: str | None = None


@dataclass(frozen=True)
class UpdateTransactionInput:
    id: int
    account_id: int | None = None
    direction: PostingDirection | None = None
    amount: Decimal | None = None
    description: str | None = None
    transaction_date: datetime | None = None
    reference_number: str | None = None

    def provided_fields(self) -> dict[str, Any]:
        return _provided_fields(self)


@dataclass(frozen=True)
class CreateFundInput:
    name: str
    fund_type: FundType
    inception_date: datetime
    nav: Decimal
    total_assets: Decimal
    management_fee: Decimal
    description: str | None = None


@dataclass(frozen=True)
class UpdateFundInput:
    id: int
    name: str | None = None
    fund_type: FundType | None = None
    inception_date: datetime | None = None
    nav: Decimal | None = None
    total_assets: Decimal | None = None
    management_fee: Decimal | None = None
    description: str | None = None

    def provided_fields(self) -> dict[str, Any]:
        return _provided_fields(self)


@dataclass(frozen=True)
class CreateInvestorInput:
    name: str
    email: str
    investor_type: InvestorType
    total_invested: Decimal
    phone: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class UpdateInvestorInput:
    id: int
    name: str | None = None
    email: str | None = None
    investor_type: InvestorType | None = None
    total_invested: Decimal | None = None
    phone: str | None = None
    address: str | None = None

    def provided_fields(self) -> dict[str, Any]:
        return _provided_fields(self)


@dataclass(frozen=True)
class CreatePortfolioInput:
    name: str
    investor_id: int
    fund_id: int
    cash_balance: Decimal = Decimal("0")
    performance: Decimal = Decimal("0")


@dataclass(frozen=True)
class UpdatePortfolioInput:
    id: int
    name: str | None = None
    investor_id: int | None = None
    fund_id: int | None = None
    cash_balance: Decimal | None = None
    performance: Decimal | None = None

    def provided_fields(self) -> dict[str, Any]:
        return _provided_fields(self)


@dataclass(frozen=True)
class CreateAssetInput:
    portfolio_id: int
    symbol: str
    name: str
    asset_type: AssetType
    quantity: Decimal
    unit_price: Decimal
    market_value: Decimal
    cost_basis: Decimal
    purchase_date: datetime


@dataclass(frozen=True)
class UpdateAssetInput:
    id: int
    portfolio_id: int | None = None
    symbol: str | None = None
    name: str | None = None
    asset_type: AssetType | None = None
    quantity: Decimal | None = None
    unit_price: Decimal | None = None
    market_value: Decimal | None = None
    cost_basis: Decimal | None = None
    purchase_date: datetime | None = None

    def provided_fields(self) -> dict[str, Any]:
        return _provided_fields(self)


__all__ = [
    "CreateAccountInput",
    "UpdateAccountInput",
    "CreateTransactionInput",
    "UpdateTransactionInput",
    "CreateFundInput",
    "UpdateFundInput",
    "CreateInvestorInput",
    "UpdateInvestorInput",
    "CreatePortfolioInput",
    "UpdatePortfolioInput",
    "CreateAssetInput",
    "UpdateAssetInput",
]
