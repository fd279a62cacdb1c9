"""Domain models for funds, investors, portfolios and their assets."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.domain.constants import AssetType, FundType, InvestorType


@dataclass(frozen=True)
class Fund:
    id: int
    name: str
    fund_type: FundType
    inception_date: datetime
    nav: Decimal
    total_assets: Decimal
    management_fee: Decimal
    description: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Investor:
    id: int
    name: str
    email: str
    investor_type: InvestorType
    total_invested: Decimal
    phone: str | None
    address: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Portfolio:
    """Investor holding in a fund.

    Attributes:
        total_value: Sum of the market values of the portfolio's assets.
        cash_balance: Uninvested cash, maintained by the caller.
        performance: Performance percentage, maintained by the caller.
    """

    id: int
    name: str
    investor_id: int
    fund_id: int
    total_value: Decimal
    cash_balance: Decimal
    performance: Decimal
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Asset:
    """Holding assigned to a portfolio; ``market_value`` is its valuation."""

    id: int
    portfolio_id: int
    symbol: str
    name: str
    asset_type: AssetType
    quantity: Decimal
    unit_price: Decimal
    market_value: Decimal
    cost_basis: Decimal
    purchase_date: datetime
    created_at: datetime
    updated_at: datetime


__all__ = ["Fund", "Investor", "Portfolio", "Asset"]
