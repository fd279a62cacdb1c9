"""Domain models describing ledger invariant checks."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class AccountBalanceDrift:
    """Account whose stored balance differs from its transaction fold."""

    account_id: int
    stored_balance: Decimal
    expected_balance: Decimal

    @property
    def difference(self) -> Decimal:
        """Return stored minus expected balance."""
        return self.stored_balance - self.expected_balance


@dataclass(frozen=True)
class PortfolioValueDrift:
    """Portfolio whose total value differs from the sum of its assets."""

    portfolio_id: int
    stored_total: Decimal
    expected_total: Decimal

    @property
    def difference(self) -> Decimal:
        """Return stored minus expected total."""
        return self.stored_total - self.expected_total


@dataclass(frozen=True)
class LedgerInvariantReport:
    """Outcome of a full invariant scan."""

    accounts_checked: int
    portfolios_checked: int
    account_drifts: list[AccountBalanceDrift] = field(default_factory=list)
    portfolio_drifts: list[PortfolioValueDrift] = field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        return not self.account_drifts and not self.portfolio_drifts


__all__ = [
    "AccountBalanceDrift",
    "PortfolioValueDrift",
    "LedgerInvariantReport",
]
