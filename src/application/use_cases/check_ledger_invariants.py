"""Use case verifying the ledger's aggregate invariants.

For every account the stored balance must equal the opening balance plus
the signed effect of its current transactions. For every portfolio the
stored total value must equal the sum of its assets' market values. The
check only reads; drifts are reported and logged, never repaired here.
"""

from decimal import Decimal

from src.application.ports.ledger_repository import (
    LedgerSessionPort,
    LedgerUnitOfWorkPort,
)
from src.application.use_cases.unit_of_work_support import log_storage_failure
from src.domain.models import (
    Account,
    AccountBalanceDrift,
    LedgerInvariantReport,
    Portfolio,
    PortfolioValueDrift,
)
from src.domain.policies.posting_rules import posting_delta
from src.domain.services.validation import validate_balance_sign
from src.infrastructure.logging.logger import get_app_logger


def expected_account_balance(
    account: Account,
    session: LedgerSessionPort,
) -> Decimal:
    """Fold an account's transactions through the posting rules."""
    return account.opening_balance + sum(
        (
            posting_delta(account.category, txn.direction, txn.amount)
            for txn in session.list_transactions_for_account(account.id)
        ),
        Decimal("0"),
    )


def expected_portfolio_total(
    portfolio: Portfolio,
    session: LedgerSessionPort,
) -> Decimal:
    """Sum the market values of a portfolio's current assets."""
    return sum(
        (
            asset.market_value
            for asset in session.list_assets_for_portfolio(portfolio.id)
        ),
        Decimal("0"),
    )


class CheckLedgerInvariantsUseCase:
    """Compare stored aggregates with values derived from child records."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            unit_of_work: Port opening atomic units of work.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self) -> LedgerInvariantReport:
        """Scan every account and portfolio within one consistent snapshot.

        Returns:
            LedgerInvariantReport: Counts of checked records and any drifts.
        """
        account_drifts: list[AccountBalanceDrift] = []
        portfolio_drifts: list[PortfolioValueDrift] = []

        with log_storage_failure(self._logger, "Ledger invariant check"):
            with self._unit_of_work.begin(snapshot=True) as session:
                accounts = session.list_accounts()
                for account in accounts:
                    expected = expected_account_balance(account, session)
                    if account.balance != expected:
                        account_drifts.append(
                            AccountBalanceDrift(
                                account_id=account.id,
                                stored_balance=account.balance,
                                expected_balance=expected,
                            )
                        )
                    validate_balance_sign(
                        account.id,
                        account.category,
                        account.balance,
                        self._logger,
                    )

                portfolios = session.list_portfolios()
                for portfolio in portfolios:
                    expected = expected_portfolio_total(portfolio, session)
                    if portfolio.total_value != expected:
                        portfolio_drifts.append(
                            PortfolioValueDrift(
                                portfolio_id=portfolio.id,
                                stored_total=portfolio.total_value,
                                expected_total=expected,
                            )
                        )

        for drift in account_drifts:
            self._logger.warning(
                f"Account {drift.account_id} balance drift: stored "
                f"{drift.stored_balance}, expected {drift.expected_balance}"
            )
        for drift in portfolio_drifts:
            self._logger.warning(
                f"Portfolio {drift.portfolio_id} total drift: stored "
                f"{drift.stored_total}, expected {drift.expected_total}"
            )
        self._logger.info(
            f"Checked {len(accounts)} accounts and {len(portfolios)} "
            f"portfolios; {len(account_drifts) + len(portfolio_drifts)} drift(s)"
        )
        return LedgerInvariantReport(
            accounts_checked=len(accounts),
            portfolios_checked=len(portfolios),
            account_drifts=account_drifts,
            portfolio_drifts=portfolio_drifts,
        )


__all__ = [
    "expected_account_balance",
    "expected_portfolio_total",
    "CheckLedgerInvariantsUseCase",
]
