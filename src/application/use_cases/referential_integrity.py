"""Use cases deleting parent records with dependents.

Accounts and portfolios own their children: deleting them removes the
children first, then the parent, in one unit of work. Funds and investors
are shared references: deleting them is blocked while any portfolio still
points at them.
"""

from src.application.ports.ledger_repository import LedgerUnitOfWorkPort
from src.application.use_cases.unit_of_work_support import log_storage_failure
from src.domain.errors import ConflictBlockedError
from src.infrastructure.logging.logger import get_app_logger


class DeleteAccountUseCase:
    """Delete an account together with all of its transactions."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            unit_of_work: Port opening atomic units of work.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, account_id: int) -> bool:
        """Delete the account.

        Args:
            account_id: Identifier of the account to remove.

        Returns:
            bool: True when removed, False when it did not exist.
        """
        with log_storage_failure(self._logger, "Account deletion"):
            with self._unit_of_work.begin() as session:
                if session.get_account(account_id, lock=True) is None:
                    return False
                removed = session.delete_transactions_for_account(account_id)
                session.delete_account(account_id)

        self._logger.info(
            f"Deleted account {account_id} and {removed} transaction(s)"
        )
        return True


class DeletePortfolioUseCase:
    """Delete a portfolio together with all of its assets."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            unit_of_work: Port opening atomic units of work.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, portfolio_id: int) -> bool:
        """Delete the portfolio.

        Args:
            portfolio_id: Identifier of the portfolio to remove.

        Returns:
            bool: True when removed, False when it did not exist.
        """
        with log_storage_failure(self._logger, "Portfolio deletion"):
            with self._unit_of_work.begin() as session:
                if session.get_portfolio(portfolio_id, lock=True) is None:
                    return False
                removed = session.delete_assets_for_portfolio(portfolio_id)
                session.delete_portfolio(portfolio_id)

        self._logger.info(
            f"Deleted portfolio {portfolio_id} and {removed} asset(s)"
        )
        return True


class DeleteFundUseCase:
    """Delete a fund that no portfolio references."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, fund_id: int) -> bool:
        """Delete the fund.

        Returns:
            bool: True when removed, False when it did not exist.

        Raises:
            ConflictBlockedError: If portfolios still reference the fund.
        """
        with log_storage_failure(self._logger, "Fund deletion"):
            with self._unit_of_work.begin() as session:
                if session.get_fund(fund_id, lock=True) is None:
                    return False
                dependents = session.count_portfolios_for_fund(fund_id)
                if dependents > 0:
                    raise ConflictBlockedError(
                        f"Cannot delete fund {fund_id}: {dependents} "
                        f"portfolio(s) are still associated with this fund",
                        dependent_count=dependents,
                    )
                session.delete_fund(fund_id)

        self._logger.info(f"Deleted fund {fund_id}")
        return True


class DeleteInvestorUseCase:
    """Delete an investor that no portfolio references."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, investor_id: int) -> bool:
        """Delete the investor.

        Returns:
            bool: True when removed, False when it did not exist.

        Raises:
            ConflictBlockedError: If portfolios still reference the investor.
        """
        with log_storage_failure(self._logger, "Investor deletion"):
            with self._unit_of_work.begin() as session:
                if session.get_investor(investor_id, lock=True) is None:
                    return False
                dependents = session.count_portfolios_for_investor(investor_id)
                if dependents > 0:
                    raise ConflictBlockedError(
                        f"Cannot delete investor {investor_id}: investor has "
                        f"{dependents} associated portfolio(s)",
                        dependent_count=dependents,
                    )
                session.delete_investor(investor_id)

        self._logger.info(f"Deleted investor {investor_id}")
        return True


__all__ = [
    "DeleteAccountUseCase",
    "DeletePortfolioUseCase",
    "DeleteFundUseCase",
    "DeleteInvestorUseCase",
]
