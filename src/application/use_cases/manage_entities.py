"""Use cases registering and editing parent records.

Aggregates are never accepted here: an account's balance only moves
through the transaction ledger and a portfolio's total value only through
the asset rollup. A new account records its starting balance as
``opening_balance``; a new portfolio starts with a total value of zero.
"""

from decimal import Decimal

from src.application.ports.ledger_repository import (
    LedgerSessionPort,
    LedgerUnitOfWorkPort,
)
from src.application.use_cases.unit_of_work_support import (
    log_storage_failure,
    utc_now,
)
from src.domain.errors import ConflictBlockedError, ValidationPreconditionError
from src.domain.models import (
    Account,
    CreateAccountInput,
    CreateFundInput,
    CreateInvestorInput,
    CreatePortfolioInput,
    Fund,
    Investor,
    Portfolio,
    UpdateAccountInput,
    UpdateFundInput,
    UpdateInvestorInput,
    UpdatePortfolioInput,
)
from src.domain.services.normalization import normalize_email, normalize_text
from src.infrastructure.logging.logger import get_app_logger


class CreateAccountUseCase:
    """Open a ledger account with a starting balance."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, data: CreateAccountInput) -> Account:
        """Create the account.

        Args:
            data: Validated account input.

        Returns:
            Account: The stored account.
        """
        with log_storage_failure(self._logger, "Account creation"):
            with self._unit_of_work.begin() as session:
                now = utc_now()
                account = session.insert_account(
                    {
                        "name": data.name.strip(),
                        "account_number": data.account_number.strip(),
                        "category": data.category,
                        "balance": data.balance,
                        "opening_balance": data.balance,
                        "description": normalize_text(data.description),
                        "created_at": now,
                        "updated_at": now,
                    }
                )
        self._logger.info(
            f"Created {account.category.value} account {account.id} "
            f"with opening balance {account.opening_balance}"
        )
        return account


class UpdateAccountUseCase:
    """Edit descriptive account fields and, when safe, its category."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, data: UpdateAccountInput) -> Account | None:
        """Apply the provided changes to an account.

        Args:
            data: Partial update; None fields are left unchanged.

        Returns:
            Account | None: Updated account, or None when it does not exist.

        Raises:
            ConflictBlockedError: If the category changes while transactions
                are posted to the account.
        """
        changes = data.provided_fields()
        if "description" in changes:
            changes["description"] = normalize_text(changes["description"])

        with log_storage_failure(self._logger, "Account update"):
            with self._unit_of_work.begin() as session:
                current = session.get_account(data.id, lock=True)
                if current is None:
                    return None
                category = changes.get("category", current.category)
                if category != current.category:
                    posted = session.count_transactions_for_account(current.id)
                    if posted > 0:
                        raise ConflictBlockedError(
                            f"Cannot change category of account {current.id}: "
                            f"{posted} transaction(s) are posted to it",
                            dependent_count=posted,
                        )
                changes["updated_at"] = utc_now()
                account = session.update_account(current.id, changes)

        self._logger.info(f"Updated account {account.id}")
        return account


class CreateFundUseCase:
    """Register a fund."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, data: CreateFundInput) -> Fund:
        with log_storage_failure(self._logger, "Fund creation"):
            with self._unit_of_work.begin() as session:
                now = utc_now()
                fund = session.insert_fund(
                    {
                        "name": data.name.strip(),
                        "fund_type": data.fund_type,
                        "inception_date": data.inception_date,
                        "nav": data.nav,
                        "total_assets": data.total_assets,
                        "management_fee": data.management_fee,
                        "description": normalize_text(data.description),
                        "created_at": now,
                        "updated_at": now,
                    }
                )
        self._logger.info(f"Created fund {fund.id} ({fund.name})")
        return fund


class UpdateFundUseCase:
    """Edit a fund's descriptive and valuation fields."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, data: UpdateFundInput) -> Fund | None:
        """Apply the provided changes to a fund.

        Returns:
            Fund | None: Updated fund, or None when it does not exist.
        """
        changes = data.provided_fields()
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        if "description" in changes:
            changes["description"] = normalize_text(changes["description"])

        with log_storage_failure(self._logger, "Fund update"):
            with self._unit_of_work.begin() as session:
                if session.get_fund(data.id, lock=True) is None:
                    return None
                changes["updated_at"] = utc_now()
                fund = session.update_fund(data.id, changes)

        self._logger.info(f"Updated fund {fund.id}")
        return fund


class CreateInvestorUseCase:
    """Register an investor."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, data: CreateInvestorInput) -> Investor:
        with log_storage_failure(self._logger, "Investor creation"):
            with self._unit_of_work.begin() as session:
                now = utc_now()
                investor = session.insert_investor(
                    {
                        "name": data.name.strip(),
                        "email": normalize_email(data.email),
                        "investor_type": data.investor_type,
                        "total_invested": data.total_invested,
                        "phone": normalize_text(data.phone),
                        "address": normalize_text(data.address),
                        "created_at": now,
                        "updated_at": now,
                    }
                )
        self._logger.info(f"Created investor {investor.id}")
        return investor


class UpdateInvestorUseCase:
    """Edit an investor's contact and classification fields."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, data: UpdateInvestorInput) -> Investor | None:
        changes = data.provided_fields()
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        if "email" in changes:
            changes["email"] = normalize_email(changes["email"])
        for key in ("phone", "address"):
            if key in changes:
                changes[key] = normalize_text(changes[key])

        with log_storage_failure(self._logger, "Investor update"):
            with self._unit_of_work.begin() as session:
                if session.get_investor(data.id, lock=True) is None:
                    return None
                changes["updated_at"] = utc_now()
                investor = session.update_investor(data.id, changes)

        self._logger.info(f"Updated investor {investor.id}")
        return investor


def _require_portfolio_parents(
    session: LedgerSessionPort,
    investor_id: int | None,
    fund_id: int | None,
) -> None:
    """Raise when a referenced investor or fund does not exist."""
    if investor_id is not None and session.get_investor(investor_id) is None:
        raise ValidationPreconditionError(
            f"Investor with ID {investor_id} not found"
        )
    if fund_id is not None and session.get_fund(fund_id) is None:
        raise ValidationPreconditionError(f"Fund with ID {fund_id} not found")


class CreatePortfolioUseCase:
    """Open a portfolio for an investor in a fund."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, data: CreatePortfolioInput) -> Portfolio:
        """Create the portfolio with an empty valuation.

        Raises:
            ValidationPreconditionError: If the investor or fund is missing.
        """
        with log_storage_failure(self._logger, "Portfolio creation"):
            with self._unit_of_work.begin() as session:
                _require_portfolio_parents(
                    session, data.investor_id, data.fund_id
                )
                now = utc_now()
                portfolio = session.insert_portfolio(
                    {
                        "name": data.name.strip(),
                        "investor_id": data.investor_id,
                        "fund_id": data.fund_id,
                        "total_value": Decimal("0"),
                        "cash_balance": data.cash_balance,
                        "performance": data.performance,
                        "created_at": now,
                        "updated_at": now,
                    }
                )
        self._logger.info(
            f"Created portfolio {portfolio.id} for investor "
            f"{portfolio.investor_id} in fund {portfolio.fund_id}"
        )
        return portfolio


class UpdatePortfolioUseCase:
    """Edit portfolio fields other than its total value."""

    def __init__(self, unit_of_work: LedgerUnitOfWorkPort, logger=None) -> None:
        self._unit_of_work = unit_of_work
        self._logger = logger or get_app_logger()

    def execute(self, data: UpdatePortfolioInput) -> Portfolio | None:
        """Apply the provided changes to a portfolio.

        Returns:
            Portfolio | None: Updated portfolio, or None when it does not exist.

        Raises:
            ValidationPreconditionError: If a new investor or fund is missing.
        """
        changes = data.provided_fields()
        with log_storage_failure(self._logger, "Portfolio update"):
            with self._unit_of_work.begin() as session:
                if session.get_portfolio(data.id, lock=True) is None:
                    return None
                _require_portfolio_parents(
                    session,
                    changes.get("investor_id"),
                    changes.get("fund_id"),
                )
                changes["updated_at"] = utc_now()
                portfolio = session.update_portfolio(data.id, changes)

        self._logger.info(f"Updated portfolio {portfolio.id}")
        return portfolio


__all__ = [
    "CreateAccountUseCase",
    "UpdateAccountUseCase",
    "CreateFundUseCase",
    "UpdateFundUseCase",
    "CreateInvestorUseCase",
    "UpdateInvestorUseCase",
    "CreatePortfolioUseCase",
    "UpdatePortfolioUseCase",
]
