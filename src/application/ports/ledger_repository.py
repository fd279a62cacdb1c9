"""Ports for reading and mutating ledger records inside a unit of work.

A ``LedgerSessionPort`` is only valid inside the ``with`` block opened by
``LedgerUnitOfWorkPort.begin()``. Everything done through one session
commits together, or rolls back together when the block raises.
"""

from contextlib import AbstractContextManager
from datetime import datetime
from decimal import Decimal
from typing import Any, Protocol

from src.domain.models import (
    Account,
    Asset,
    Fund,
    Investor,
    Portfolio,
    Transaction,
)


class LedgerSessionPort(Protocol):
    """Storage operations available within one atomic unit of work.

    ``lock=True`` reads take a row lock held until the unit of work ends.
    Aggregate writes are expressed relative to the stored value so the
    storage engine applies them atomically.
    """

    # Accounts
    def get_account(self, account_id: int, lock: bool = False) -> Account | None:
        """Return an account by id."""

    def list_accounts(self) -> list[Account]:
        """Return all accounts ordered by id."""

    def insert_account(self, values: dict[str, Any]) -> Account:
        """Insert an account and return it."""

    def update_account(self, account_id: int, values: dict[str, Any]) -> Account:
        """Write non-aggregate account fields and return the account."""

    def adjust_account_balance(
        self,
        account_id: int,
        delta: Decimal,
        at: datetime,
    ) -> None:
        """Add ``delta`` to the stored balance."""

    def delete_account(self, account_id: int) -> int:
        """Delete an account row and return the number of rows removed."""

    # Transactions
    def get_transaction(
        self,
        transaction_id: int,
        lock: bool = False,
    ) -> Transaction | None:
        """Return a transaction by id."""

    def list_transactions_for_account(self, account_id: int) -> list[Transaction]:
        """Return the transactions owned by an account."""

    def count_transactions_for_account(self, account_id: int) -> int:
        """Return the number of transactions owned by an account."""

    def insert_transaction(self, values: dict[str, Any]) -> Transaction:
        """Insert a transaction and return it."""

    def update_transaction(
        self,
        transaction_id: int,
        values: dict[str, Any],
        expected: Transaction | None = None,
    ) -> Transaction | None:
        """Write transaction fields and return the transaction.

        With ``expected``, the row is written only while its account,
        direction and amount still equal the expected posting; ``None`` is
        returned when no row matched.
        """

    def delete_transaction(self, transaction_id: int) -> int:
        """Delete a transaction row and return the number of rows removed."""

    def delete_transactions_for_account(self, account_id: int) -> int:
        """Delete every transaction of an account."""

    # Funds and investors
    def get_fund(self, fund_id: int, lock: bool = False) -> Fund | None:
        """Return a fund by id."""

    def insert_fund(self, values: dict[str, Any]) -> Fund:
        """Insert a fund and return it."""

    def update_fund(self, fund_id: int, values: dict[str, Any]) -> Fund:
        """Write fund fields and return the fund."""

    def delete_fund(self, fund_id: int) -> int:
        """Delete a fund row."""

    def get_investor(
        self,
        investor_id: int,
        lock: bool = False,
    ) -> Investor | None:
        """Return an investor by id."""

    def insert_investor(self, values: dict[str, Any]) -> Investor:
        """Insert an investor and return it."""

    def update_investor(
        self,
        investor_id: int,
        values: dict[str, Any],
    ) -> Investor:
        """Write investor fields and return the investor."""

    def delete_investor(self, investor_id: int) -> int:
        """Delete an investor row."""

    # Portfolios
    def get_portfolio(
        self,
        portfolio_id: int,
        lock: bool = False,
    ) -> Portfolio | None:
        """Return a portfolio by id."""

    def list_portfolios(self) -> list[Portfolio]:
        """Return all portfolios ordered by id."""

    def count_portfolios_for_fund(self, fund_id: int) -> int:
        """Return the number of portfolios referencing a fund."""

    def count_portfolios_for_investor(self, investor_id: int) -> int:
        """Return the number of portfolios referencing an investor."""

    def insert_portfolio(self, values: dict[str, Any]) -> Portfolio:
        """Insert a portfolio and return it."""

    def update_portfolio(
        self,
        portfolio_id: int,
        values: dict[str, Any],
    ) -> Portfolio:
        """Write non-aggregate portfolio fields and return the portfolio."""

    def recompute_portfolio_total(
        self,
        portfolio_id: int,
        at: datetime,
    ) -> Decimal:
        """Set total value to the sum of current asset values; return it."""

    def delete_portfolio(self, portfolio_id: int) -> int:
        """Delete a portfolio row."""

    # Assets
    def get_asset(self, asset_id: int, lock: bool = False) -> Asset | None:
        """Return an asset by id."""

    def list_assets_for_portfolio(self, portfolio_id: int) -> list[Asset]:
        """Return the assets assigned to a portfolio."""

    def insert_asset(self, values: dict[str, Any]) -> Asset:
        """Insert an asset and return it."""

    def update_asset(self, asset_id: int, values: dict[str, Any]) -> Asset:
        """Write asset fields and return the asset."""

    def delete_asset(self, asset_id: int) -> int:
        """Delete an asset row."""

    def delete_assets_for_portfolio(self, portfolio_id: int) -> int:
        """Delete every asset of a portfolio."""


class LedgerUnitOfWorkPort(Protocol):
    """Port opening atomic units of work against the ledger store."""

    def begin(
        self,
        snapshot: bool = False,
    ) -> AbstractContextManager[LedgerSessionPort]:
        """Open a unit of work that commits on success and rolls back on error.

        ``snapshot=True`` requests a repeatable-read view for multi-statement
        scans.
        """


__all__ = ["LedgerSessionPort", "LedgerUnitOfWorkPort"]
