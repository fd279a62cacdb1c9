"""SQLAlchemy-backed unit of work and session for ledger records.

Row mappers in this module are the only place where stored numeric values
are converted to the application's fixed-point ``Decimal`` values.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from sqlalchemy import Table, delete, func, insert, select, update
from sqlalchemy.engine import Connection

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import (
    LedgerSessionPort,
    LedgerUnitOfWorkPort,
)
from src.domain.constants import (
    AccountCategory,
    AssetType,
    FundType,
    InvestorType,
    PostingDirection,
)
from src.domain.models import (
    Account,
    Asset,
    Fund,
    Investor,
    Portfolio,
    Transaction,
)
from src.infrastructure.ledger_schema import (
    accounts,
    assets,
    funds,
    investors,
    portfolios,
    transactions,
)
from src.utils.decimal_utils import to_money, to_price, to_quantity


SNAPSHOT_ISOLATION_LEVEL = "REPEATABLE READ"


def _account_from_row(row) -> Account:
    return Account(
        id=row.id,
        name=row.name,
        account_number=row.account_number,
        category=AccountCategory(row.category),
        balance=to_money(row.balance),
        opening_balance=to_money(row.opening_balance),
        description=row.description,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _transaction_from_row(row) -> Transaction:
    return Transaction(
        id=row.id,
        account_id=row.account_id,
        direction=PostingDirection(row.direction),
        amount=to_money(row.amount),
        description=row.description,
        transaction_date=row.transaction_date,
        reference_number=row.reference_number,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _fund_from_row(row) -> Fund:
    return Fund(
        id=row.id,
        name=row.name,
        fund_type=FundType(row.fund_type),
        inception_date=row.inception_date,
        nav=to_price(row.nav),
        total_assets=to_money(row.total_assets),
        management_fee=to_price(row.management_fee),
        description=row.description,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _investor_from_row(row) -> Investor:
    return Investor(
        id=row.id,
        name=row.name,
        email=row.email,
        investor_type=InvestorType(row.investor_type),
        total_invested=to_money(row.total_invested),
        phone=row.phone,
        address=row.address,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _portfolio_from_row(row) -> Portfolio:
    return Portfolio(
        id=row.id,
        name=row.name,
        investor_id=row.investor_id,
        fund_id=row.fund_id,
        total_value=to_money(row.total_value),
        cash_balance=to_money(row.cash_balance),
        performance=to_price(row.performance),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _asset_from_row(row) -> Asset:
    return Asset(
        id=row.id,
        portfolio_id=row.portfolio_id,
        symbol=row.symbol,
        name=row.name,
        asset_type=AssetType(row.asset_type),
        quantity=to_quantity(row.quantity),
        unit_price=to_price(row.unit_price),
        market_value=to_money(row.market_value),
        cost_basis=to_money(row.cost_basis),
        purchase_date=row.purchase_date,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _storage_values(values: dict[str, Any]) -> dict[str, Any]:
    """Replace enum members with their stored string values."""
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in values.items()
    }


class SqlAlchemyLedgerSession(LedgerSessionPort):
    """Ledger session bound to one open SQLAlchemy connection."""

    def __init__(self, conn: Connection) -> None:
        """Initialize the session.

        Args:
            conn: Connection with an active transaction.
        """
        self._conn = conn

    # Generic helpers

    def _fetch_one(self, table: Table, row_id: int, lock: bool = False):
        query = select(table).where(table.c.id == row_id)
        if lock:
            query = query.with_for_update()
        return self._conn.execute(query).first()

    def _insert(self, table: Table, values: dict[str, Any]) -> int:
        result = self._conn.execute(
            insert(table).values(**_storage_values(values))
        )
        return result.inserted_primary_key[0]

    def _update(self, table: Table, row_id: int, values: dict[str, Any]):
        self._conn.execute(
            update(table)
            .where(table.c.id == row_id)
            .values(**_storage_values(values))
        )
        return self._fetch_one(table, row_id)

    def _delete(self, table: Table, row_id: int) -> int:
        result = self._conn.execute(delete(table).where(table.c.id == row_id))
        return result.rowcount

    def _count(self, table: Table, column_name: str, value: int) -> int:
        query = (
            select(func.count())
            .select_from(table)
            .where(table.c[column_name] == value)
        )
        return int(self._conn.execute(query).scalar_one())

    # Accounts

    def get_account(self, account_id: int, lock: bool = False) -> Account | None:
        row = self._fetch_one(accounts, account_id, lock=lock)
        return _account_from_row(row) if row is not None else None

    def list_accounts(self) -> list[Account]:
        rows = self._conn.execute(select(accounts).order_by(accounts.c.id)).all()
        return [_account_from_row(row) for row in rows]

    def insert_account(self, values: dict[str, Any]) -> Account:
        account_id = self._insert(accounts, values)
        return _account_from_row(self._fetch_one(accounts, account_id))

    def update_account(self, account_id: int, values: dict[str, Any]) -> Account:
        return _account_from_row(self._update(accounts, account_id, values))

    def adjust_account_balance(
        self,
        account_id: int,
        delta: Decimal,
        at: datetime,
    ) -> None:
        self._conn.execute(
            update(accounts)
            .where(accounts.c.id == account_id)
            .values(balance=accounts.c.balance + delta, updated_at=at)
        )

    def delete_account(self, account_id: int) -> int:
        return self._delete(accounts, account_id)

    # Transactions

    def get_transaction(
        self,
        transaction_id: int,
        lock: bool = False,
    ) -> Transaction | None:
        row = self._fetch_one(transactions, transaction_id, lock=lock)
        return _transaction_from_row(row) if row is not None else None

    def list_transactions_for_account(self, account_id: int) -> list[Transaction]:
        rows = self._conn.execute(
            select(transactions)
            .where(transactions.c.account_id == account_id)
            .order_by(transactions.c.id)
        ).all()
        return [_transaction_from_row(row) for row in rows]

    def count_transactions_for_account(self, account_id: int) -> int:
        return self._count(transactions, "account_id", account_id)

    def insert_transaction(self, values: dict[str, Any]) -> Transaction:
        transaction_id = self._insert(transactions, values)
        return _transaction_from_row(
            self._fetch_one(transactions, transaction_id)
        )

    def update_transaction(
        self,
        transaction_id: int,
        values: dict[str, Any],
        expected: Transaction | None = None,
    ) -> Transaction | None:
        query = update(transactions).where(transactions.c.id == transaction_id)
        if expected is not None:
            query = query.where(
                transactions.c.account_id == expected.account_id,
                transactions.c.direction == expected.direction.value,
                transactions.c.amount == expected.amount,
            )
        result = self._conn.execute(query.values(**_storage_values(values)))
        if result.rowcount != 1:
            return None
        return _transaction_from_row(
            self._fetch_one(transactions, transaction_id)
        )

    def delete_transaction(self, transaction_id: int) -> int:
        return self._delete(transactions, transaction_id)

    def delete_transactions_for_account(self, account_id: int) -> int:
        result = self._conn.execute(
            delete(transactions).where(transactions.c.account_id == account_id)
        )
        return result.rowcount

    # Funds and investors

    def get_fund(self, fund_id: int, lock: bool = False) -> Fund | None:
        row = self._fetch_one(funds, fund_id, lock=lock)
        return _fund_from_row(row) if row is not None else None

    def insert_fund(self, values: dict[str, Any]) -> Fund:
        fund_id = self._insert(funds, values)
        return _fund_from_row(self._fetch_one(funds, fund_id))

    def update_fund(self, fund_id: int, values: dict[str, Any]) -> Fund:
        return _fund_from_row(self._update(funds, fund_id, values))

    def delete_fund(self, fund_id: int) -> int:
        return self._delete(funds, fund_id)

    def get_investor(
        self,
        investor_id: int,
        lock: bool = False,
    ) -> Investor | None:
        row = self._fetch_one(investors, investor_id, lock=lock)
        return _investor_from_row(row) if row is not None else None

    def insert_investor(self, values: dict[str, Any]) -> Investor:
        investor_id = self._insert(investors, values)
        return _investor_from_row(self._fetch_one(investors, investor_id))

    def update_investor(
        self,
        investor_id: int,
        values: dict[str, Any],
    ) -> Investor:
        return _investor_from_row(self._update(investors, investor_id, values))

    def delete_investor(self, investor_id: int) -> int:
        return self._delete(investors, investor_id)

    # Portfolios

    def get_portfolio(
        self,
        portfolio_id: int,
        lock: bool = False,
    ) -> Portfolio | None:
        row = self._fetch_one(portfolios, portfolio_id, lock=lock)
        return _portfolio_from_row(row) if row is not None else None

    def list_portfolios(self) -> list[Portfolio]:
        rows = self._conn.execute(
            select(portfolios).order_by(portfolios.c.id)
        ).all()
        return [_portfolio_from_row(row) for row in rows]

    def count_portfolios_for_fund(self, fund_id: int) -> int:
        return self._count(portfolios, "fund_id", fund_id)

    def count_portfolios_for_investor(self, investor_id: int) -> int:
        return self._count(portfolios, "investor_id", investor_id)

    def insert_portfolio(self, values: dict[str, Any]) -> Portfolio:
        portfolio_id = self._insert(portfolios, values)
        return _portfolio_from_row(self._fetch_one(portfolios, portfolio_id))

    def update_portfolio(
        self,
        portfolio_id: int,
        values: dict[str, Any],
    ) -> Portfolio:
        return _portfolio_from_row(
            self._update(portfolios, portfolio_id, values)
        )

    def recompute_portfolio_total(
        self,
        portfolio_id: int,
        at: datetime,
    ) -> Decimal:
        assets_total = (
            select(func.sum(assets.c.market_value))
            .where(assets.c.portfolio_id == portfolio_id)
            .scalar_subquery()
        )
        self._conn.execute(
            update(portfolios)
            .where(portfolios.c.id == portfolio_id)
            .values(
                total_value=func.coalesce(assets_total, 0),
                updated_at=at,
            )
        )
        stored = self._conn.execute(
            select(portfolios.c.total_value).where(
                portfolios.c.id == portfolio_id
            )
        ).scalar_one()
        return to_money(stored)

    def delete_portfolio(self, portfolio_id: int) -> int:
        return self._delete(portfolios, portfolio_id)

    # Assets

    def get_asset(self, asset_id: int, lock: bool = False) -> Asset | None:
        row = self._fetch_one(assets, asset_id, lock=lock)
        return _asset_from_row(row) if row is not None else None

    def list_assets_for_portfolio(self, portfolio_id: int) -> list[Asset]:
        rows = self._conn.execute(
            select(assets)
            .where(assets.c.portfolio_id == portfolio_id)
            .order_by(assets.c.id)
        ).all()
        return [_asset_from_row(row) for row in rows]

    def insert_asset(self, values: dict[str, Any]) -> Asset:
        asset_id = self._insert(assets, values)
        return _asset_from_row(self._fetch_one(assets, asset_id))

    def update_asset(self, asset_id: int, values: dict[str, Any]) -> Asset:
        return _asset_from_row(self._update(assets, asset_id, values))

    def delete_asset(self, asset_id: int) -> int:
        return self._delete(assets, asset_id)

    def delete_assets_for_portfolio(self, portfolio_id: int) -> int:
        result = self._conn.execute(
            delete(assets).where(assets.c.portfolio_id == portfolio_id)
        )
        return result.rowcount


class SqlAlchemyLedgerUnitOfWork(LedgerUnitOfWorkPort):
    """Unit of work mapping each ``begin()`` block to one DB transaction."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the unit of work.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    @contextmanager
    def begin(self, snapshot: bool = False) -> Iterator[SqlAlchemyLedgerSession]:
        """Yield a session whose changes commit when the block exits cleanly.

        Args:
            snapshot: Run the block under ``REPEATABLE READ`` so every
                statement sees the same committed state. SQLite engines
                already hold the database lock for the whole block (see
                ``configure_sqlite_engine``) and keep their default level.
        """
        engine = self._db_port.get_ledger_engine()
        if not snapshot or engine.dialect.name == "sqlite":
            with engine.begin() as conn:
                yield SqlAlchemyLedgerSession(conn)
            return
        with engine.connect() as conn:
            conn.execution_options(isolation_level=SNAPSHOT_ISOLATION_LEVEL)
            with conn.begin():
                yield SqlAlchemyLedgerSession(conn)


__all__ = ["SqlAlchemyLedgerSession", "SqlAlchemyLedgerUnitOfWork"]
