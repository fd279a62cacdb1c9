"""Tests for the SQLAlchemy ledger session."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from src.domain.constants import AccountCategory, PostingDirection
from src.infrastructure.ledger_repository import (
    SNAPSHOT_ISOLATION_LEVEL,
    SqlAlchemyLedgerSession,
    SqlAlchemyLedgerUnitOfWork,
)


NOW = datetime(2024, 5, 1, 12, 0)


def _account_values(number: str, balance: str = "100.00") -> dict:
    return {
        "name": f"Account {number}",
        "account_number": number,
        "category": AccountCategory.ASSET,
        "balance": Decimal(balance),
        "opening_balance": Decimal(balance),
        "created_at": NOW,
        "updated_at": NOW,
    }


def test_insert_maps_enums_and_decimals(unit_of_work):
    with unit_of_work.begin() as session:
        account = session.insert_account(_account_values("1000", "12.5"))

    assert account.category is AccountCategory.ASSET
    assert account.balance == Decimal("12.50")
    assert str(account.balance) == "12.50"


def test_adjust_account_balance_adds_delta_in_place(unit_of_work):
    with unit_of_work.begin() as session:
        account = session.insert_account(_account_values("1001"))
        session.adjust_account_balance(account.id, Decimal("-30.25"), NOW)
        session.adjust_account_balance(account.id, Decimal("5.00"), NOW)
        reloaded = session.get_account(account.id)

    assert reloaded.balance == Decimal("74.75")


def test_get_missing_rows_returns_none(unit_of_work):
    with unit_of_work.begin() as session:
        assert session.get_account(1, lock=True) is None
        assert session.get_portfolio(1) is None
        assert session.get_transaction(1) is None


def test_recompute_portfolio_total_without_assets_is_zero(
    unit_of_work, make_portfolio
):
    portfolio = make_portfolio()

    with unit_of_work.begin() as session:
        total = session.recompute_portfolio_total(portfolio.id, NOW)

    assert total == Decimal("0.00")


def test_unit_of_work_rolls_back_on_error(unit_of_work):
    with pytest.raises(RuntimeError):
        with unit_of_work.begin() as session:
            session.insert_account(_account_values("1002"))
            raise RuntimeError("abort")

    with unit_of_work.begin() as session:
        assert session.list_accounts() == []


def test_foreign_keys_reject_orphan_transactions(unit_of_work):
    with pytest.raises(IntegrityError):
        with unit_of_work.begin() as session:
            session.insert_transaction(
                {
                    "account_id": 999,
                    "direction": PostingDirection.DEBIT,
                    "amount": Decimal("1.00"),
                    "transaction_date": NOW,
                    "created_at": NOW,
                    "updated_at": NOW,
                }
            )


def test_count_and_bulk_delete_transactions(unit_of_work):
    with unit_of_work.begin() as session:
        account = session.insert_account(_account_values("1003"))
        for amount in ("1.00", "2.00"):
            session.insert_transaction(
                {
                    "account_id": account.id,
                    "direction": PostingDirection.CREDIT,
                    "amount": Decimal(amount),
                    "transaction_date": NOW,
                    "created_at": NOW,
                    "updated_at": NOW,
                }
            )
        assert session.count_transactions_for_account(account.id) == 2
        assert session.delete_transactions_for_account(account.id) == 2
        assert session.list_transactions_for_account(account.id) == []


def test_sqlite_unit_of_work_holds_write_lock_from_the_start(unit_of_work):
    """Reads inside a unit of work already run under BEGIN IMMEDIATE."""
    with unit_of_work.begin() as session:
        dbapi_connection = session._conn.connection.dbapi_connection
        assert dbapi_connection.in_transaction
        assert session.get_account(1, lock=True) is None


def test_snapshot_on_server_backend_uses_repeatable_read():
    engine = MagicMock()
    engine.dialect.name = "postgresql"
    db_port = MagicMock()
    db_port.get_ledger_engine.return_value = engine

    with SqlAlchemyLedgerUnitOfWork(db_port).begin(snapshot=True) as session:
        assert isinstance(session, SqlAlchemyLedgerSession)

    conn = engine.connect.return_value.__enter__.return_value
    conn.execution_options.assert_called_once_with(
        isolation_level=SNAPSHOT_ISOLATION_LEVEL
    )
    conn.begin.assert_called_once_with()
    engine.begin.assert_not_called()


def test_update_transaction_with_stale_expectation_writes_nothing(
    unit_of_work,
):
    with unit_of_work.begin() as session:
        account = session.insert_account(_account_values("1004"))
        txn = session.insert_transaction(
            {
                "account_id": account.id,
                "direction": PostingDirection.DEBIT,
                "amount": Decimal("40.00"),
                "transaction_date": NOW,
                "created_at": NOW,
                "updated_at": NOW,
            }
        )
        session.update_transaction(txn.id, {"amount": Decimal("41.00")})

        stale = session.update_transaction(
            txn.id,
            {"amount": Decimal("99.00")},
            expected=txn,
        )
        reloaded = session.get_transaction(txn.id)

    assert stale is None
    assert reloaded.amount == Decimal("41.00")


def test_update_fund_and_investor_write_fields(
    unit_of_work, make_fund, make_investor
):
    fund = make_fund()
    investor = make_investor()

    with unit_of_work.begin() as session:
        updated_fund = session.update_fund(fund.id, {"name": "Renamed"})
        updated_investor = session.update_investor(
            investor.id, {"phone": "+44 20 7946 0000"}
        )

    assert updated_fund.name == "Renamed"
    assert updated_investor.phone == "+44 20 7946 0000"
