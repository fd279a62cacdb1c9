"""Shared fixtures running use cases against a SQLite ledger database."""

from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.exc import OperationalError

from src.domain.constants import AccountCategory, FundType, InvestorType
from src.domain.models import (
    CreateAccountInput,
    CreateFundInput,
    CreateInvestorInput,
    CreatePortfolioInput,
)
from src.infrastructure.container import build_ledger_services
from src.infrastructure.db import configure_sqlite_engine
from src.infrastructure.ledger_repository import SqlAlchemyLedgerUnitOfWork
from src.infrastructure.ledger_schema import accounts, portfolios, prepare_schema


class _EnginePort:
    """DatabaseEnginePort stand-in returning a fixed engine."""

    def __init__(self, engine) -> None:
        self._engine = engine

    def get_ledger_engine(self):
        return self._engine


@pytest.fixture
def ledger_engine(tmp_path):
    """File-backed SQLite engine configured like the production adapter."""
    engine = configure_sqlite_engine(
        create_engine(
            f"sqlite:///{tmp_path / 'ledger.db'}",
            connect_args={"check_same_thread": False},
            future=True,
        )
    )

    prepare_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_port(ledger_engine):
    return _EnginePort(ledger_engine)


@pytest.fixture
def unit_of_work(db_port):
    return SqlAlchemyLedgerUnitOfWork(db_port)


@pytest.fixture
def failing_unit_of_work(unit_of_work):
    """Build a unit of work whose session fails on the Nth call of a method.

    Calls before the failing one go through to the real session, so the
    failure lands in the middle of the use case's unit of work.
    """

    def _make(method_name: str, fail_on_call: int = 1):
        class _FailingUnitOfWork:
            @contextmanager
            def begin(self, snapshot: bool = False):
                with unit_of_work.begin(snapshot=snapshot) as session:
                    original = getattr(session, method_name)
                    calls = {"n": 0}

                    def _call(*args, **kwargs):
                        calls["n"] += 1
                        if calls["n"] == fail_on_call:
                            raise OperationalError(
                                method_name, {}, Exception("disk I/O error")
                            )
                        return original(*args, **kwargs)

                    setattr(session, method_name, _call)
                    yield session

        return _FailingUnitOfWork()

    return _make


@pytest.fixture
def fake_logger():
    return MagicMock()


@pytest.fixture
def ledger(db_port, fake_logger):
    """All ledger use cases wired to the SQLite database."""
    return build_ledger_services(db_port=db_port, logger=fake_logger)


@pytest.fixture
def stored_balance(ledger_engine):
    """Read an account balance straight from the table."""

    def _read(account_id: int) -> Decimal:
        with ledger_engine.connect() as conn:
            value = conn.execute(
                select(accounts.c.balance).where(accounts.c.id == account_id)
            ).scalar_one()
        return Decimal(str(value)).quantize(Decimal("0.01"))

    return _read


@pytest.fixture
def stored_total(ledger_engine):
    """Read a portfolio total value straight from the table."""

    def _read(portfolio_id: int) -> Decimal:
        with ledger_engine.connect() as conn:
            value = conn.execute(
                select(portfolios.c.total_value).where(
                    portfolios.c.id == portfolio_id
                )
            ).scalar_one()
        return Decimal(str(value)).quantize(Decimal("0.01"))

    return _read


@pytest.fixture
def make_account(ledger):
    counter = {"n": 0}

    def _make(
        category: AccountCategory = AccountCategory.ASSET,
        balance: str = "1000.00",
    ):
        counter["n"] += 1
        return ledger.create_account.execute(
            CreateAccountInput(
                name=f"Account {counter['n']}",
                account_number=f"ACC-{counter['n']:04d}",
                category=category,
                balance=Decimal(balance),
            )
        )

    return _make


@pytest.fixture
def make_fund(ledger):
    def _make(name: str = "Global Equity"):
        return ledger.create_fund.execute(
            CreateFundInput(
                name=name,
                fund_type=FundType.EQUITY,
                inception_date=datetime(2020, 1, 1),
                nav=Decimal("10.5000"),
                total_assets=Decimal("1000000.00"),
                management_fee=Decimal("0.0150"),
            )
        )

    return _make


@pytest.fixture
def make_investor(ledger):
    counter = {"n": 0}

    def _make():
        counter["n"] += 1
        return ledger.create_investor.execute(
            CreateInvestorInput(
                name=f"Investor {counter['n']}",
                email=f"investor{counter['n']}@example.com",
                investor_type=InvestorType.INDIVIDUAL,
                total_invested=Decimal("50000.00"),
            )
        )

    return _make


@pytest.fixture
def make_portfolio(ledger, make_fund, make_investor):
    def _make(fund=None, investor=None, name: str = "Core"):
        fund = fund or make_fund()
        investor = investor or make_investor()
        return ledger.create_portfolio.execute(
            CreatePortfolioInput(
                name=name,
                investor_id=investor.id,
                fund_id=fund.id,
                cash_balance=Decimal("250.00"),
            )
        )

    return _make
