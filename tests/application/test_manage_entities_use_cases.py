"""Tests for account, fund, investor and portfolio registration."""

from datetime import datetime
from decimal import Decimal

import pytest

from src.domain.constants import AccountCategory, InvestorType, PostingDirection
from src.domain.errors import ConflictBlockedError, ValidationPreconditionError
from src.domain.models import (
    CreateInvestorInput,
    CreatePortfolioInput,
    CreateTransactionInput,
    UpdateAccountInput,
    UpdateFundInput,
    UpdateInvestorInput,
    UpdatePortfolioInput,
)


def test_create_account_records_opening_balance(make_account):
    account = make_account(AccountCategory.EQUITY, "-2500.00")

    assert account.balance == Decimal("-2500.00")
    assert account.opening_balance == Decimal("-2500.00")
    assert account.category is AccountCategory.EQUITY


def test_update_account_never_touches_balance(
    ledger, make_account, stored_balance
):
    account = make_account(AccountCategory.ASSET, "1000.00")

    updated = ledger.update_account.execute(
        UpdateAccountInput(id=account.id, name="Operating cash", description="  ")
    )

    assert updated.name == "Operating cash"
    assert updated.description is None
    assert updated.account_number == account.account_number
    assert stored_balance(account.id) == Decimal("1000.00")


def test_category_change_allowed_without_transactions(ledger, make_account):
    account = make_account(AccountCategory.ASSET, "0.00")

    updated = ledger.update_account.execute(
        UpdateAccountInput(id=account.id, category=AccountCategory.EXPENSE)
    )

    assert updated.category is AccountCategory.EXPENSE


def test_category_change_blocked_with_posted_transactions(
    ledger, make_account
):
    account = make_account(AccountCategory.ASSET, "0.00")
    ledger.create_transaction.execute(
        CreateTransactionInput(
            account_id=account.id,
            direction=PostingDirection.DEBIT,
            amount=Decimal("10.00"),
            transaction_date=datetime(2024, 3, 1),
        )
    )

    with pytest.raises(ConflictBlockedError) as excinfo:
        ledger.update_account.execute(
            UpdateAccountInput(id=account.id, category=AccountCategory.LIABILITY)
        )

    assert excinfo.value.dependent_count == 1


def test_update_absent_account_returns_none(ledger):
    assert ledger.update_account.execute(UpdateAccountInput(id=88, name="x")) is None


def test_create_investor_normalizes_email(ledger):
    investor = ledger.create_investor.execute(
        CreateInvestorInput(
            name=" Ada Lovelace ",
            email=" Ada@Example.ORG ",
            investor_type=InvestorType.INSTITUTIONAL,
            total_invested=Decimal("125000.00"),
            phone=" ",
        )
    )

    assert investor.name == "Ada Lovelace"
    assert investor.email == "ada@example.org"
    assert investor.phone is None


def test_create_fund_keeps_fee_precision(make_fund):
    fund = make_fund()

    assert fund.management_fee == Decimal("0.0150")
    assert fund.nav == Decimal("10.5000")


def test_create_portfolio_requires_existing_parents(ledger, make_fund):
    fund = make_fund()

    with pytest.raises(ValidationPreconditionError, match="Investor with ID 9"):
        ledger.create_portfolio.execute(
            CreatePortfolioInput(name="Orphan", investor_id=9, fund_id=fund.id)
        )


def test_update_portfolio_keeps_total_value(
    ledger, make_portfolio, make_fund, stored_total
):
    portfolio = make_portfolio()
    other_fund = make_fund("Bond Ladder")

    updated = ledger.update_portfolio.execute(
        UpdatePortfolioInput(
            id=portfolio.id,
            fund_id=other_fund.id,
            cash_balance=Decimal("10.00"),
        )
    )

    assert updated.fund_id == other_fund.id
    assert updated.cash_balance == Decimal("10.00")
    assert stored_total(portfolio.id) == Decimal("0.00")


def test_update_portfolio_rejects_unknown_fund(ledger, make_portfolio):
    portfolio = make_portfolio()

    with pytest.raises(ValidationPreconditionError, match="Fund with ID 404"):
        ledger.update_portfolio.execute(
            UpdatePortfolioInput(id=portfolio.id, fund_id=404)
        )


def test_update_absent_portfolio_returns_none(ledger):
    assert ledger.update_portfolio.execute(
        UpdatePortfolioInput(id=5, name="x")
    ) is None


def test_update_fund_writes_provided_fields(ledger, make_fund):
    fund = make_fund()

    updated = ledger.update_fund.execute(
        UpdateFundInput(id=fund.id, nav=Decimal("11.2500"), description=" ")
    )

    assert updated.nav == Decimal("11.2500")
    assert updated.description is None
    assert updated.name == fund.name
    assert updated.management_fee == fund.management_fee


def test_update_investor_normalizes_email(ledger, make_investor):
    investor = make_investor()

    updated = ledger.update_investor.execute(
        UpdateInvestorInput(
            id=investor.id,
            email=" New.Address@Example.COM",
            investor_type=InvestorType.INSTITUTIONAL,
        )
    )

    assert updated.email == "new.address@example.com"
    assert updated.investor_type is InvestorType.INSTITUTIONAL
    assert updated.name == investor.name


def test_update_absent_fund_and_investor_return_none(ledger):
    assert ledger.update_fund.execute(UpdateFundInput(id=71, name="x")) is None
    assert (
        ledger.update_investor.execute(UpdateInvestorInput(id=72, name="x"))
        is None
    )
