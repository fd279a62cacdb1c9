"""Composition root for wiring infrastructure adapters."""

from dataclasses import dataclass

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import LedgerUnitOfWorkPort
from src.application.use_cases import (
    CheckLedgerInvariantsUseCase,
    CreateAccountUseCase,
    CreateAssetUseCase,
    CreateFundUseCase,
    CreateInvestorUseCase,
    CreatePortfolioUseCase,
    CreateTransactionUseCase,
    DeleteAccountUseCase,
    DeleteAssetUseCase,
    DeleteFundUseCase,
    DeleteInvestorUseCase,
    DeletePortfolioUseCase,
    DeleteTransactionUseCase,
    UpdateAccountUseCase,
    UpdateAssetUseCase,
    UpdateFundUseCase,
    UpdateInvestorUseCase,
    UpdatePortfolioUseCase,
    UpdateTransactionUseCase,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.ledger_repository import SqlAlchemyLedgerUnitOfWork
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class LedgerServices:
    """Use cases exposed to the request layer."""

    create_account: CreateAccountUseCase
    update_account: UpdateAccountUseCase
    delete_account: DeleteAccountUseCase
    create_transaction: CreateTransactionUseCase
    update_transaction: UpdateTransactionUseCase
    delete_transaction: DeleteTransactionUseCase
    create_fund: CreateFundUseCase
    update_fund: UpdateFundUseCase
    delete_fund: DeleteFundUseCase
    create_investor: CreateInvestorUseCase
    update_investor: UpdateInvestorUseCase
    delete_investor: DeleteInvestorUseCase
    create_portfolio: CreatePortfolioUseCase
    update_portfolio: UpdatePortfolioUseCase
    delete_portfolio: DeletePortfolioUseCase
    create_asset: CreateAssetUseCase
    update_asset: UpdateAssetUseCase
    delete_asset: DeleteAssetUseCase
    check_invariants: CheckLedgerInvariantsUseCase


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_unit_of_work(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerUnitOfWorkPort:
    """Return the SQLAlchemy unit of work for ledger mutations."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerUnitOfWork(resolved_db)


def build_ledger_services(
    db_port: DatabaseEnginePort | None = None,
    logger=None,
) -> LedgerServices:
    """Return every ledger use case sharing one unit of work and logger."""
    unit_of_work = build_unit_of_work(db_port)
    resolved_logger = logger or get_app_logger()

    def _wire(use_case_cls):
        return use_case_cls(unit_of_work, logger=resolved_logger)

    return LedgerServices(
        create_account=_wire(CreateAccountUseCase),
        update_account=_wire(UpdateAccountUseCase),
        delete_account=_wire(DeleteAccountUseCase),
        create_transaction=_wire(CreateTransactionUseCase),
        update_transaction=_wire(UpdateTransactionUseCase),
        delete_transaction=_wire(DeleteTransactionUseCase),
        create_fund=_wire(CreateFundUseCase),
        update_fund=_wire(UpdateFundUseCase),
        delete_fund=_wire(DeleteFundUseCase),
        create_investor=_wire(CreateInvestorUseCase),
        update_investor=_wire(UpdateInvestorUseCase),
        delete_investor=_wire(DeleteInvestorUseCase),
        create_portfolio=_wire(CreatePortfolioUseCase),
        update_portfolio=_wire(UpdatePortfolioUseCase),
        delete_portfolio=_wire(DeletePortfolioUseCase),
        create_asset=_wire(CreateAssetUseCase),
        update_asset=_wire(UpdateAssetUseCase),
        delete_asset=_wire(DeleteAssetUseCase),
        check_invariants=_wire(CheckLedgerInvariantsUseCase),
    )


__all__ = [
    "LedgerServices",
    "build_database_adapter",
    "build_unit_of_work",
    "build_ledger_services",
]
