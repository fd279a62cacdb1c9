"""Tests for the composition root."""

from unittest.mock import MagicMock

from src.application.use_cases import (
    CheckLedgerInvariantsUseCase,
    CreateTransactionUseCase,
    UpdateAssetUseCase,
)
from src.infrastructure import container as container_module
from src.infrastructure.ledger_repository import SqlAlchemyLedgerUnitOfWork


def test_build_unit_of_work_uses_default_adapter(monkeypatch):
    fake_adapter = MagicMock()
    monkeypatch.setattr(
        container_module,
        "build_database_adapter",
        lambda: fake_adapter,
    )

    unit_of_work = container_module.build_unit_of_work()

    assert isinstance(unit_of_work, SqlAlchemyLedgerUnitOfWork)
    assert unit_of_work._db_port is fake_adapter


def test_build_ledger_services_shares_logger_and_unit_of_work():
    db_port = MagicMock()
    logger = MagicMock()

    services = container_module.build_ledger_services(
        db_port=db_port,
        logger=logger,
    )

    assert isinstance(services.create_transaction, CreateTransactionUseCase)
    assert isinstance(services.update_asset, UpdateAssetUseCase)
    assert isinstance(services.check_invariants, CheckLedgerInvariantsUseCase)
    assert services.create_transaction._logger is logger
    assert (
        services.create_transaction._unit_of_work
        is services.delete_fund._unit_of_work
    )
    assert services.delete_fund._unit_of_work._db_port is db_port
