"""Tests for the infrastructure.db module."""

from sqlalchemy import event

from src.infrastructure import db as db_module
from src.infrastructure.settings import LedgerSettings


def test_create_engine_passes_pool_configuration(monkeypatch):
    """_create_engine should configure QueuePool with health checks."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine(
        LedgerSettings(db_url="postgresql://ledger", pool_size=8)
    )

    assert engine == "engine"
    assert captured["db_url"] == "postgresql://ledger"
    assert captured["kwargs"]["poolclass"] is db_module.QueuePool
    assert captured["kwargs"]["pool_size"] == 8
    assert captured["kwargs"]["max_overflow"] == 5
    assert captured["kwargs"]["pool_pre_ping"] is True
    assert captured["kwargs"]["future"] is True


def test_create_engine_configures_sqlite_locking(tmp_path):
    """SQLite engines should start transactions with the write lock held."""
    engine = db_module._create_engine(
        LedgerSettings(db_url=f"sqlite:///{tmp_path / 'ledger.db'}")
    )
    statements = []

    @event.listens_for(engine, "before_cursor_execute")
    def _capture(conn, cursor, statement, *args):
        statements.append(statement)

    with engine.begin() as conn:
        assert conn.connection.dbapi_connection.in_transaction
        assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1

    assert "BEGIN IMMEDIATE" in statements
    engine.dispose()


def test_get_ledger_engine_caches_engine(monkeypatch):
    """get_ledger_engine should memoize the created engine."""
    monkeypatch.setattr(db_module, "_ledger_engine", None)
    created = []

    def fake_create_engine(settings):
        created.append(settings.db_url)
        return f"engine:{settings.db_url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    monkeypatch.setattr(
        db_module.LedgerSettings,
        "from_env",
        classmethod(lambda cls: cls(db_url="postgresql://ledger")),
    )

    engine_one = db_module.get_ledger_engine()
    engine_two = db_module.get_ledger_engine()

    assert engine_one is engine_two
    assert engine_one == "engine:postgresql://ledger"
    assert created == ["postgresql://ledger"]


def test_adapter_returns_underlying_engine(monkeypatch):
    """SqlAlchemyDatabaseEngineAdapter should proxy the global helper."""
    monkeypatch.setattr(db_module, "get_ledger_engine", lambda: "ledger_engine")

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter()

    assert adapter.get_ledger_engine() == "ledger_engine"
