"""SQLAlchemy table metadata for the ledger database.

Foreign keys are declared without ``ON DELETE CASCADE``: cascading deletes
are issued explicitly, child rows first, by the integrity use cases.
"""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.engine import Engine


metadata = MetaData()

accounts = Table(
    "accounts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("account_number", String(64), nullable=False, unique=True),
    Column("category", String(16), nullable=False),
    Column("balance", Numeric(15, 2), nullable=False),
    Column("opening_balance", Numeric(15, 2), nullable=False),
    Column("description", Text),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)

transactions = Table(
    "transactions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "account_id",
        Integer,
        ForeignKey("accounts.id"),
        nullable=False,
        index=True,
    ),
    Column("direction", String(16), nullable=False),
    Column("amount", Numeric(15, 2), nullable=False),
    Column("description", Text),
    Column("transaction_date", DateTime, nullable=False),
    Column("reference_number", Text),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)

funds = Table(
    "funds",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("fund_type", String(32), nullable=False),
    Column("inception_date", DateTime, nullable=False),
    Column("nav", Numeric(15, 4), nullable=False),
    Column("total_assets", Numeric(15, 2), nullable=False),
    Column("management_fee", Numeric(5, 4), nullable=False),
    Column("description", Text),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)

investors = Table(
    "investors",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("investor_type", String(32), nullable=False),
    Column("total_invested", Numeric(15, 2), nullable=False),
    Column("phone", Text),
    Column("address", Text),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)

portfolios = Table(
    "portfolios",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column(
        "investor_id",
        Integer,
        ForeignKey("investors.id"),
        nullable=False,
        index=True,
    ),
    Column(
        "fund_id",
        Integer,
        ForeignKey("funds.id"),
        nullable=False,
        index=True,
    ),
    Column("total_value", Numeric(15, 2), nullable=False),
    Column("cash_balance", Numeric(15, 2), nullable=False),
    Column("performance", Numeric(8, 4), nullable=False),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)

assets = Table(
    "assets",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "portfolio_id",
        Integer,
        ForeignKey("portfolios.id"),
        nullable=False,
        index=True,
    ),
    Column("symbol", String(32), nullable=False),
    Column("name", Text, nullable=False),
    Column("asset_type", String(32), nullable=False),
    Column("quantity", Numeric(15, 6), nullable=False),
    Column("unit_price", Numeric(15, 4), nullable=False),
    Column("market_value", Numeric(15, 2), nullable=False),
    Column("cost_basis", Numeric(15, 2), nullable=False),
    Column("purchase_date", DateTime, nullable=False),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)


def prepare_schema(engine: Engine) -> list[str]:
    """Create every ledger table that does not exist yet.

    Args:
        engine: SQLAlchemy engine connected to the ledger database.

    Returns:
        list[str]: Names of the tables known to the metadata.
    """
    metadata.create_all(engine)
    return list(metadata.tables)


__all__ = [
    "metadata",
    "accounts",
    "transactions",
    "funds",
    "investors",
    "portfolios",
    "assets",
    "prepare_schema",
]
