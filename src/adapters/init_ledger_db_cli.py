"""CLI adapter creating the ledger tables in the configured database."""

from src.infrastructure.container import build_database_adapter
from src.infrastructure.ledger_schema import prepare_schema
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Create any missing ledger table."""
    logger = get_app_logger()
    engine = build_database_adapter().get_ledger_engine()

    tables = prepare_schema(engine)

    logger.info(f"Ledger schema ready: {', '.join(tables)}")
    print(f"Prepared {len(tables)} ledger tables.")


if __name__ == "__main__":  # pragma: no cover
    main()
