"""CLI adapter creating the ledger tables in the configured database."""

from src.infrastructure.container import build_database_adapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.schema import create_schema


def main() -> None:
    """Create missing tables; existing tables are left untouched."""
    logger = get_app_logger()
    engine = build_database_adapter().get_ledger_engine()

    create_schema(engine)

    logger.info(f"Schema ensured on {engine.url}")
    print("Ledger tables are ready.")


if __name__ == "__main__":  # pragma: no cover
    main()
