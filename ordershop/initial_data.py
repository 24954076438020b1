"""Create the schema for the configured database and optionally seed it."""

from sqlmodel import Session

from ordershop.core.config import settings
from ordershop.core.db import create_db_and_tables, create_db_engine, init_db
from ordershop.core.observability import get_logger, initialize_observability

logger = get_logger(__name__)


def init() -> None:
    engine = create_db_engine()
    create_db_and_tables(engine)
    logger.info("Database schema created", database_url=settings.DATABASE_URL)

    if settings.SEED_SAMPLE_DATA:
        with Session(engine) as session:
            init_db(session)


def main() -> None:
    initialize_observability()
    logger.info("Creating initial data")
    init()
    logger.info("Initial data created")


if __name__ == "__main__":
    main()
