"""Startup check for the VibeCRM lookup persistence core.

Configures logging and tracing, verifies the database answers, and reports
how many active rows each lookup table holds.
"""

import asyncio
import sys

from loguru import logger

from src.core.config import get_settings
from src.core.context import correlation_scope
from src.core.logging import setup_logging
from src.core.observability import setup_tracing
from src.infrastructure.database.session import (
    check_database_connection,
    close_database,
    get_session_factory,
)
from src.infrastructure.repositories import build_lookup_repositories


async def run() -> int:
    """Check the database and log lookup row counts.

    Returns:
        int: Process exit code.
    """
    with correlation_scope():
        is_healthy, error = await check_database_connection()
        if not is_healthy:
            logger.error("Database unavailable: {}", error)
            await close_database()
            return 1

        repositories = build_lookup_repositories(get_session_factory())
        try:
            for entity_type, repository in repositories.items():
                logger.info(
                    "{}: {} active rows",
                    entity_type,
                    await repository.count(),
                    entity_type=entity_type,
                )
        finally:
            await close_database()
    return 0


def main() -> None:
    """Main entry point."""
    settings = get_settings()

    setup_logging(settings)
    setup_tracing(settings)

    logger.info(
        "Starting {} {} ({})",
        settings.app_name,
        settings.app_version,
        settings.environment,
    )
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
