"""Root conftest.py for the lookup persistence test suite.

This file contains project-wide fixtures and pytest configuration.
"""

from collections.abc import Generator
from typing import Any

import pytest
from loguru import logger


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )


@pytest.fixture
def log_records() -> Generator[list[dict[str, Any]]]:
    """Capture Loguru records emitted during the test.

    Yields:
        list[dict[str, Any]]: Records with ``level``, ``message`` and ``extra``.
    """
    records: list[dict[str, Any]] = []

    def sink(message: Any) -> None:
        record = message.record
        records.append(
            {
                "level": record["level"].name,
                "message": record["message"],
                "extra": dict(record["extra"]),
            }
        )

    handler_id = logger.add(sink, level="DEBUG")
    yield records
    logger.remove(handler_id)
