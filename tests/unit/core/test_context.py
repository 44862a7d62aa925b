"""Unit tests for correlation ID propagation."""

import uuid
from typing import Any

import pytest
import pytest_check
from loguru import logger

from src.core.context import (
    RequestContext,
    correlation_scope,
    generate_correlation_id,
)


@pytest.mark.unit
class TestRequestContext:
    """Test the correlation ID store."""

    def test_set_get_clear(self) -> None:
        """The stored ID can be read back and cleared."""
        RequestContext.set_correlation_id("abc")
        with pytest_check.check:
            assert RequestContext.get_correlation_id() == "abc"
        RequestContext.clear()
        with pytest_check.check:
            assert RequestContext.get_correlation_id() is None

    def test_generate_correlation_id(self) -> None:
        """Generated IDs are UUID4 strings."""
        assert uuid.UUID(generate_correlation_id()).version == 4


@pytest.mark.unit
class TestCorrelationScope:
    """Test the correlation_scope context manager."""

    def test_scope_sets_and_restores(self) -> None:
        """The ID is visible inside the block and reset afterwards."""
        with correlation_scope("req-1") as correlation_id:
            with pytest_check.check:
                assert correlation_id == "req-1"
            with pytest_check.check:
                assert RequestContext.get_correlation_id() == "req-1"

        assert RequestContext.get_correlation_id() is None

    def test_scope_generates_id(self) -> None:
        """Without an ID a new one is generated."""
        with correlation_scope() as correlation_id:
            assert uuid.UUID(correlation_id)

    def test_scope_binds_logger(self, log_records: list[dict[str, Any]]) -> None:
        """Log records inside the scope carry the correlation ID."""
        with correlation_scope("req-2"):
            logger.info("inside")
        logger.info("outside")

        with pytest_check.check:
            assert log_records[0]["extra"]["correlation_id"] == "req-2"
        with pytest_check.check:
            assert "correlation_id" not in log_records[1]["extra"]
