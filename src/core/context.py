"""Correlation ID propagation for repository operations.

Callers (a request handler, a background job) can open a correlation scope so
that every log line and trace span emitted by the repositories underneath it
carries the same identifier.
"""

import uuid
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar

from loguru import logger

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class RequestContext:
    """Async-safe storage for the current correlation ID."""

    @staticmethod
    def set_correlation_id(correlation_id: str) -> None:
        """Set the correlation ID for the current context."""
        _correlation_id_var.set(correlation_id)

    @staticmethod
    def get_correlation_id() -> str | None:
        """Get the correlation ID from the current context, if any."""
        return _correlation_id_var.get()

    @staticmethod
    def clear() -> None:
        """Clear the correlation ID for the current context."""
        _correlation_id_var.set(None)


def generate_correlation_id() -> str:
    """Generate a unique correlation ID.

    Returns:
        str: A string representation of a UUID4.
    """
    return str(uuid.uuid4())


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Generator[str]:
    """Bind a correlation ID to the context and to Loguru for a block of work.

    Args:
        correlation_id: Existing ID to reuse. A new one is generated if omitted.

    Yields:
        str: The correlation ID in effect inside the block.

    Example:
        with correlation_scope() as correlation_id:
            await repository.get_default()
    """
    correlation_id = correlation_id or generate_correlation_id()
    token = _correlation_id_var.set(correlation_id)
    try:
        with logger.contextualize(correlation_id=correlation_id):
            yield correlation_id
    finally:
        _correlation_id_var.reset(token)
