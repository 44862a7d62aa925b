"""Redaction of sensitive values before they are logged.

Repository operations log their diagnostic context (ids, labels, entity
type) whenever an attempt is retried or fails. The helpers here make sure
that context, and any SQL parameters captured by the slow-query listener,
never leak values whose key names look like credentials. Nested mappings
and sequences are walked up to ``MAX_DEPTH`` levels; UUIDs and timestamps
are rendered as strings. Callers' data is never modified.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime
from functools import lru_cache
from re import Pattern
from typing import Any, Final
from uuid import UUID

from src.core.config import get_settings

REDACTED = "[REDACTED]"

DEFAULT_SENSITIVE_PATTERN: Final[Pattern[str]] = re.compile(
    r"(password|passwd|pwd|secret|token|api[_-]?key|apikey|authorization|"
    r"credential|private[_-]?key|access[_-]?key|connection[_-]?string)",
    re.IGNORECASE,
)

# Maximum depth for nested structure sanitization
MAX_DEPTH: Final[int] = 10


@lru_cache(maxsize=1)
def _get_sensitive_fields() -> list[str]:
    """Get the configured sensitive fields from settings."""
    settings = get_settings()
    return settings.log_config.sensitive_fields


def is_sensitive_field(field_name: str) -> bool:
    """Check if a field name indicates sensitive data.

    Args:
        field_name: The field name to check.

    Returns:
        bool: True if the field appears to contain sensitive data.
    """
    if DEFAULT_SENSITIVE_PATTERN.search(field_name):
        return True

    field_lower = field_name.lower()
    return any(
        sensitive_field.lower() in field_lower
        for sensitive_field in _get_sensitive_fields()
    )


def sanitize_value(value: object, field_name: str = "", depth: int = 0) -> object:
    """Sanitize a value if it appears to be sensitive.

    Args:
        value: The value to potentially sanitize.
        field_name: The field name for context.
        depth: Current recursion depth.

    Returns:
        object: Sanitized value, normalised for structured logging.
    """
    if depth > MAX_DEPTH:
        return REDACTED

    if field_name and is_sensitive_field(field_name):
        return REDACTED

    if isinstance(value, Mapping):
        return {str(k): sanitize_value(v, str(k), depth + 1) for k, v in value.items()}

    if isinstance(value, (list, tuple, set, frozenset)):
        return [sanitize_value(item, "", depth + 1) for item in value]

    if isinstance(value, UUID):
        return str(value)

    if isinstance(value, (datetime, date)):
        return value.isoformat()

    return value


def sanitize_context(context: Mapping[str, Any] | None) -> dict[str, Any]:
    """Sanitize an operation context mapping for logging.

    Args:
        context: Diagnostic key/value pairs supplied with an operation.

    Returns:
        dict[str, Any]: New dictionary with sensitive values redacted.
    """
    if not context:
        return {}
    return {key: sanitize_value(value, key) for key, value in context.items()}


def sanitize_sql_params(params: object) -> object:
    """Sanitize SQL query parameters for safe logging.

    Args:
        params: SQL query parameters in any of the DBAPI formats.

    Returns:
        object: Sanitized parameters, or REDACTED for unknown formats.
    """
    if params is None:
        return None

    if isinstance(params, Mapping):
        return sanitize_context(params)
    if isinstance(params, (list, tuple)):
        # Positional parameters carry no key names to judge sensitivity by
        return [sanitize_value(item) for item in params]

    return REDACTED
