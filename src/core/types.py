"""Type aliases shared across the persistence and application layers."""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

# Opaque identifier of a lookup row
type LookupId = UUID

# Diagnostic key/value pairs attached to an operation for logging
# Values must be JSON-serializable once sanitized
type LogContext = Mapping[str, Any]

# A single database round trip executed against a freshly acquired session
type DatabaseOperation[R] = Callable[[AsyncSession], Awaitable[R]]

# Sleep implementation used between retry attempts
type SleepFunc = Callable[[float], Awaitable[None]]
