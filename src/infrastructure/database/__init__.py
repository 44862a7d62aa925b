"""Database access for lookup entities.

Core components:
- **base**: Declarative base and the shared lookup table shape
- **models**: One model per lookup entity type
- **session**: Async engine and session factory management
- **resilience**: Retry executor with a session per attempt
- **repository**: Generic lookup repository
"""

from src.infrastructure.database.base import Base, LookupModel
from src.infrastructure.database.repository import LabelMatch, LookupRepository
from src.infrastructure.database.resilience import (
    ResilientExecutor,
    is_transient_error,
)
from src.infrastructure.database.session import (
    check_database_connection,
    close_database,
    create_database_engine,
    create_session_factory,
    get_engine,
    get_session_factory,
)

__all__ = [
    "Base",
    "LabelMatch",
    "LookupModel",
    "LookupRepository",
    "ResilientExecutor",
    "check_database_connection",
    "close_database",
    "create_database_engine",
    "create_session_factory",
    "get_engine",
    "get_session_factory",
    "is_transient_error",
]
