"""Async engine and session factory for the lookup repositories.

Repositories never hold a session. They hold a session factory and the
resilient executor opens one session (and one transaction) per attempt, so a
connection broken by a transient failure is never reused.

The module keeps a single engine per process through ``_DatabaseManager`` so
all repositories share one connection pool. PostgreSQL engines get pool and
asyncpg settings; SQLite engines (local runs and tests) use SQLAlchemy's
defaults because the SQLite pool does not accept sizing arguments.

When SQL logging is enabled, cursor events time every statement and queries
slower than the configured threshold are logged with sanitized parameters.
"""

import threading
import time
from typing import Any
from weakref import WeakKeyDictionary

from loguru import logger
from sqlalchemy import event, text
from sqlalchemy.engine import Connection
from sqlalchemy.engine.interfaces import DBAPICursor, ExecutionContext
from sqlalchemy.exc import ArgumentError, InvalidRequestError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.core.config import Settings, get_settings
from src.core.context import RequestContext
from src.core.error_context import sanitize_sql_params
from src.core.observability import instrument_engine

POOL_RECYCLE_SECONDS = 3600
COMMAND_TIMEOUT_SECONDS = 60
MAX_LOGGED_STATEMENT_LENGTH = 500

_query_start_times: WeakKeyDictionary[ExecutionContext, float] = WeakKeyDictionary()


def _before_cursor_execute(
    _conn: Connection,
    _cursor: DBAPICursor,
    _statement: str,
    _parameters: dict[str, Any] | list[Any] | tuple[Any, ...] | None,
    context: ExecutionContext,
    _executemany: bool,
) -> None:
    """Record when a statement starts executing."""
    _query_start_times[context] = time.perf_counter()


def _after_cursor_execute(
    _conn: Connection,
    cursor: DBAPICursor,
    statement: str,
    parameters: dict[str, Any] | list[Any] | tuple[Any, ...] | None,
    context: ExecutionContext,
    executemany: bool,
) -> None:
    """Log the statement if it ran longer than the slow query threshold.

    Args:
        _conn: Database connection (unused).
        cursor: Database cursor, read for its row count.
        statement: SQL statement that was executed.
        parameters: Bound parameters, sanitized before logging.
        context: SQLAlchemy execution context.
        executemany: Whether this was an executemany operation.
    """
    log_config = get_settings().log_config

    start_time = _query_start_times.pop(context, None)
    if start_time is None:
        return
    duration_ms = (time.perf_counter() - start_time) * 1000

    if duration_ms < log_config.slow_query_threshold_ms:
        return

    rows_affected = getattr(cursor, "rowcount", -1)
    if rows_affected is None:
        rows_affected = -1

    clean_statement = " ".join(statement.split())[:MAX_LOGGED_STATEMENT_LENGTH]

    logger.warning(
        "Slow query detected: {}... Duration: {:.2f}ms Rows: {}",
        clean_statement[:100],
        round(duration_ms, 2),
        rows_affected,
        query=clean_statement,
        duration_ms=round(duration_ms, 2),
        rows_affected=rows_affected,
        parameters=sanitize_sql_params(parameters),
        correlation_id=RequestContext.get_correlation_id(),
        executemany=executemany,
        threshold_ms=log_config.slow_query_threshold_ms,
    )


def _engine_options(settings: Settings, url: str) -> dict[str, Any]:
    """Build ``create_async_engine`` keyword arguments for the URL's backend."""
    db_config = settings.database_config
    options: dict[str, Any] = {"echo": db_config.echo}

    if url.startswith("sqlite"):
        return options

    options.update(
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=db_config.pool_pre_ping,
        pool_recycle=POOL_RECYCLE_SECONDS,
        connect_args={
            "server_settings": {"jit": "off"},
            "command_timeout": COMMAND_TIMEOUT_SECONDS,
        },
    )
    return options


def create_database_engine(
    database_url: str | None = None, settings: Settings | None = None
) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    Args:
        database_url: Database URL. Defaults to the configured URL.
        settings: Application settings. Defaults to ``get_settings()``.

    Returns:
        AsyncEngine: Configured async engine instance.
    """
    settings = settings or get_settings()
    url = database_url or settings.database_config.database_url

    engine = create_async_engine(url, **_engine_options(settings, url))

    if settings.log_config.enable_sql_logging:
        try:
            event.listen(
                engine.sync_engine, "before_cursor_execute", _before_cursor_execute
            )
            event.listen(
                engine.sync_engine, "after_cursor_execute", _after_cursor_execute
            )
            logger.info("Registered slow query event listeners")
        except (InvalidRequestError, ArgumentError, AttributeError, TypeError) as e:
            logger.warning(
                "Failed to register slow query event listeners: {}: {}",
                type(e).__name__,
                str(e),
            )

    instrument_engine(engine, settings)

    logger.info(
        "Created database engine for {} backend",
        engine.dialect.name,
        dialect=engine.dialect.name,
        sql_logging=settings.log_config.enable_sql_logging,
    )

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to ``engine``.

    Objects are not expired on commit: repositories return them after the
    per-attempt session has closed.
    """
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class _DatabaseManager:
    """Holds the process-wide engine and session factory."""

    def __init__(self) -> None:
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._lock = threading.Lock()

    def get_engine(self) -> AsyncEngine:
        """Get or create the async engine instance."""
        if self._engine is None:
            with self._lock:
                if self._engine is None:
                    self._engine = create_database_engine()
        return self._engine

    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the async session factory."""
        if self._session_factory is None:
            engine = self.get_engine()
            with self._lock:
                if self._session_factory is None:
                    self._session_factory = create_session_factory(engine)
                    logger.info("Created async session factory")
        return self._session_factory

    async def close(self) -> None:
        """Dispose the engine and forget the session factory."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database engine disposed")
        self.reset()

    def reset(self) -> None:
        """Reset the manager state. Used primarily for testing."""
        self._engine = None
        self._session_factory = None


_db_manager = _DatabaseManager()


def get_engine() -> AsyncEngine:
    """Get or create the process-wide async engine."""
    return _db_manager.get_engine()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the process-wide async session factory."""
    return _db_manager.get_session_factory()


async def close_database() -> None:
    """Dispose the process-wide engine. Call on shutdown."""
    await _db_manager.close()


async def check_database_connection() -> tuple[bool, str | None]:
    """Check that the database answers a trivial query.

    Returns:
        tuple[bool, str | None]: Whether the check succeeded and, if not,
        the error message.
    """
    try:
        async with get_engine().connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            _ = result.scalar()
    except SQLAlchemyError as e:
        logger.error("Database connection check failed: {}", str(e))
        return False, str(e)
    else:
        return True, None
