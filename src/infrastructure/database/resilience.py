"""Retry wrapper for repository database operations.

Every repository call goes through ``ResilientExecutor.execute``:

1. A new session (and transaction) is opened for the attempt, so a
   connection broken by the previous failure is never reused.
2. Transient failures (dropped connections, timeouts, driver
   ``OperationalError``) are retried with exponential backoff:
   ``backoff_base ** attempt`` seconds, 2s, 4s, 8s with the defaults.
3. Anything else, and the last transient failure once retries are
   exhausted, is logged with its context and re-raised unchanged.

Callers may pass an ``asyncio.Event`` as a cancellation signal. Setting it
abandons the operation before the next attempt, during the database call or
during the backoff wait and raises ``OperationCancelledError``.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any

from loguru import logger
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    InterfaceError,
    OperationalError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
)

from src.core.config import Settings, get_settings
from src.core.error_context import sanitize_context
from src.core.exceptions import OperationCancelledError
from src.core.observability import trace_operation
from src.core.types import DatabaseOperation, LogContext, SleepFunc

TRANSIENT_EXCEPTIONS: tuple[type[BaseException], ...] = (
    OperationalError,
    InterfaceError,
    DisconnectionError,
    PoolTimeoutError,
    TimeoutError,
    ConnectionError,
)


def is_transient_error(exc: BaseException) -> bool:
    """Whether a failure is worth retrying on a fresh connection.

    Args:
        exc: The exception raised by an attempt.

    Returns:
        bool: True for connectivity and timeout failures.
    """
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    return isinstance(exc, TRANSIENT_EXCEPTIONS)


class ResilientExecutor:
    """Runs database operations with retries and a session per attempt.

    Args:
        session_factory: Factory used to open one session per attempt.
        max_retries: Retries after the first attempt.
        backoff_base: Base of the exponential backoff, in seconds.
        sleep: Coroutine used to wait between attempts. Tests pass a fake.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        max_retries: int = 3,
        backoff_base: float = 2.0,
        sleep: SleepFunc | None = None,
    ) -> None:
        if max_retries < 0:
            msg = "max_retries must be zero or positive"
            raise ValueError(msg)
        if backoff_base <= 0:
            msg = "backoff_base must be positive"
            raise ValueError(msg)

        self.session_factory = session_factory
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self._sleep: SleepFunc = sleep or asyncio.sleep

    @classmethod
    def from_settings(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Settings | None = None,
    ) -> "ResilientExecutor":
        """Build an executor using the configured retry policy."""
        resilience = (settings or get_settings()).resilience_config
        return cls(
            session_factory,
            max_retries=resilience.max_retries,
            backoff_base=resilience.backoff_base_seconds,
        )

    def backoff_seconds(self, attempt: int) -> float:
        """Seconds to wait after the given (1-based) failed attempt."""
        return float(self.backoff_base**attempt)

    async def execute[R](
        self,
        operation: DatabaseOperation[R],
        operation_name: str,
        context: LogContext | None = None,
        *,
        entity_type: str,
        cancel_event: asyncio.Event | None = None,
    ) -> R:
        """Run ``operation`` against a fresh session, retrying transient failures.

        Args:
            operation: Coroutine function receiving the attempt's session.
            operation_name: Name used in logs and the trace span.
            context: Diagnostic values logged when the operation fails.
            entity_type: Lookup entity the operation works on.
            cancel_event: Optional cancellation signal.

        Returns:
            R: Whatever ``operation`` returns.

        Raises:
            OperationCancelledError: If ``cancel_event`` is set.
            Exception: The operation's own exception when it is not transient
                or when retries are exhausted.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=self._wait,
            retry=retry_if_exception(is_transient_error),
            before_sleep=partial(
                self._log_retry,
                operation_name=operation_name,
                entity_type=entity_type,
            ),
            sleep=partial(
                self._backoff,
                cancel_event=cancel_event,
                operation_name=operation_name,
                entity_type=entity_type,
            ),
            reraise=True,
        )

        start_time = time.perf_counter()
        with trace_operation(
            f"db.{entity_type}.{operation_name}",
            entity_type=entity_type,
            operation=operation_name,
        ):
            try:
                result = await retrying(
                    self._attempt,
                    operation,
                    cancel_event,
                    operation_name,
                    entity_type,
                )
            except OperationCancelledError:
                logger.info(
                    "Cancelled {} on {}",
                    operation_name,
                    entity_type,
                    operation=operation_name,
                    entity_type=entity_type,
                )
                raise
            except Exception as e:
                logger.error(
                    "Error in {} on {}: {}: {}",
                    operation_name,
                    entity_type,
                    type(e).__name__,
                    str(e),
                    operation=operation_name,
                    entity_type=entity_type,
                    error_type=type(e).__name__,
                    context=sanitize_context(context),
                )
                raise

        logger.debug(
            "Completed {} on {}",
            operation_name,
            entity_type,
            operation=operation_name,
            entity_type=entity_type,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return result

    async def _attempt[R](
        self,
        operation: DatabaseOperation[R],
        cancel_event: asyncio.Event | None,
        operation_name: str,
        entity_type: str,
    ) -> R:
        _raise_if_cancelled(cancel_event, operation_name, entity_type)
        return await _run_cancellable(
            partial(self._run_in_session, operation),
            cancel_event,
            operation_name,
            entity_type,
        )

    async def _run_in_session[R](self, operation: DatabaseOperation[R]) -> R:
        async with self.session_factory() as session, session.begin():
            return await operation(session)

    async def _backoff(
        self,
        seconds: float,
        *,
        cancel_event: asyncio.Event | None,
        operation_name: str,
        entity_type: str,
    ) -> None:
        await _run_cancellable(
            partial(self._sleep, seconds),
            cancel_event,
            operation_name,
            entity_type,
        )

    def _wait(self, retry_state: RetryCallState) -> float:
        return self.backoff_seconds(retry_state.attempt_number)

    def _log_retry(
        self,
        retry_state: RetryCallState,
        *,
        operation_name: str,
        entity_type: str,
    ) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        wait_seconds = retry_state.next_action.sleep if retry_state.next_action else 0
        logger.warning(
            "Transient failure in {} on {} (attempt {}/{}), retrying in {}s: {}",
            operation_name,
            entity_type,
            retry_state.attempt_number,
            self.max_retries + 1,
            wait_seconds,
            repr(exc),
            operation=operation_name,
            entity_type=entity_type,
            attempt=retry_state.attempt_number,
            wait_seconds=wait_seconds,
            error_type=type(exc).__name__,
        )


def _cancelled(operation_name: str, entity_type: str) -> OperationCancelledError:
    return OperationCancelledError(
        f"{operation_name} on {entity_type} was cancelled",
        context={"operation": operation_name, "entity_type": entity_type},
    )


def _raise_if_cancelled(
    cancel_event: asyncio.Event | None, operation_name: str, entity_type: str
) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise _cancelled(operation_name, entity_type)


async def _run_cancellable[R](
    func: Callable[[], Awaitable[R]],
    cancel_event: asyncio.Event | None,
    operation_name: str,
    entity_type: str,
) -> R:
    """Await ``func()`` unless ``cancel_event`` is set first."""
    if cancel_event is None:
        return await func()

    _raise_if_cancelled(cancel_event, operation_name, entity_type)

    task: asyncio.Future[Any] = asyncio.ensure_future(func())
    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        done, _ = await asyncio.wait(
            {task, waiter}, return_when=asyncio.FIRST_COMPLETED
        )
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        waiter.cancel()

    if task in done:
        return task.result()

    # Let the session roll back and release its connection before reporting
    task.cancel()
    await asyncio.wait({task})
    raise _cancelled(operation_name, entity_type)
