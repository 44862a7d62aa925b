"""Shared fixtures for unit tests."""

import os
from collections.abc import Generator
from typing import Any

import pytest
from pytest_mock import MockerFixture, MockType
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import ClassificationConfig, get_settings
from src.core.context import RequestContext
from src.core.error_context import _get_sensitive_fields
from src.infrastructure.database.resilience import ResilientExecutor


@pytest.fixture(autouse=True)
def clean_lru_cache() -> Generator[None]:
    """Clear cached settings before and after each test."""
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()
    yield
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[pytest.MonkeyPatch]:
    """Remove app-specific environment variables for the duration of a test."""
    original_env = os.environ.copy()

    env_prefixes = [
        "APP_",
        "ENVIRONMENT",
        "DEBUG",
        "LOG_CONFIG__",
        "OBSERVABILITY_CONFIG__",
        "DATABASE_CONFIG__",
        "RESILIENCE_CONFIG__",
        "CLASSIFICATION_CONFIG__",
    ]
    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in env_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield monkeypatch

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def clean_request_context() -> Generator[None]:
    """Make sure no correlation ID leaks between tests."""
    RequestContext.clear()
    yield
    RequestContext.clear()


@pytest.fixture
def mock_session(mocker: MockerFixture) -> MockType:
    """Async session mock usable as ``async with session, session.begin()``."""
    session = mocker.AsyncMock(spec=AsyncSession)
    session.__aenter__.return_value = session
    session.__aexit__.return_value = None

    transaction = mocker.AsyncMock()
    transaction.__aenter__.return_value = transaction
    transaction.__aexit__.return_value = None
    session.begin = mocker.Mock(return_value=transaction)
    return session


@pytest.fixture
def mock_session_factory(mocker: MockerFixture, mock_session: MockType) -> MockType:
    """Session factory returning ``mock_session`` on every call."""
    return mocker.Mock(return_value=mock_session)


@pytest.fixture
def sleep_calls() -> list[float]:
    """Collects the delays passed to the executor's sleep function."""
    return []


@pytest.fixture
def executor(
    mock_session_factory: MockType, sleep_calls: list[float]
) -> ResilientExecutor:
    """Executor over the mocked session factory that never really sleeps."""

    async def fake_sleep(seconds: float) -> None:
        sleep_calls.append(seconds)

    return ResilientExecutor(mock_session_factory, sleep=fake_sleep)


@pytest.fixture
def classification() -> ClassificationConfig:
    """Default classification sets."""
    return ClassificationConfig()


@pytest.fixture
def scalars_result(mocker: MockerFixture) -> Any:
    """Factory configuring ``mock_session.scalars`` to return given rows."""

    def _configure(session: MockType, rows: list[Any]) -> MockType:
        result = mocker.Mock()
        result.all.return_value = rows
        result.first.return_value = rows[0] if rows else None
        session.scalars = mocker.AsyncMock(return_value=result)
        return session.scalars

    return _configure
