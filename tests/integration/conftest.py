"""Fixtures for integration tests against a real SQLite database."""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.core.config import Settings, get_settings
from src.infrastructure.database import (
    Base,
    ResilientExecutor,
    create_database_engine,
    create_session_factory,
)
from src.infrastructure.repositories import (
    LookupRepositories,
    build_lookup_repositories,
)


@pytest.fixture(autouse=True)
def clean_settings_cache() -> Generator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
async def engine(tmp_path: Path, settings: Settings) -> AsyncGenerator[AsyncEngine]:
    """Engine over a fresh database file with every lookup table created."""
    engine = create_database_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'lookups.db'}", settings
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest.fixture
def sleep_calls() -> list[float]:
    return []


@pytest.fixture
def executor(
    session_factory: async_sessionmaker[AsyncSession], sleep_calls: list[float]
) -> ResilientExecutor:
    """Executor that records backoff delays instead of sleeping."""

    async def fake_sleep(seconds: float) -> None:
        sleep_calls.append(seconds)

    return ResilientExecutor(session_factory, sleep=fake_sleep)


@pytest.fixture
def repositories(
    session_factory: async_sessionmaker[AsyncSession],
    executor: ResilientExecutor,
    settings: Settings,
) -> LookupRepositories:
    return build_lookup_repositories(
        session_factory, settings=settings, executor=executor
    )
