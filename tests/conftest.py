"""Shared fixtures for asynchronous database access and catch scenarios."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fishlog.cache import local_cache_clear_all
from fishlog.db.models import Base
from fishlog.schemas.catch import CatchRecord
from fishlog.services.stats.season import SeasonWindow
from fishlog.settings import get_settings
from tests.support.catch_data import create_test_data


@pytest.fixture(autouse=True)
def _isolate_process_state() -> Iterator[None]:
    """Reset the in-process cache and cached settings around every test."""

    local_cache_clear_all()
    get_settings.cache_clear()
    yield
    local_cache_clear_all()
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def session() -> AsyncIterator[AsyncSession]:
    """Provide an in-memory SQLite session for integration-style tests."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async_session = async_sessionmaker(engine, expire_on_commit=False)
    async with async_session() as db_session:
        yield db_session
        if db_session.in_transaction():
            await db_session.rollback()
    await engine.dispose()


@pytest.fixture
def season() -> SeasonWindow:
    return SeasonWindow.default()


@pytest.fixture
def one_season() -> list[CatchRecord]:
    """July 2022 with ``n`` salmon of 10 kg landed on July ``n``."""
    return create_test_data(2022, 1)


@pytest.fixture
def two_seasons() -> list[CatchRecord]:
    return create_test_data(2022, 2)
