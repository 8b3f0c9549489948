# tests/conftest.py

"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
from eloboard.db.models import Base, GameType
from eloboard.db.session import get_db
from eloboard.main import app
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEAM_ID = "T1"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """A fresh in-memory database per test, so commits and rollbacks are real."""
    test_engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def file_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """A file-backed database whose sessions use independent connections."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'eloboard-test.db'}", poolclass=NullPool
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine, expire_on_commit=False, autocommit=False, autoflush=False
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Fixture to provide a database session to a test."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """Fixture to provide an async test client for the API."""

    # Each request gets its own session on the test database
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Clean up the override after the test
    del app.dependency_overrides[get_db]


@pytest.fixture
async def chess(db_session: AsyncSession) -> GameType:
    """A 'chess' game type registered for TEAM_ID."""
    game_type = GameType(team_id=TEAM_ID, name="chess")
    db_session.add(game_type)
    await db_session.commit()
    await db_session.refresh(game_type)
    return game_type
