"""
Pytest fixtures for the test databases, both service clients and seed data.

Each test gets two fresh in-memory SQLite databases (main and stats). The
main app's stats collaborator talks to the stats app in-process over
ASGITransport, so view counting is exercised end to end.
"""

import os

os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "test")

from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from explorewithme.db.base import Base, StatsBase
from explorewithme.db.session import get_db, get_stats_db
from explorewithme.main_service.infrastructure import StatsClient, get_stats_client
from explorewithme.main_service.main import app as main_app
from explorewithme.main_service.models import Category, Event, EventState, User
from explorewithme.stats_service.main import app as stats_app
from factories import make_category, make_event, make_user

TEST_DATABASE_URL = "sqlite+aiosqlite://"


def _memory_engine():
    return create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def _unit_of_work(session_factory):
    async def override() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return override


@pytest_asyncio.fixture(scope="function")
async def session_factory():
    """Main database: create tables, yield a session factory, then dispose."""
    engine = _memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def stats_session_factory():
    engine = _memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(StatsBase.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session used by tests to seed and inspect the main database directly."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def stats_db_session(stats_session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with stats_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def stats_client(stats_session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the stats app."""
    stats_app.dependency_overrides[get_stats_db] = _unit_of_work(stats_session_factory)

    transport = ASGITransport(app=stats_app)
    async with AsyncClient(transport=transport, base_url="http://stats-server") as ac:
        yield ac

    stats_app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def stats_collaborator(stats_client: AsyncClient) -> AsyncGenerator[StatsClient, None]:
    """The main service's stats client, wired to the in-process stats app."""
    collaborator = StatsClient(
        base_url="http://stats-server",
        app_name="ewm-main-service",
        transport=ASGITransport(app=stats_app),
    )
    yield collaborator
    await collaborator.close()


@pytest_asyncio.fixture(scope="function")
async def client(session_factory, stats_collaborator: StatsClient) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the main app."""
    main_app.dependency_overrides[get_db] = _unit_of_work(session_factory)
    main_app.dependency_overrides[get_stats_client] = lambda: stats_collaborator

    transport = ASGITransport(app=main_app, client=("10.0.0.1", 12345))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    main_app.dependency_overrides.clear()


# -----------------------------------------------------------------------------
# Seed data
# -----------------------------------------------------------------------------

@pytest_asyncio.fixture
async def initiator(db_session: AsyncSession) -> User:
    return await make_user(db_session, "Irene Initiator", "irene@example.com")


@pytest_asyncio.fixture
async def participant(db_session: AsyncSession) -> User:
    return await make_user(db_session, "Paul Participant", "paul@example.com")


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await make_user(db_session, "Olga Other", "olga@example.com")


@pytest_asyncio.fixture
async def category(db_session: AsyncSession) -> Category:
    return await make_category(db_session, "Music")


@pytest_asyncio.fixture
async def published_event(db_session: AsyncSession, initiator: User, category: Category) -> Event:
    return await make_event(db_session, initiator, category)


@pytest_asyncio.fixture
async def pending_event(db_session: AsyncSession, initiator: User, category: Category) -> Event:
    return await make_event(db_session, initiator, category, state=EventState.PENDING)
