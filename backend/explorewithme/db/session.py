"""
Async engine and session factories, plus the per-request unit of work.

Each request handler receives exactly one AsyncSession. The session is
committed when the handler returns and rolled back if anything raises, so
validation reads and the writes that follow them are atomic per call.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from explorewithme.core.config import get_settings

settings = get_settings()


def build_engine(url: str):
    return create_async_engine(
        url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
        echo=settings.DEBUG,
    )


engine = build_engine(settings.DATABASE_URL)
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

stats_engine = build_engine(settings.STATS_DATABASE_URL)
StatsSessionLocal = async_sessionmaker(stats_engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: main service session, committed on success."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_stats_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: stats service session, committed on success."""
    async with StatsSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
