# backend/parkhub/db/database.py
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from parkhub.core.config import settings


def engine_options(url: str) -> Dict[str, Any]:
    """Pool arguments suited to the target backend"""
    if url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
    }


def database_url() -> str:
    return settings.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://")


# Create async engine
engine = create_async_engine(
    database_url(),
    echo=settings.DB_ECHO,
    **engine_options(database_url()),
)

# Create async session factory
async_session_local = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Database session dependency"""
    async with async_session_local() as session:
        try:
            yield session
        finally:
            await session.close()


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """
    One commit for a whole multi-write operation.

    Everything flushed inside the block is committed together; any exception
    rolls all of it back and is re-raised.
    """
    try:
        yield session
        await session.commit()
    except BaseException:
        await session.rollback()
        raise


async def init_db():
    """Initialize database (create tables)"""
    from parkhub.db.base import Base

    async with engine.begin() as conn:
        # Import all models to ensure they're registered
        from parkhub.db import models  # noqa: F401

        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    """Close database connections"""
    await engine.dispose()
