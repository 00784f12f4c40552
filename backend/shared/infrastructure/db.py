"""
Database configuration and session management.
Uses SQLAlchemy 2.0 asyncio sessions.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from shared.config.settings import DATABASE_URL, settings


# Create engine with connection pooling and timeouts
engine = create_async_engine(
    DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_timeout=settings.db_pool_timeout,
    pool_recycle=1800,  # Recycle connections after 30 minutes
    echo=settings.db_echo,
)

# Session factory
SessionLocal = async_sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.get("/orders")
        async def list_orders(db: AsyncSession = Depends(get_db)):
            ...

    The session is closed after the request completes; anything not
    committed by then is rolled back.
    """
    async with SessionLocal() as db:
        yield db


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for database sessions outside of FastAPI.

    Usage:
        async with get_db_context() as db:
            await db.execute(text("SELECT 1"))
    """
    async with SessionLocal() as db:
        yield db


async def safe_commit(db: AsyncSession) -> None:
    """
    Commit with automatic rollback on failure.

    Raises the original exception after rolling back.
    """
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
