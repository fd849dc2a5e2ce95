from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from citizenair.config.settings import settings


@lru_cache
def get_async_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """Returns a cached async engine for ``database_url`` (settings.DATABASE_URL by default)."""
    return create_async_engine(
        database_url or settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """Returns a cached instance of the async session factory."""
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
        class_=AsyncSession,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields an SQLAlchemy async session.

    Commits when the request handler returns, rolls back on error and always closes.
    """
    factory = get_async_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def get_db_session_context_manager(existing_session: Optional[AsyncSession] = None) -> AsyncGenerator[AsyncSession, None]:
    """
    Provides an SQLAlchemy async session within an asynchronous context manager.

    If an `existing_session` is provided, it is yielded as is and the caller stays
    responsible for its lifecycle. Otherwise a new session is created, committed on
    successful exit, rolled back on error and closed regardless.
    """
    if existing_session is not None:
        yield existing_session
        return

    factory = get_async_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_models(engine: Optional[AsyncEngine] = None) -> None:
    """Creates all tables known to the ORM metadata if they do not exist yet."""
    from citizenair.models import Base

    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

