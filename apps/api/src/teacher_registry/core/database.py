"""
Database Configuration

Async SQLAlchemy engine and session handling.

The engine and session maker are created by the application lifespan and
stored on ``app.state``; request handlers receive sessions through the
``get_db`` dependency instead of reaching for a module-level connection.
"""

from collections.abc import AsyncIterator

from fastapi import FastAPI, Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


def create_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """Create the async engine for the given connection string."""
    return create_async_engine(database_url, echo=echo, pool_pre_ping=True)


async def init_db(app: FastAPI, database_url: str) -> async_sessionmaker[AsyncSession]:
    """
    Connect to the database and create missing tables.

    Call this on application startup. The engine and session maker are
    attached to ``app.state`` for use by ``get_db``.
    """
    # Model modules must be imported so their tables are registered on Base
    from teacher_registry.modules.forms import models  # noqa: F401

    engine = create_engine(database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    app.state.db_engine = engine
    app.state.db_session_maker = session_maker
    return session_maker


async def close_db(app: FastAPI) -> None:
    """Dispose of the engine created by ``init_db``."""
    engine: AsyncEngine | None = getattr(app.state, "db_engine", None)
    if engine is not None:
        await engine.dispose()
        app.state.db_engine = None
        app.state.db_session_maker = None


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency yielding a database session for one request.

    Usage:
        @router.get("/items")
        async def list_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    session_maker: async_sessionmaker[AsyncSession] = request.app.state.db_session_maker
    async with session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
