"""Async SQLAlchemy engine and session management."""

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from leadtrack.core.settings import DatabaseSettings


class _EngineHolder:
    """Lazy singleton for the engine and its session factory."""

    engine: AsyncEngine | None = None
    factory: async_sessionmaker[AsyncSession] | None = None


_holder = _EngineHolder()


def _get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Create the engine and session factory on first use."""
    if _holder.factory is None:
        db = DatabaseSettings()
        url = db.async_url
        pool_args: dict[str, int] = {}
        # SQLite URLs (local runs via LEADTRACK_DB_URL) take no pool sizing.
        if not url.startswith("sqlite"):
            pool_args = {"pool_size": db.pool_size, "max_overflow": db.max_overflow}
        _holder.engine = create_async_engine(url, **pool_args)
        _holder.factory = async_sessionmaker(
            _holder.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _holder.factory


async def dispose_engine() -> None:
    """Close pooled connections; called on application shutdown."""
    if _holder.engine is not None:
        await _holder.engine.dispose()
    _holder.engine = None
    _holder.factory = None


async def get_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields an async database session."""
    factory = _get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
