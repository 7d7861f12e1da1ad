from typing import Optional

from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker

from b2bee.config import settings

# One engine per process, built on first use
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[sessionmaker] = None


def init_engine(database_url: Optional[str] = None, **engine_kwargs) -> AsyncEngine:
    """Create (or replace) the process-wide async engine."""
    global _engine, _session_factory
    _engine = create_async_engine(
        database_url or settings.DATABASE_URL,
        echo=settings.DB_ECHO,
        future=True,
        **engine_kwargs
    )
    _session_factory = sessionmaker(_engine, class_=AsyncSession, expire_on_commit=False)
    return _engine


def get_engine() -> AsyncEngine:
    if _engine is None:
        return init_engine()
    return _engine


def get_session_factory() -> sessionmaker:
    if _session_factory is None:
        init_engine()
    return _session_factory


async def init_db():
    # Register table models with the metadata
    import b2bee.models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def dispose_engine():
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


async def get_session() -> AsyncSession:
    async with get_session_factory()() as session:
        yield session
