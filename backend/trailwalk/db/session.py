"""
Database engines and sessions.

The configured URL is a plain sync URL (sqlite:/// or postgresql://).
Schema creation uses the sync engine; the tracker runs on the async one.
"""

from typing import AsyncGenerator

from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from trailwalk.config import settings

ASYNC_DRIVERS = {
    "sqlite:///": "sqlite+aiosqlite:///",
    "postgresql://": "postgresql+asyncpg://",
}

POSTGRES_POOL = {
    "pool_size": 5,
    "max_overflow": 10,
    "pool_timeout": 30,
    "pool_recycle": 1800,  # 30 minutes
}


def async_url(url: str) -> str:
    """Swap a sync driver prefix for its async driver."""
    for sync_prefix, async_prefix in ASYNC_DRIVERS.items():
        if url.startswith(sync_prefix):
            return async_prefix + url[len(sync_prefix):]
    return url


def engine_options(url: str, pooled: bool = False) -> dict:
    """Keyword arguments for create_engine / create_async_engine."""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    if pooled and url.startswith("postgresql"):
        return dict(POSTGRES_POOL)
    return {}


# === Engines ===
engine = create_engine(settings.database_url, **engine_options(settings.database_url))

_async_url = async_url(settings.database_url)
async_engine = create_async_engine(_async_url, **engine_options(_async_url, pooled=True))

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one async session per request."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


def init_db() -> None:
    """Create all tables (alembic handles later changes)."""
    from trailwalk.models import Base  # registers every model

    Base.metadata.create_all(bind=engine)
