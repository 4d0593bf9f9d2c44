from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from salesboard.core.config import settings


def build_engine(url: str, **overrides: Any) -> AsyncEngine:
    """
    Async engine for `url`. Server databases get pre-ping and recycling so
    idle connections dropped by a hosted Postgres are replaced; SQLite
    (tests, local runs) keeps SQLAlchemy's defaults.
    """
    options: dict[str, Any] = {"echo": False}
    if make_url(url).get_backend_name() != "sqlite":
        options.update(pool_pre_ping=True, pool_recycle=300)
    options.update(overrides)
    return create_async_engine(url, **options)


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # handlers serialize rows after commit
    return async_sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False, autoflush=False)


engine: AsyncEngine = build_engine(settings.DATABASE_URL_ASYNC_CLEAN)
AsyncSessionLocal = build_sessionmaker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request, closed when the request is done."""
    async with AsyncSessionLocal() as session:
        yield session
