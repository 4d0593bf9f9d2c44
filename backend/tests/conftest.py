from __future__ import annotations

import os

# Settings are read at import time; point them at a throwaway database and
# make sure no test ever talks to a real Slack channel.
os.environ.setdefault("DATABASE_URL_ASYNC", "sqlite+aiosqlite:///./salesboard_test.db")
os.environ["SLACK_WEBHOOK_URL"] = ""
os.environ.setdefault("ENVIRONMENT", "test")

import uuid  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from salesboard.core.security import create_access_token  # noqa: E402
from salesboard.db.session import build_engine, build_sessionmaker, get_db  # noqa: E402

# Ensure Base + models are registered before create_all
from salesboard.db.base import Base  # noqa: E402
import salesboard.models  # noqa: E402,F401
from salesboard.models.profile import Profile  # noqa: E402


# ---------------------------------------------------------
# Database config
# ---------------------------------------------------------
@pytest.fixture()
def database_url_async(tmp_path) -> str:
    """
    TEST_DATABASE_URL runs the suite against a real server (e.g. Postgres);
    otherwise every test gets its own SQLite file.
    """
    url = os.getenv("TEST_DATABASE_URL")
    if url:
        return url
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


# ---------------------------------------------------------
# Engine + schema lifecycle
# ---------------------------------------------------------
@pytest_asyncio.fixture()
async def engine(database_url_async: str):
    engine = build_engine(database_url_async, poolclass=NullPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture()
def sessionmaker(engine):
    return build_sessionmaker(engine)


# ---------------------------------------------------------
# DB session for assertions / setup
# ---------------------------------------------------------
@pytest_asyncio.fixture()
async def db(sessionmaker):
    """
    Session for test setup & assertions ONLY.
    Use `await reload(db, obj)` to see what a request committed.
    """
    async with sessionmaker() as session:
        yield session
        await session.rollback()


# ---------------------------------------------------------
# FastAPI app + dependency override
# ---------------------------------------------------------
@pytest.fixture()
def app(sessionmaker):
    from salesboard.main import app as fastapi_app

    async def _override_get_db():
        async with sessionmaker() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = _override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


# ---------------------------------------------------------
# HTTP client
# ---------------------------------------------------------
@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
    ) as ac:
        yield ac


# ---------------------------------------------------------
# Helpers
# ---------------------------------------------------------
async def create_profile(db, name: str = "Test Seller", email: str | None = None, **fields) -> Profile:
    profile = Profile(
        name=name,
        email=email or f"seller-{uuid.uuid4().hex[:8]}@example.com",
        **fields,
    )
    db.add(profile)
    await db.commit()
    await db.refresh(profile)
    return profile


def auth_header(profile: Profile) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(subject=str(profile.id))}"}


async def reload(db, obj):
    """Re-read a row after the app committed through another session."""
    await db.refresh(obj)
    return obj


@pytest.fixture()
def make_profile(db):
    async def _make(name: str = "Test Seller", email: str | None = None, **fields) -> Profile:
        return await create_profile(db, name=name, email=email, **fields)

    return _make


@pytest_asyncio.fixture()
async def seller(db) -> Profile:
    return await create_profile(db, name="Sara Säljare", email="sara@example.com")


@pytest_asyncio.fixture()
async def admin(db) -> Profile:
    return await create_profile(db, name="Adam Admin", email="admin@example.com", role="ADMIN")
