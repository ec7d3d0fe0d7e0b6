"""
Shared fixtures: an in-memory database per test and an HTTP client bound
to the app.

Settings are read once at import time, so the environment is prepared
before anything from the application is imported.
"""

import os

os.environ["JWT_SECRET"] = "test-signing-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["STATIC_DIR"] = "__no_static_dir__"

from typing import AsyncGenerator, Awaitable, Callable, Dict  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from database.models import Base  # noqa: E402


@pytest_asyncio.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(async_engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose requests each get a fresh session on the test database."""
    from database.session import get_db_session
    from main import app

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def login_as(client: AsyncClient) -> Callable[..., Awaitable[Dict[str, str]]]:
    """
    Return a coroutine that signs a user up, logs in, and gives back
    ``{"token": ..., "user_id": ...}``.
    """

    async def _login_as(email: str, password: str = "s3cret-pass", full_name: str = "Test User") -> Dict[str, str]:
        resp = await client.post(
            "/api/signup",
            json={"fullName": full_name, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        resp = await client.post("/api/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        body = resp.json()
        return {"token": body["token"], "user_id": body["sanitizedUser"]["id"]}

    return _login_as
