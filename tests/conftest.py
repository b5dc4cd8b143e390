"""
Shared fixtures: an in-memory SQLite database per test and an HTTP client
bound to a fresh application instance.
"""

import os

os.environ.setdefault("CONNECTION_STRING", "sqlite+aiosqlite://")
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-secret")
os.environ.setdefault("DEBUG", "false")

import httpx
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from database.session import build_engine, connect_db, get_db_session


@pytest_asyncio.fixture
async def session_factory():
    engine = build_engine("sqlite+aiosqlite://")
    await connect_db(engine)
    try:
        yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def app(session_factory):
    from main import create_app

    application = create_app()

    async def _session_override():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = _session_override
    return application


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def auth_headers(client):
    """Register and log in as ``alice``; return the bearer header."""
    resp = await client.post(
        "/api/register",
        json={"username": "alice", "email": "alice@example.com", "password": "s3cret"},
    )
    assert resp.status_code == 201, resp.text

    resp = await client.post(
        "/api/login", json={"email": "alice@example.com", "password": "s3cret"}
    )
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['accessToken']}"}
