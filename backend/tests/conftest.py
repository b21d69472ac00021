"""
Pytest configuration and fixtures for DevConnect backend tests.

Route tests run the ASGI app in-process against a fresh MemoryStore per
test, so no database is needed.
"""

from __future__ import annotations

import os
from uuid import uuid4

# Set test environment variables before importing config
os.environ["STORE_BACKEND"] = "memory"
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-testing-only")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import httpx  # noqa: E402
import pytest_asyncio  # noqa: E402

from backend import db  # noqa: E402
from backend.main import app  # noqa: E402

PASSWORD = "secret123"


@pytest_asyncio.fixture(autouse=True)
async def memory_store():
    """A fresh in-memory document store for every test."""
    store = await db.init_store()
    yield store
    await db.close_store()


@pytest_asyncio.fixture
async def async_client():
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest_asyncio.fixture
async def make_user(async_client):
    """
    Factory: register and log in a user.

    Returns a dict with id, email, name, token and ready-to-use auth headers.
    The login cookie is dropped so only the explicit headers authenticate.
    """

    async def _make(name: str = "Test User", email: str | None = None) -> dict:
        email = email or f"test-{uuid4().hex[:8]}@devconnect.io"
        res = await async_client.post(
            "/api/users/register",
            json={"name": name, "email": email, "password": PASSWORD, "password2": PASSWORD},
        )
        assert res.status_code == 201, res.text

        login = await async_client.post("/api/users/login", json={"email": email, "password": PASSWORD})
        assert login.status_code == 200, login.text
        async_client.cookies.clear()

        token = login.json()["token"]
        return {
            "id": res.json()["_id"],
            "name": name,
            "email": email,
            "token": token,
            "headers": {"Authorization": token},
        }

    return _make


@pytest_asyncio.fixture
async def test_user(make_user):
    return await make_user("Jane Doe")


@pytest_asyncio.fixture
async def second_user(make_user):
    """A second user for cross-user authorization tests."""
    return await make_user("John Smith")
