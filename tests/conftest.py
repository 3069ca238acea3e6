"""Test fixtures — a fresh in-memory database per test.

Each test gets its own sqlite+aiosqlite Datastore (StaticPool keeps the
single in-memory connection alive across sessions) with the schema
created from the models. The app under test uses it through
app.state.datastore, exactly as the lifespan would set it up.

Auth is exercised for real: tests register users, log in and send the
session token in an Authorization header.
"""

import os

# Must be set before docspace.config is imported
os.environ.setdefault("DOCSPACE_BCRYPT_ROUNDS", "4")
os.environ.setdefault("DOCSPACE_JWT_SECRET", "test-secret-with-enough-length-for-hs256")

import uuid

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from docspace.auth.transport import BearerHeaderTokenExtractor
from docspace.db.engine import Datastore
from docspace.main import app

TEST_DB_URL = os.environ.get("DOCSPACE_TEST_DATABASE_URL", "sqlite+aiosqlite://")


@pytest_asyncio.fixture()
async def datastore():
    store = Datastore(TEST_DB_URL, poolclass=StaticPool) if TEST_DB_URL.startswith(
        "sqlite"
    ) else Datastore(TEST_DB_URL)
    await store.create_all()
    try:
        yield store
    finally:
        await store.drop_all()
        await store.disconnect()


@pytest_asyncio.fixture()
async def db_session(datastore):
    async with datastore.session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(datastore):
    """HTTP client against the app, tokens read from the Authorization header."""
    previous = app.state.token_extractor
    app.state.datastore = datastore
    app.state.token_extractor = BearerHeaderTokenExtractor()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.state.token_extractor = previous
    del app.state.datastore


async def register(client, fullname: str = "Test User", password: str = "password_123") -> dict:
    email = f"{fullname.split()[0].lower()}-{uuid.uuid4().hex[:8]}@example.com"
    r = await client.post(
        "/api/v1/user/register",
        json={"fullname": fullname, "email": email, "password": password},
    )
    assert r.status_code == 201, r.text
    return {**r.json(), "password": password}


async def login(client, user: dict) -> dict:
    r = await client.post(
        "/api/v1/user/login",
        json={"email": user["email"], "password": user["password"]},
    )
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


class Actor:
    """A registered, logged-in user: `.id`, `.headers`, `.email`."""

    def __init__(self, user: dict, headers: dict):
        self.id = user["id"]
        self.email = user["email"]
        self.password = user["password"]
        self.headers = headers


@pytest_asyncio.fixture()
async def make_user(client):
    async def _make(fullname: str = "Test User") -> Actor:
        user = await register(client, fullname)
        return Actor(user, await login(client, user))

    return _make


@pytest_asyncio.fixture()
async def alice(make_user):
    return await make_user("Alice Owner")


@pytest_asyncio.fixture()
async def bob(make_user):
    return await make_user("Bob Writer")


@pytest_asyncio.fixture()
async def carol(make_user):
    return await make_user("Carol Reader")
