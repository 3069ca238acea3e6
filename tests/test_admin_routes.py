"""Admin listing routes — absent unless explicitly enabled."""

import pytest
from httpx import ASGITransport, AsyncClient

from docspace.auth.transport import BearerHeaderTokenExtractor
from docspace.config import Settings
from docspace.main import create_app

from conftest import login, register


@pytest.fixture
async def admin_client(datastore):
    app = create_app(Settings(enable_admin_routes=True))
    app.state.datastore = datastore
    app.state.token_extractor = BearerHeaderTokenExtractor()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_admin_routes_disabled_by_default(client, alice):
    for path in ("/api/v1/admin/workspaces", "/api/v1/admin/documents"):
        r = await client.get(path, headers=alice.headers)
        assert r.status_code == 404


@pytest.mark.asyncio
async def test_admin_routes_list_everything(admin_client):
    a = await register(admin_client, "Ann Admin")
    b = await register(admin_client, "Ben Other")
    a_headers = await login(admin_client, a)
    b_headers = await login(admin_client, b)

    r = await admin_client.post(
        "/api/v1/workspace/create", json={"name": "Ann WS"}, headers=a_headers
    )
    ws_id = r.json()["id"]
    await admin_client.post(
        "/api/v1/workspace/create", json={"name": "Ben WS"}, headers=b_headers
    )
    await admin_client.post(
        "/api/v1/document/create",
        json={"name": "Ben doc", "workspace_id": ws_id},
        headers=b_headers,
    )

    r = await admin_client.get("/api/v1/admin/workspaces", headers=a_headers)
    assert r.status_code == 200
    assert [(w["name"], w["author_fullname"]) for w in r.json()] == [
        ("Ann WS", "Ann Admin"),
        ("Ben WS", "Ben Other"),
    ]

    r = await admin_client.get("/api/v1/admin/documents", headers=a_headers)
    assert [(d["name"], d["author"]["fullname"]) for d in r.json()] == [
        ("Ben doc", "Ben Other")
    ]


@pytest.mark.asyncio
async def test_admin_routes_still_require_auth(admin_client):
    r = await admin_client.get("/api/v1/admin/workspaces")
    assert r.status_code == 401
