"""User API tests — registration, login, session transport, profile.

Pattern: test_<verb>_<noun>_<scenario>
"""

import uuid

import pytest

from docspace.auth.transport import CookieTokenExtractor
from docspace.main import app

from conftest import login, register


# ═══════════════════════════════════════════════════════════
# Registration
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_register_user(client):
    email = f"test-{uuid.uuid4().hex[:8]}@example.com"
    r = await client.post(
        "/api/v1/user/register",
        json={"fullname": "Test User", "email": email, "password": "secure_password_123"},
    )
    assert r.status_code == 201
    user = r.json()
    assert user["email"] == email
    assert user["fullname"] == "Test User"
    assert isinstance(user["id"], int)
    assert "password" not in user
    assert "password_hash" not in user


@pytest.mark.asyncio
async def test_register_duplicate_email(client):
    body = {
        "fullname": "User 1",
        "email": f"dup-{uuid.uuid4().hex[:8]}@example.com",
        "password": "password_123",
    }
    r1 = await client.post("/api/v1/user/register", json=body)
    assert r1.status_code == 201

    r2 = await client.post("/api/v1/user/register", json=body)
    assert r2.status_code == 409
    assert r2.json()["error"] == "conflict"


@pytest.mark.asyncio
async def test_register_short_password(client):
    r = await client.post(
        "/api/v1/user/register",
        json={"fullname": "Short", "email": "short@example.com", "password": "abc"},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_input"


@pytest.mark.asyncio
async def test_register_missing_field(client):
    r = await client.post(
        "/api/v1/user/register",
        json={"email": "nofullname@example.com", "password": "password_123"},
    )
    assert r.status_code == 400


# ═══════════════════════════════════════════════════════════
# Login
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_login_success(client):
    user = await register(client, "Login User")
    r = await client.post(
        "/api/v1/user/login",
        json={"email": user["email"], "password": user["password"]},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["access_token"]
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == user["id"]


@pytest.mark.asyncio
async def test_login_sets_http_only_strict_cookie(client):
    user = await register(client, "Cookie User")
    r = await client.post(
        "/api/v1/user/login",
        json={"email": user["email"], "password": user["password"]},
    )
    set_cookie = r.headers["set-cookie"].lower()
    assert set_cookie.startswith("docspace_token=")
    assert "httponly" in set_cookie
    assert "samesite=strict" in set_cookie
    assert "max-age=86400" in set_cookie


@pytest.mark.asyncio
async def test_login_wrong_password(client):
    user = await register(client, "Wrong Password")
    r = await client.post(
        "/api/v1/user/login",
        json={"email": user["email"], "password": "wrong_password"},
    )
    assert r.status_code == 401
    assert "set-cookie" not in r.headers


@pytest.mark.asyncio
async def test_login_nonexistent_user(client):
    """Unknown email → 401 and no token issued."""
    r = await client.post(
        "/api/v1/user/login",
        json={"email": "missing@x.com", "password": "pw"},
    )
    assert r.status_code == 401
    assert r.json()["error"] == "unauthenticated"
    assert "access_token" not in r.json()
    assert "set-cookie" not in r.headers


@pytest.mark.asyncio
async def test_logout_clears_cookie(client):
    r = await client.post("/api/v1/user/logout")
    assert r.status_code == 200
    set_cookie = r.headers["set-cookie"].lower()
    assert set_cookie.startswith("docspace_token=")
    assert "max-age=0" in set_cookie


# ═══════════════════════════════════════════════════════════
# Session transport
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_me_with_bearer_token(client, alice):
    r = await client.get("/api/v1/user/me", headers=alice.headers)
    assert r.status_code == 200
    assert r.json()["id"] == alice.id
    assert r.json()["email"] == alice.email


@pytest.mark.asyncio
async def test_me_without_token(client):
    r = await client.get("/api/v1/user/me")
    assert r.status_code == 401
    assert r.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_me_with_invalid_token(client):
    r = await client.get(
        "/api/v1/user/me",
        headers={"Authorization": "Bearer invalid_token_here"},
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_cookie_transport(client, alice):
    """With the cookie strategy the header is ignored and the cookie is used."""
    token = alice.headers["Authorization"].removeprefix("Bearer ")
    client.cookies.clear()
    app.state.token_extractor = CookieTokenExtractor("docspace_token")

    r = await client.get("/api/v1/user/me", headers=alice.headers)
    assert r.status_code == 401

    r = await client.get(
        "/api/v1/user/me", headers={"Cookie": f"docspace_token={token}"}
    )
    assert r.status_code == 200
    assert r.json()["id"] == alice.id


@pytest.mark.asyncio
async def test_header_transport_ignores_cookie(client, alice):
    token = alice.headers["Authorization"].removeprefix("Bearer ")
    client.cookies.clear()
    r = await client.get(
        "/api/v1/user/me", headers={"Cookie": f"docspace_token={token}"}
    )
    assert r.status_code == 401


# ═══════════════════════════════════════════════════════════
# Profile
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_update_fullname(client, alice):
    r = await client.put(
        "/api/v1/user/update", json={"fullname": "Alice Renamed"}, headers=alice.headers
    )
    assert r.status_code == 200
    assert r.json()["fullname"] == "Alice Renamed"
    assert r.json()["email"] == alice.email


@pytest.mark.asyncio
async def test_update_password_then_login(client, alice):
    r = await client.put(
        "/api/v1/user/update", json={"password": "brand_new_pw_1"}, headers=alice.headers
    )
    assert r.status_code == 200

    old = await client.post(
        "/api/v1/user/login", json={"email": alice.email, "password": alice.password}
    )
    assert old.status_code == 401
    new = await client.post(
        "/api/v1/user/login", json={"email": alice.email, "password": "brand_new_pw_1"}
    )
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_update_email_taken(client, alice, bob):
    r = await client.put(
        "/api/v1/user/update", json={"email": bob.email}, headers=alice.headers
    )
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_delete_user_invalidates_token(client, alice):
    r = await client.delete("/api/v1/user/delete", headers=alice.headers)
    assert r.status_code == 200
    assert r.json()["deleted"] is True

    # Token still has a valid signature, but the subject is gone
    r = await client.get("/api/v1/user/me", headers=alice.headers)
    assert r.status_code == 401

    r = await client.post(
        "/api/v1/user/login", json={"email": alice.email, "password": alice.password}
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_delete_user_removes_workspaces_and_reassigns_documents(
    client, alice, bob
):
    """Bob's own workspace goes away; his document in Alice's workspace
    becomes Alice's."""
    r = await client.post(
        "/api/v1/workspace/create", json={"name": "Alice WS"}, headers=alice.headers
    )
    alice_ws = r.json()["id"]
    r = await client.post(
        "/api/v1/workspace/create", json={"name": "Bob WS"}, headers=bob.headers
    )
    bob_ws = r.json()["id"]

    r = await client.post(
        "/api/v1/document/create",
        json={"name": "Bob in Alice", "workspace_id": alice_ws},
        headers=bob.headers,
    )
    guest_doc = r.json()["id"]
    r = await client.post(
        "/api/v1/document/create",
        json={"name": "Alice in Bob", "workspace_id": bob_ws},
        headers=alice.headers,
    )
    hosted_doc = r.json()["id"]

    r = await client.delete("/api/v1/user/delete", headers=bob.headers)
    assert r.status_code == 200

    r = await client.get(f"/api/v1/document/{guest_doc}", headers=alice.headers)
    assert r.status_code == 200
    assert r.json()["author_id"] == alice.id
    assert r.json()["permissions"]["can_edit"] is True

    r = await client.get(f"/api/v1/document/{hosted_doc}", headers=alice.headers)
    assert r.status_code == 404
    r = await client.get(f"/api/v1/document/workspace/{bob_ws}", headers=alice.headers)
    assert r.status_code == 404
