"""Error translation tests — domain errors, validation, and the 500 path."""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from docspace.errors import DatastoreTimeout, Forbidden, NotFound
from docspace.main import create_app
from docspace.services.base import ServiceBase


@pytest.fixture
async def error_client():
    """A throwaway app with routes that fail in known ways."""
    app = create_app()

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret connection string")

    @app.get("/slow-db")
    async def slow_db():
        raise DatastoreTimeout()

    @app.get("/missing")
    async def missing():
        raise NotFound("Thing not found")

    @app.get("/nope")
    async def nope():
        raise Forbidden()

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_unexpected_exception_is_generic_500(error_client):
    r = await error_client.get("/boom")
    assert r.status_code == 500
    assert r.json() == {"error": "internal", "detail": "Internal server error"}
    assert "secret" not in r.text


@pytest.mark.asyncio
async def test_datastore_timeout_is_500_without_details(error_client):
    r = await error_client.get("/slow-db")
    assert r.status_code == 500
    assert r.json()["detail"] == "Internal server error"


@pytest.mark.asyncio
async def test_domain_errors_keep_their_status(error_client):
    r = await error_client.get("/missing")
    assert r.status_code == 404
    assert r.json() == {"error": "not_found", "detail": "Thing not found"}

    r = await error_client.get("/nope")
    assert r.status_code == 403
    assert r.json()["detail"] == "Not authorized"


@pytest.mark.asyncio
async def test_bounded_call_times_out():
    svc = ServiceBase(db=None, timeout=0.01)
    with pytest.raises(DatastoreTimeout):
        await svc._bounded(asyncio.sleep(1))


@pytest.mark.asyncio
async def test_bounded_call_passes_result_through():
    svc = ServiceBase(db=None, timeout=1)

    async def answer():
        return 42

    assert await svc._bounded(answer()) == 42
