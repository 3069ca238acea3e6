"""Health check endpoint.

Verifies the server is running and the datastore (and Redis, when
configured) are reachable.
"""

from fastapi import APIRouter, Request

from docspace import __version__

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Check server health and dependency connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        await request.app.state.datastore.connect()
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {e}"

    try:
        from docspace.db.redis import get_redis

        await get_redis().ping()
        checks["redis"] = "ok"
    except Exception as e:
        checks["redis"] = f"unavailable: {e}"

    # Redis only backs rate limiting, so it does not degrade health
    status = "healthy" if checks["database"] == "ok" else "degraded"

    return {"status": status, **checks}
