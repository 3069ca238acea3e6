"""FastAPI application factory.

create_app() returns a configured FastAPI instance. The lifespan owns
the datastore connection (and the optional Redis pool). Services never
reach for a global engine, they get a session injected per request.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docspace import __version__
from docspace.api import build_api_router
from docspace.auth.transport import build_token_extractor
from docspace.config import Settings, settings as default_settings
from docspace.db.engine import Datastore
from docspace.errors import register_error_handlers

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Anything before `yield` runs at startup, after `yield` runs at shutdown.
    """
    settings: Settings = app.state.settings
    logger.info(
        "docspace.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
        token_transport=settings.token_transport,
    )

    datastore = Datastore(settings.database_url, echo=settings.debug)
    await datastore.connect()
    if settings.create_schema_on_startup:
        await datastore.create_all()
        logger.info("docspace.schema_created")
    app.state.datastore = datastore
    logger.info("docspace.datastore_connected")

    from docspace.db.redis import close_redis, init_redis
    try:
        await init_redis(settings.redis_url)
        logger.info("docspace.redis_connected", url=settings.redis_url)
    except Exception as e:
        # Redis is optional; only rate limiting depends on it
        logger.warning("docspace.redis_unavailable", error=str(e))

    yield

    logger.info("docspace.shutdown")
    await close_redis()
    await datastore.disconnect()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or default_settings

    app = FastAPI(
        title="Docspace",
        description="Workspace and document collaboration backend",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    # Chosen once; get_current_user reads it on every request
    app.state.token_extractor = build_token_extractor(settings)

    register_error_handlers(app)

    # ── Middleware stack ──────────────────────────────────────
    # Starlette middleware executes in reverse order of registration.
    # Request flow: CORS → RateLimit → Security → RequestId → handler

    from docspace.middleware.rate_limit import RateLimitMiddleware
    from docspace.middleware.request_id import RequestIdMiddleware
    from docspace.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        default_rpm=settings.rate_limit_rpm,
        auth_rpm=settings.rate_limit_auth_rpm,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    app.include_router(build_api_router(settings.enable_admin_routes))

    return app


# Default app instance (used by uvicorn: docspace.main:app)
app = create_app()
