"""Domain errors and their HTTP translation.

Services raise these; routes never catch them. The handlers registered
by create_app() turn them into JSON responses of the form
{"error": <code>, "detail": <message>}.
"""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger()


class DocspaceError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal"
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(DocspaceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_detail = "Authentication required"


class InvalidInput(DocspaceError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_input"
    default_detail = "Invalid input"


class Forbidden(DocspaceError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_detail = "Not authorized"


class NotFound(DocspaceError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_detail = "Not found"


class Conflict(DocspaceError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_detail = "Conflict"


class Internal(DocspaceError):
    pass


class DatastoreTimeout(Internal):
    """A datastore call did not complete within db_timeout_seconds."""

    default_detail = "Datastore did not respond in time"


def _error_body(code: str, detail) -> dict:
    return {"error": code, "detail": detail}


async def docspace_error_handler(request: Request, exc: DocspaceError) -> JSONResponse:
    headers = None
    if isinstance(exc, Unauthenticated):
        headers = {"WWW-Authenticate": "Bearer"}
    if isinstance(exc, Internal):
        # Don't leak datastore details to the caller
        logger.error(
            "request.internal_error",
            path=request.url.path,
            error=exc.detail,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.code, Internal.default_detail),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.code, exc.detail),
        headers=headers,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Missing fields and non-numeric ids are InvalidInput, not 422."""
    return JSONResponse(
        status_code=InvalidInput.status_code,
        content=_error_body(InvalidInput.code, jsonable_encoder(exc.errors())),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.unhandled_error", path=request.url.path)
    return JSONResponse(
        status_code=Internal.status_code,
        content=_error_body(Internal.code, Internal.default_detail),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DocspaceError, docspace_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
