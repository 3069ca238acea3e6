"""Request ID middleware — one trace ID per request.

A caller-supplied X-Request-ID is reused only when it is a short token
of letters, digits, dots, dashes and underscores; anything else (too
long, whitespace, control characters) is replaced by a fresh UUID. The
ID, method and path are bound to structlog's contextvars for every log
entry of the request, and the ID is echoed back in the response.
"""

import re
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64

_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,%d}" % MAX_REQUEST_ID_LENGTH)

logger = structlog.get_logger()


def resolve_request_id(incoming: str | None) -> str:
    """Return `incoming` if it is an acceptable trace ID, else a new UUID."""
    if incoming and _REQUEST_ID_RE.fullmatch(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Assign, log-bind and echo a request ID."""

    async def dispatch(self, request: Request, call_next) -> Response:
        incoming = request.headers.get(REQUEST_ID_HEADER)
        request_id = resolve_request_id(incoming)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        if incoming and incoming != request_id:
            logger.info("request.id_replaced", received_length=len(incoming))

        response: Response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
