"""
Access log for the API.

The request id is bound into structlog contextvars, so classifier and
supervisor events emitted while serving a chat message carry it too.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.stdlib.get_logger("chainlens.http")

REQUEST_ID_HEADER = "x-request-id"
# Polled by load balancers and the status page; kept out of the INFO stream.
QUIET_PATHS = frozenset({"/healthz", "/api/mcp-status", "/api/status"})


def _level_for(path: str, status_code: int):
    if status_code >= 500:
        return logger.error
    if status_code >= 400:
        return logger.warning
    if path in QUIET_PATHS:
        return logger.debug
    return logger.info


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One structured line per request, written after the response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        path = request.url.path

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, path=path)

        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            _level_for(path, status_code)(
                "http_request",
                method=request.method,
                status=status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
