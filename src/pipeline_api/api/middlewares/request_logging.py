"""Per-request log context and access logging."""

import time

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.pipeline_api.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
)

logger = get_logger("pipeline_api.access")

SLOW_REQUEST_MS = 2000.0
_QUIET_PATHS = frozenset({"/health", "/metrics"})


async def request_logging_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind request_id, method and path, then log the outcome of the request.

    Runs inside the correlation id middleware, so the id is already set.
    """
    clear_request_context()
    bind_request_context(correlation_id.get(), request.method, request.url.path)
    started = time.perf_counter()
    try:
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 1)
        if request.url.path not in _QUIET_PATHS:
            log = logger.warning if duration_ms > SLOW_REQUEST_MS else logger.info
            log("request.completed", status=response.status_code, duration_ms=duration_ms)
        return response
    finally:
        clear_request_context()
