"""In-flight request tracking for graceful shutdown."""

from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.pipeline_api.core.shutdown import RequestTracker

# Probes keep answering while the server drains
_UNTRACKED_PATHS = frozenset({"/health", "/metrics"})


async def request_tracking_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Count the request as in flight until its response is ready."""
    if request.url.path in _UNTRACKED_PATHS:
        return await call_next(request)

    tracker: RequestTracker = request.app.state.request_tracker
    async with tracker.track_request():
        return await call_next(request)
