"""Domain errors and the exception handlers that render them.

Services raise the errors below; the handlers registered by
``setup_exception_handlers`` turn every failure into the same JSON body:
timestamp, status, error, detail, path and request_id.
"""

from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.pipeline_api.core.logging import get_logger
from src.pipeline_api.models.base import utc_now

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(AppError):
    """A resource addressed by natural key + scope does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "Resource Not Found"


class ConflictError(AppError):
    """A natural key is already taken within its scope."""

    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class PermissionDeniedError(AppError):
    """The caller may not mutate this resource."""

    status_code = status.HTTP_403_FORBIDDEN
    error = "Access Denied"


class ValidationFailedError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Validation Error"


class OptimisticConflictError(AppError):
    """A write was attempted against a stale version."""

    status_code = status.HTTP_409_CONFLICT
    error = "Optimistic Lock Conflict"


_STATUS_LABELS = {
    status.HTTP_400_BAD_REQUEST: "Bad Request",
    status.HTTP_401_UNAUTHORIZED: "Authentication Failed",
    status.HTTP_403_FORBIDDEN: "Access Denied",
    status.HTTP_404_NOT_FOUND: "Resource Not Found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method Not Allowed",
    status.HTTP_409_CONFLICT: "Conflict",
}


def error_body(status_code: int, error: str, detail: Any, path: str) -> dict[str, Any]:
    """Build the error payload shared by every handler."""
    return {
        "timestamp": utc_now().isoformat(),
        "status": status_code,
        "error": error,
        "detail": detail,
        "path": path,
        "request_id": correlation_id.get(),
    }


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # Drop the leading "body"/"query"/"path" segment
        loc = [str(p) for p in err.get("loc", ())[1:]]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return ", ".join(parts)


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        logger.info(
            "Request failed",
            error=exc.error,
            status=exc.status_code,
            detail=exc.detail,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.status_code, exc.error, exc.detail, request.url.path),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(
                status.HTTP_400_BAD_REQUEST,
                ValidationFailedError.error,
                _format_validation_errors(exc),
                request.url.path,
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        label = _STATUS_LABELS.get(exc.status_code, "Error")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.status_code, label, exc.detail, request.url.path),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=correlation_id.get(),
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Internal Server Error",
                "An unexpected error occurred. Please try again later.",
                request.url.path,
            ),
        )
