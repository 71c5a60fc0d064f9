"""HTTP middleware stack."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.pipeline_api.core.config import Settings

from .request_logging import request_logging_middleware
from .request_tracking import request_tracking_middleware
from .security_headers import DOCS_CSP, SecurityHeadersMiddleware

__all__ = [
    "SecurityHeadersMiddleware",
    "request_logging_middleware",
    "request_tracking_middleware",
    "setup_middlewares",
]


def _content_security_policy(settings: Settings) -> str:
    # The docs UI needs inline scripts; nothing else does
    if (settings.is_production or not settings.enable_openapi) and settings.csp_production:
        return settings.csp_production
    return DOCS_CSP


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Install the stack innermost first.

    Starlette runs the last middleware added first, so the correlation id
    is assigned before anything logs and in-flight tracking sees only the
    handler.
    """
    app.middleware("http")(request_tracking_middleware)
    app.middleware("http")(request_logging_middleware)
    app.add_middleware(
        SecurityHeadersMiddleware,
        content_security_policy=_content_security_policy(settings),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")
