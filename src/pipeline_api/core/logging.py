"""structlog configuration and request-scoped log context."""

import logging
import sys

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg", "httpx", "uvicorn.access")


def setup_logging(debug: bool = False) -> None:
    """Route stdlib and structlog output through one renderer.

    Debug mode renders coloured key/value lines for a terminal; otherwise
    every entry is one JSON object per line for the log shipper.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    renderer: structlog.typing.Processor = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(
    request_id: str | None,
    method: str | None = None,
    path: str | None = None,
) -> None:
    """Attach the correlation id (and, when given, the route) to later entries."""
    if request_id:
        bind_contextvars(request_id=request_id)
    if method and path:
        bind_contextvars(method=method, path=path)


def bind_principal_context(username: str, roles: frozenset[str] | None = None) -> None:
    """Attach the authenticated caller; roles are logged sorted."""
    bind_contextvars(username=username)
    if roles:
        bind_contextvars(roles=sorted(roles))


def clear_request_context() -> None:
    clear_contextvars()
