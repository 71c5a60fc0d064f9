"""Helmet-style response headers as a pure ASGI middleware."""

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

# Swagger UI needs inline scripts and the jsDelivr CDN
DOCS_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "img-src 'self' data: cdn.jsdelivr.net; "
    "frame-ancestors 'none'"
)

# Responses under this prefix carry caller-specific data
NO_STORE_PREFIX = "/api/"


def build_security_headers(content_security_policy: str) -> dict[str, str]:
    headers = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
        "Referrer-Policy": "strict-origin-when-cross-origin",
    }
    if content_security_policy:
        headers["Content-Security-Policy"] = content_security_policy
    return headers


class SecurityHeadersMiddleware:
    """Add security headers to every HTTP response; API responses are never cached."""

    def __init__(self, app: ASGIApp, content_security_policy: str | None = None) -> None:
        self.app = app
        self.headers = build_security_headers(
            DOCS_CSP if content_security_policy is None else content_security_policy
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        no_store = scope["path"].startswith(NO_STORE_PREFIX)

        async def send_with_headers(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                for name, value in self.headers.items():
                    headers[name] = value
                if no_store:
                    headers["Cache-Control"] = "no-store"
            await send(message)

        await self.app(scope, receive, send_with_headers)
