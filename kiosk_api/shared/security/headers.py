"""
Secure HTTP headers middleware.

Adds security-related headers to every response:
- X-Content-Type-Options
- Referrer-Policy
- Content-Security-Policy
- X-XSS-Protection
- Strict-Transport-Security (HTTPS only)

X-Frame-Options is not sent: the kiosk frontend embeds the API in frames.

No business logic. Pure cross-cutting concern.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

SECURE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'self'",
    "X-XSS-Protection": "0",
}

HSTS_HEADER = ("Strict-Transport-Security", "max-age=15552000; includeSubDomains")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that adds secure HTTP headers to every response.

    Prevents common web vulnerabilities by setting restrictive
    default headers on all outgoing responses.
    """

    def __init__(self, app: ASGIApp, https: bool = False) -> None:
        super().__init__(app)
        self.https = https

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        for header_name, header_value in SECURE_HEADERS.items():
            response.headers[header_name] = header_value
        if self.https:
            response.headers[HSTS_HEADER[0]] = HSTS_HEADER[1]
        return response
