"""Security response headers applied to every response (helmet-style defaults)."""

from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

SECURITY_HEADERS = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Frame-Options": "SAMEORIGIN",
}

CONTENT_SECURITY_POLICY = "default-src 'self'; frame-ancestors 'self'; object-src 'none'"

# Swagger UI and ReDoc load their assets from a CDN.
DOCS_PATHS = ("/docs", "/redoc")


async def add_security_headers(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """Set the security headers without overriding any a route set itself."""
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    if not request.url.path.startswith(DOCS_PATHS):
        response.headers.setdefault("Content-Security-Policy", CONTENT_SECURITY_POLICY)
    return response
