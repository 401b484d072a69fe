"""CORS headers for the storefront-facing endpoints.

The storefront is served from arbitrary domains, so the caller's origin is
echoed back instead of matching against an allow-list.
"""

from urllib.parse import urlsplit

from fastapi import Request

ALLOW_METHODS = "GET, POST, OPTIONS"
ALLOW_HEADERS = "Content-Type"
MAX_AGE = "86400"


def request_origin(request: Request) -> str:
    """Origin of the caller: the Origin header, else the Referer's origin, else ``*``."""
    origin = request.headers.get("origin")
    if origin:
        return origin

    referer = request.headers.get("referer")
    if referer:
        parts = urlsplit(referer)
        if parts.scheme and parts.netloc:
            return f"{parts.scheme}://{parts.netloc}"

    return "*"


def cors_headers(origin: str | None) -> dict[str, str]:
    """Build the CORS header set sent on every response."""
    return {
        "Access-Control-Allow-Origin": origin or "*",
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
        "Access-Control-Max-Age": MAX_AGE,
    }
