"""Request ID middleware.

Forwards a caller-supplied request id or mints one, exposes it to handlers
(request.state.request_id and the request context) and echoes it on the
response. Client values are sanitized (length + character set) so they are
safe to log. Raw ASGI, no BaseHTTPMiddleware.
"""

import re
from typing import Callable

from clubops.shared.context import reset_request_id, set_request_id
from clubops.shared.utils.generators import generate_cuid

REQUEST_ID_MAX_LENGTH = 64
_REQUEST_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{1," + str(REQUEST_ID_MAX_LENGTH) + r"}$")


def _get_header(scope: dict, name: str) -> str | None:
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def sanitize_request_id(raw: str | None) -> str:
    """Return the stripped client value if it is safe to log, else a fresh CUID."""
    candidate = (raw or "").strip()
    if not _REQUEST_ID_PATTERN.match(candidate):
        return generate_cuid()
    return candidate


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Add or forward the request id header on each request and response."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = sanitize_request_id(_get_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        token = set_request_id(request_id)

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((header_name.encode(), request_id.encode()))
                message["headers"] = headers
            await send(message)

        try:
            await app(scope, receive, send_wrapper)
        finally:
            reset_request_id(token)

    return asgi_app
