"""Security headers middleware for the JSON API.

Responses carry finance and membership data, so they are marked no-store in
addition to the usual hardening headers. Raw ASGI, no BaseHTTPMiddleware.
"""

from typing import Callable

DEFAULT_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


def SecurityHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None
) -> Callable:
    """Set security headers on every HTTP response unless the handler set them."""
    encoded = [
        (k.lower().encode(), v.encode())
        for k, v in (headers if headers is not None else DEFAULT_HEADERS).items()
    ]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                current = list(message.get("headers", []))
                present = {name.lower() for name, _ in current}
                current.extend(h for h in encoded if h[0] not in present)
                message["headers"] = current
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
