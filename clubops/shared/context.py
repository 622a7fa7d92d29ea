"""Request context management using contextvars.

Provides async-safe storage for the authenticated actor and the request id
of the current request, so log lines and error handlers can name who acted
without threading ids through every call.

Usage:
    set_current_actor(actor_id="user123", ip_address="10.0.0.1")
    actor_id = get_current_actor_id()
"""

from contextvars import ContextVar, Token

_current_actor_id: ContextVar[str | None] = ContextVar("current_actor_id", default=None)
_current_ip_address: ContextVar[str | None] = ContextVar(
    "current_ip_address", default=None
)
_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_current_actor(actor_id: str, ip_address: str | None = None) -> None:
    """Set the authenticated actor for this request.

    Call from the auth dependency after the credential is verified.

    Raises:
        ValueError: If actor_id is empty.
    """
    if not actor_id:
        raise ValueError("actor_id is required")
    _current_actor_id.set(actor_id)
    _current_ip_address.set(ip_address)


def get_current_actor_id() -> str | None:
    """Return the current actor ID, or None if not authenticated."""
    return _current_actor_id.get()


def get_current_ip_address() -> str | None:
    """Return the current request IP address."""
    return _current_ip_address.get()


def set_request_id(request_id: str) -> Token:
    """Bind the request id for this request; returns a token for reset_request_id."""
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def get_request_id() -> str | None:
    """Return the current request id (set by RequestIDMiddleware)."""
    return _request_id.get()
