"""Caller identity dependency: bearer JWT -> actor id.

Runs before any role lookup; a missing or bad credential ends the request
with 401.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from clubops.domain.exceptions import AuthenticationException
from clubops.infrastructure.security.jwt import verify_token
from clubops.shared.context import set_current_actor

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_actor(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> str:
    """Return the verified actor id (JWT sub); raise 401 if missing or invalid."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError:
        raise AuthenticationException("Invalid or expired token") from None
    actor_id = str(payload["sub"])
    set_current_actor(actor_id, request.client.host if request.client else None)
    return actor_id


CurrentActor = Annotated[str, Depends(get_current_actor)]
