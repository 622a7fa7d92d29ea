"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to the uniform error envelope {success, error, message, details}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from clubops.core.config import get_settings
from clubops.domain.exceptions import ClubOpsException
from clubops.shared.context import (
    get_current_actor_id,
    get_current_ip_address,
    get_request_id,
)
from clubops.shared.telemetry.tracing import get_trace_id

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "SELF_REVOCATION_DENIED": 403,
    "VALIDATION_ERROR": 400,
    "INVALID_REQUEST_TYPE": 400,
    "RESOURCE_NOT_FOUND": 404,
    "ROLE_ALREADY_ASSIGNED": 409,
    "ALREADY_RESOLVED": 409,
    "ALREADY_EXECUTED": 409,
    "SERVICE_UNAVAILABLE": 503,
}


def status_for(exc: ClubOpsException) -> int:
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _error_body(error: str, message: Any, details: dict[str, Any] | None = None) -> dict[str, Any]:
    return {"success": False, "error": error, "message": message, "details": details or {}}


def _clubops_exception_handler(request: Request, exc: ClubOpsException) -> JSONResponse:
    """Return JSON from ClubOpsException.to_dict() with the mapped status code."""
    status = status_for(exc)
    if status == 403:
        logger.info(
            "Denied %s %s for actor %s (%s): %s",
            request.method,
            request.url.path,
            get_current_actor_id(),
            get_current_ip_address(),
            exc.error_code,
        )
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return JSONResponse(status_code=status, content=exc.to_dict(), headers=headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 naming the first offending field."""
    errors = exc.errors()
    field = None
    message = "Request validation failed"
    if errors:
        loc = [str(p) for p in errors[0].get("loc", ()) if p not in ("body", "query")]
        field = ".".join(loc) or None
        message = errors[0].get("msg", message)
    return JSONResponse(
        status_code=400,
        content=_error_body("VALIDATION_ERROR", message, {"field": field} if field else {}),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body("HTTP_ERROR", exc.detail),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception(
        "Unhandled exception (request %s, trace %s): %s", get_request_id(), get_trace_id(), exc
    )
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(status_code=500, content=_error_body("INTERNAL_ERROR", detail))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: ClubOpsException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(ClubOpsException, _clubops_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
