"""Shared utilities: request context, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from clubops.shared.context import (
    get_current_actor_id,
    get_current_ip_address,
    get_request_id,
    set_current_actor,
)
from clubops.shared.utils import ensure_utc, generate_cuid, utc_now

__all__ = [
    "set_current_actor",
    "get_current_actor_id",
    "get_current_ip_address",
    "get_request_id",
    "generate_cuid",
    "utc_now",
    "ensure_utc",
]
