"""Presentation-layer dependency injection (composition root).

Routes depend only on these dependencies, never on repositories directly.
Tests replace get_read_services / get_write_services via dependency_overrides.
"""

from clubops.api.v1.dependencies.auth import CurrentActor, get_current_actor
from clubops.api.v1.dependencies.services import (
    ClubServices,
    ReadServices,
    WriteServices,
    build_services,
    get_read_services,
    get_write_services,
)

__all__ = [
    "ClubServices",
    "CurrentActor",
    "ReadServices",
    "WriteServices",
    "build_services",
    "get_current_actor",
    "get_read_services",
    "get_write_services",
]
