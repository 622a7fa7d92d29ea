"""Shared utilities: datetime and id generators."""

from clubops.shared.utils.datetime import ensure_utc, utc_now
from clubops.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
]
