"""Domain value objects and shared value types."""

from clubops.domain.value_objects.core import MutationType

__all__ = [
    "MutationType",
]
