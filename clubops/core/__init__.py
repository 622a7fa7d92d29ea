"""Core: config, exception handlers, lifespan, and rate limiting."""

from clubops.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
