"""Client cache policy for resource responses."""

from __future__ import annotations

from enum import Enum

from wicketry.config.constants import MAX_CACHE_DURATION, NO_CACHE

__all__ = ["MAX_CACHE_DURATION", "NO_CACHE", "CacheScope"]


class CacheScope(Enum):
    """Which caches may store a response."""

    PRIVATE = "private"
    """Only the end user's browser may cache."""

    PUBLIC = "public"
    """Shared proxies may cache as well."""

    @property
    def cache_control(self) -> str:
        return self.value
