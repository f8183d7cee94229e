"""
Lookup cache with TTL support.

Caches resolved nutrition records to reduce provider calls. Validity
is checked at read time; stale entries are overwritten by the next
write for the same key, never swept.
"""

import time
from typing import Callable, Optional

import structlog
from pydantic import BaseModel, Field

from grocery_enrichment.domain.nutrition.models import NutritionRecord
from grocery_enrichment.domain.shared.errors import CacheError

logger = structlog.get_logger(__name__)

CacheKey = tuple[str, int]

DEFAULT_TTL_SECONDS = 86400


class CacheEntry(BaseModel):
    """Cached record with its write time.

    Example:
        >>> entry = CacheEntry(
        ...     key=("apple", 1), value=NutritionRecord(calories=52), written_at=0.0
        ... )
        >>> entry.is_valid(now=10.0, ttl_seconds=60)
        True
    """

    key: CacheKey = Field(..., description="Query signature")
    value: NutritionRecord = Field(..., description="Cached record")
    written_at: float = Field(..., description="Clock reading at write")

    def is_valid(self, now: float, ttl_seconds: float) -> bool:
        """Check if the entry is still inside its TTL."""
        return now - self.written_at < ttl_seconds


def make_key(term: str, limit: int = 1) -> CacheKey:
    """Cache key for a query: normalized term plus result limit.

    Example:
        >>> make_key("  Greek Yogurt ", 1)
        ('greek yogurt', 1)
    """
    normalized = (term or "").strip().lower()
    if not normalized:
        raise CacheError("Cache key must not be empty")
    return (normalized, limit)


class TTLCache:
    """In-memory nutrition record cache with TTL."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize cache.

        Args:
            ttl_seconds: Entry lifetime (default 24 hours)
            clock: Monotonic time source, injectable for tests
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[CacheKey, CacheEntry] = {}

    def get(self, key: CacheKey) -> Optional[NutritionRecord]:
        """Get cached record.

        Args:
            key: Query signature from ``make_key``

        Returns:
            Cached record, or None when missing or expired
        """
        entry = self._entries.get(key)

        if entry is None:
            logger.debug("Cache miss", key=key)
            return None

        if not entry.is_valid(self._clock(), self.ttl_seconds):
            logger.debug("Cache expired", key=key)
            return None

        logger.debug("Cache hit", key=key)
        return entry.value

    def set(self, key: CacheKey, value: NutritionRecord) -> None:
        """Cache record, replacing any previous entry for ``key``."""
        self._entries[key] = CacheEntry(key=key, value=value, written_at=self._clock())
        logger.debug("Cached record", key=key, ttl=self.ttl_seconds)

    def clear(self) -> None:
        """Clear all cache entries."""
        self._entries.clear()
        logger.info("Cache cleared")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        entry = self._entries.get(key)  # type: ignore[arg-type]
        return entry is not None and entry.is_valid(self._clock(), self.ttl_seconds)
