"""Process-wide in-memory cache of Edge developer representations with TTL support."""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Generic, Iterable, Optional, TypeVar
import structlog

from config import get_settings
from edge.models import EdgeDeveloper

logger = structlog.get_logger()

T = TypeVar('T')


@dataclass
class CacheEntry(Generic[T]):
    """Cache entry with value and metadata."""
    value: T
    cached_at: datetime
    expires_at: datetime


class EntityCache:
    """Lock-guarded cache of developers keyed by developer id and email.

    Every saved developer is stored under both keys. Removal only drops the
    exact keys it is given, so callers invalidating one identity form must
    also pass the other.
    """

    def __init__(self, ttl_seconds: int = 900):
        self._entries: dict[str, CacheEntry[EdgeDeveloper]] = {}
        self._lock = asyncio.Lock()
        self._ttl = timedelta(seconds=ttl_seconds)

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _valid_entry(self, key: str) -> Optional[CacheEntry[EdgeDeveloper]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._now() >= entry.expires_at:
            del self._entries[key]
            return None
        return entry

    def has(self, key: str) -> bool:
        """Check whether a non-expired entry exists for the key."""
        return self._valid_entry(key) is not None

    @property
    def keys(self) -> set[str]:
        return {key for key in list(self._entries) if self.has(key)}

    async def get_entity(self, key: str) -> Optional[EdgeDeveloper]:
        """Get a copy of the cached developer, if any."""
        async with self._lock:
            entry = self._valid_entry(key)
            if entry is None:
                logger.debug("developer_cache_miss", key=key)
                return None
            logger.debug("developer_cache_hit", key=key)
            return entry.value.model_copy(deep=True)

    async def get_entities(self, keys: Iterable[str]) -> list[EdgeDeveloper]:
        """Get copies of every cached developer among the keys."""
        result = []
        for key in keys:
            entity = await self.get_entity(key)
            if entity is not None:
                result.append(entity)
        return result

    async def save_entities(self, entities: Iterable[EdgeDeveloper]) -> None:
        """Store developers under their developer id and email."""
        async with self._lock:
            now = self._now()
            for entity in entities:
                entry = CacheEntry(
                    value=entity.model_copy(deep=True),
                    cached_at=now,
                    expires_at=now + self._ttl
                )
                for key in (entity.developer_id, entity.email):
                    if key:
                        self._entries[key] = entry

    async def remove_entities(self, keys: Iterable[str]) -> None:
        """Drop the entries stored under the given keys."""
        async with self._lock:
            removed = [key for key in keys if self._entries.pop(key, None) is not None]
        if removed:
            logger.info("developer_cache_invalidated", keys=removed)

    async def remove_all(self) -> None:
        """Clear cache."""
        async with self._lock:
            self._entries.clear()
            logger.info("developer_cache_cleared")


# Global singleton instance
_developer_cache: Optional[EntityCache] = None


def get_developer_cache() -> EntityCache:
    """Get or create developer cache singleton."""
    global _developer_cache
    if _developer_cache is None:
        _developer_cache = EntityCache(ttl_seconds=get_settings().entity_cache_ttl_seconds)
    return _developer_cache
