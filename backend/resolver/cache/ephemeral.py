"""In-process TTL cache for same-session repeat lookups."""

import time
from collections.abc import Callable
from dataclasses import dataclass

from backend.resolver.models.places import PlaceResolutionResult

DEFAULT_TTL_SECONDS = 24 * 3600


@dataclass
class EphemeralEntry:
    """Cached result with the clock reading at store time."""

    result: PlaceResolutionResult
    stored_at: float

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        """Check if entry is still valid."""
        return (now - self.stored_at) < ttl_seconds


class EphemeralCache:
    """Process-local cache. Writes to the same key are last-write-wins."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock or time.monotonic
        self._entries: dict[str, EphemeralEntry] = {}

    def get(self, key: str) -> PlaceResolutionResult | None:
        """Get cached result if fresh, None otherwise."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_fresh(self._clock(), self._ttl_seconds):
            del self._entries[key]
            return None
        return entry.result

    def set(self, key: str, result: PlaceResolutionResult) -> None:
        """Store result under key."""
        self._entries[key] = EphemeralEntry(result=result, stored_at=self._clock())

    def clear(self) -> None:
        """Drop all entries (useful for testing)."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
