"""Persistent cache index models.

The index keeps a camelCase layout in ``index.json`` on disk
(``lastUpdated``, ``totalHits``, ``totalMisses``) while exposing snake_case
attributes in Python.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from backend.resolver.models.places import PlaceResolutionResult, UnresolvedPlace


def utc_now_iso() -> str:
    """Current time as an ISO-8601 string."""
    return datetime.now(UTC).isoformat()


class CacheEntry(BaseModel):
    """Persisted unit: the query, its result and when it was stored."""

    place: UnresolvedPlace
    result: PlaceResolutionResult
    timestamp: str = Field(default_factory=utc_now_iso)


class CacheIndex(BaseModel):
    """Full persistent store."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    entries: dict[str, CacheEntry] = Field(default_factory=dict)
    last_updated: str = Field(default_factory=utc_now_iso)
    total_hits: int = 0
    total_misses: int = 0
