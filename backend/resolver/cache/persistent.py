"""On-disk resolution cache with a serialized write path.

All reads and mutations of the index go through ``with_lock``: callers queue
on a single ``asyncio.Lock`` (FIFO), the index is read from disk once and then
kept in memory, and every mutation marks the index dirty. A debounced flush
coalesces bursts of mutations into one write; ``flush`` forces the write
immediately for callers that may be torn down before the timer fires.
"""

import asyncio
import logging
import os
import tempfile
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

from backend.resolver.cache.keys import make_cache_key
from backend.resolver.cache.scheduler import AsyncioScheduler, DelayedTaskScheduler, ScheduledTask
from backend.resolver.models.cache import CacheEntry, CacheIndex, utc_now_iso
from backend.resolver.models.places import PlaceResolutionResult, UnresolvedPlace

T = TypeVar("T")

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.json"
DEFAULT_FLUSH_DELAY_SECONDS = 0.1


class PersistentCache:
    """JSON index file keyed by ``make_cache_key``."""

    def __init__(
        self,
        cache_dir: str | Path,
        flush_delay_seconds: float = DEFAULT_FLUSH_DELAY_SECONDS,
        scheduler: DelayedTaskScheduler | None = None,
    ) -> None:
        """Initialize cache.

        Args:
            cache_dir: Directory holding ``index.json`` (created on first write)
            flush_delay_seconds: Debounce window for ``mark_dirty``
            scheduler: Delayed-task scheduler (default: asyncio tasks)
        """
        self._cache_dir = Path(cache_dir)
        self._flush_delay_seconds = flush_delay_seconds
        self._scheduler = scheduler or AsyncioScheduler()
        self._lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()
        self._index: CacheIndex | None = None
        self._dirty = False
        self._flush_handle: ScheduledTask | None = None

    @property
    def index_path(self) -> Path:
        return self._cache_dir / INDEX_FILENAME

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    # Lifecycle

    async def open(self) -> None:
        """Load the index ahead of the first operation."""
        async with self._lock:
            await self._ensure_loaded()

    async def close(self) -> None:
        """Write pending changes and stop the flush timer."""
        await self.flush()

    # Locking

    async def with_lock(self, operation: Callable[[CacheIndex], Awaitable[T]]) -> T:
        """Run ``operation`` with exclusive access to the loaded index.

        Operations run one at a time in the order they were queued.
        """
        async with self._lock:
            index = await self._ensure_loaded()
            return await operation(index)

    def mark_dirty(self) -> None:
        """Flag unsaved changes and (re)start the debounce timer."""
        self._dirty = True
        self._cancel_pending_flush()
        self._flush_handle = self._scheduler.schedule(
            self._flush_delay_seconds, self._flush_from_timer
        )

    async def flush(self) -> None:
        """Write the index now if dirty. No-op when clean.

        A flush issued while another write is in flight waits for it, then
        writes again if anything is still unsaved.

        Raises:
            OSError: If the index file cannot be written (changes stay dirty)
        """
        self._cancel_pending_flush()
        async with self._write_lock:
            if not self._dirty or self._index is None:
                return

            # Mutations during the write mark the index dirty again
            self._dirty = False
            self._index.last_updated = utc_now_iso()
            payload = self._index.model_dump_json(by_alias=True, indent=2)
            try:
                await asyncio.to_thread(self._write_index_file, payload)
            except OSError:
                self._dirty = True
                logger.exception("Failed to write resolver cache index to %s", self.index_path)
                raise

    # Cache operations

    async def get_cached_result(self, place: UnresolvedPlace) -> PlaceResolutionResult | None:
        """Look up a stored result, counting the hit or miss."""
        key = make_cache_key(place)

        async def lookup(index: CacheIndex) -> PlaceResolutionResult | None:
            entry = index.entries.get(key)
            if entry is None:
                index.total_misses += 1
                self.mark_dirty()
                logger.debug('Cache MISS: "%s" in %s', place.name, place.city)
                return None

            index.total_hits += 1
            self.mark_dirty()
            logger.debug('Cache HIT: "%s" in %s', place.name, place.city)
            return entry.result.model_copy(update={"cached": True}, deep=True)

        return await self.with_lock(lookup)

    async def cache_result(self, place: UnresolvedPlace, result: PlaceResolutionResult) -> None:
        """Store (or overwrite) the result for ``place``."""
        key = make_cache_key(place)

        async def store(index: CacheIndex) -> None:
            index.entries[key] = CacheEntry(place=place, result=result.model_copy(deep=True))
            self.mark_dirty()
            logger.debug('Cached: "%s" from %s', place.name, result.provider)

        await self.with_lock(store)

    async def stats(self) -> dict[str, Any]:
        """Entry count and hit/miss counters."""

        async def read(index: CacheIndex) -> dict[str, Any]:
            return {
                "entries": len(index.entries),
                "total_hits": index.total_hits,
                "total_misses": index.total_misses,
                "last_updated": index.last_updated,
            }

        return await self.with_lock(read)

    # Internals

    async def _ensure_loaded(self) -> CacheIndex:
        if self._index is None:
            self._index = await asyncio.to_thread(self._read_index_file)
        return self._index

    async def _flush_from_timer(self) -> None:
        self._flush_handle = None
        await self.flush()

    def _cancel_pending_flush(self) -> None:
        if self._flush_handle is not None:
            self._flush_handle.cancel()
            self._flush_handle = None

    def _read_index_file(self) -> CacheIndex:
        try:
            content = self.index_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return CacheIndex()
        except OSError as e:
            logger.warning("Resolver cache index unreadable, starting empty: %s", e)
            return CacheIndex()

        try:
            return CacheIndex.model_validate_json(content)
        except ValueError as e:
            logger.warning("Resolver cache index corrupt, starting empty: %s", e)
            return CacheIndex()

    def _write_index_file(self, payload: str) -> None:
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self._cache_dir, prefix=".index-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.index_path)
        except OSError:
            Path(tmp_path).unlink(missing_ok=True)
            raise
