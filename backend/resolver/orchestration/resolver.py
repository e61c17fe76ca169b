"""Place resolution orchestrator.

Lookup order for a query:

1. Ephemeral (in-process) cache, then the persistent index, unless the
   caller forces a refresh.
2. Offline mode: bundled reference data (exact, then fuzzy), else a
   deterministic synthetic place. Both are persisted and flushed at once.
3. Live mode: providers in category order, filtered by the allow-list and
   cost flag. The first provider whose best candidate clears
   ``min_confidence`` wins; failing providers are logged and skipped.
"""

import logging
import time
from collections.abc import Awaitable, Callable, Mapping, Sequence

import httpx

from backend.resolver.adapters.base import (
    DEFAULT_RESULT_LIMIT,
    PlaceProvider,
    ProviderHTTPError,
    ProviderNotConfiguredError,
    ProviderTimeoutError,
    location_hint_for,
)
from backend.resolver.adapters.local_reference import LocalPOI, LocalReferenceData
from backend.resolver.adapters.registry import build_default_providers
from backend.resolver.cache.ephemeral import EphemeralCache
from backend.resolver.cache.keys import make_cache_key
from backend.resolver.cache.persistent import PersistentCache
from backend.resolver.config import ResolverMode, Settings
from backend.resolver.models.common import PlaceSource
from backend.resolver.models.places import (
    PlaceResolutionResult,
    ResolutionOptions,
    ResolvedPlace,
    UnresolvedPlace,
)
from backend.resolver.orchestration.batch import (
    DEFAULT_BATCH_DELAY_SECONDS,
    DEFAULT_BATCH_SIZE,
    resolve_in_batches,
)
from backend.resolver.resolution.normalizers import normalize
from backend.resolver.resolution.provider_order import providers_for
from backend.resolver.resolution.synthetic import generate_synthetic_place

logger = logging.getLogger(__name__)

NO_MATCH_ERROR = "No matching place found"
LOCAL_FUZZY_MIN_SIMILARITY = 0.6


# Metrics interface (implemented by PrometheusResolverMetrics)
class ResolverMetrics:
    """Interface for resolution metrics."""

    def record_latency(self, provider: str, outcome: str, latency_ms: float) -> None:
        """Record resolution latency."""
        pass

    def inc_provider_error(self, provider: str, reason: str) -> None:
        """Increment provider error counter."""
        pass

    def inc_cache_hit(self, tier: str) -> None:
        """Increment cache hit counter."""
        pass

    def inc_cache_miss(self) -> None:
        """Increment cache miss counter."""
        pass

    def inc_offline_refusal(self, provider: str) -> None:
        """Increment refused live-call counter."""
        pass


# Logging interface (implemented by StructuredResolverLogger)
class ResolverLogger:
    """Interface for structured resolution logging."""

    def log_provider_attempt(
        self,
        query: UnresolvedPlace,
        provider: str,
        outcome: str,
        latency_ms: float,
        candidates: int = 0,
        error_reason: str | None = None,
    ) -> None:
        """Log one provider search."""
        pass

    def log_resolution(self, result: PlaceResolutionResult) -> None:
        """Log a finished resolution."""
        pass


def error_reason(error: Exception) -> str:
    """Metric label for a provider failure."""
    if isinstance(error, ProviderTimeoutError):
        return "timeout"
    if isinstance(error, ProviderNotConfiguredError):
        return "not_configured"
    if isinstance(error, ProviderHTTPError):
        return "http_error"
    return "execution_error"


def is_same_place(a: ResolvedPlace, b: ResolvedPlace) -> bool:
    """Same provider record, or field-equal when ids are missing."""
    if a.source_id is not None and b.source_id is not None:
        return a.source == b.source and a.source_id == b.source_id
    return a == b


class PlaceResolver:
    """Resolves unverified place mentions into verified records."""

    def __init__(
        self,
        cache: PersistentCache,
        providers: Mapping[PlaceSource, PlaceProvider] | None = None,
        local_reference: LocalReferenceData | None = None,
        memory_cache: EphemeralCache | None = None,
        mode: ResolverMode = ResolverMode.offline,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay_seconds: float = DEFAULT_BATCH_DELAY_SECONDS,
        metrics: ResolverMetrics | None = None,
        structured_logger: ResolverLogger | None = None,
        sleep_fn: Callable[[float], Awaitable[None]] | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            cache: Persistent cache (owned: closed by ``aclose``)
            providers: Live adapters keyed by source tag
            local_reference: Offline reference data (default: bundled fixtures)
            memory_cache: Ephemeral cache (default: 24h TTL)
            mode: Configured mode; see ``set_mode_override``
            batch_size: Concurrent resolutions per batch
            batch_delay_seconds: Pause between batches
            metrics: Metrics recorder (optional, defaults to no-op)
            structured_logger: Structured logger (optional, defaults to no-op)
            sleep_fn: Injectable sleep function (default: asyncio.sleep)
            clock: Monotonic clock in seconds (default: time.perf_counter)
        """
        self._cache = cache
        self._providers = dict(providers or {})
        self._local = local_reference or LocalReferenceData()
        self._memory = memory_cache or EphemeralCache()
        self._mode = mode
        self._mode_override: ResolverMode | None = None
        self._batch_size = batch_size
        self._batch_delay_seconds = batch_delay_seconds
        self._metrics = metrics or ResolverMetrics()
        self._logger = structured_logger or ResolverLogger()
        self._sleep = sleep_fn
        self._clock = clock or time.perf_counter

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
        metrics: ResolverMetrics | None = None,
        structured_logger: ResolverLogger | None = None,
    ) -> "PlaceResolver":
        """Wire a resolver from application settings.

        Raises:
            ValueError: If ``PLACE_RESOLVER_MODE`` is not a known mode
        """
        mode = settings.resolver_mode
        return cls(
            cache=PersistentCache(
                settings.cache_path,
                flush_delay_seconds=settings.cache_flush_delay_ms / 1000,
            ),
            providers=build_default_providers(settings, client),
            local_reference=LocalReferenceData(settings.local_poi_dir),
            memory_cache=EphemeralCache(ttl_seconds=settings.memory_cache_ttl_hours * 3600),
            mode=mode,
            batch_size=settings.batch_size,
            batch_delay_seconds=settings.batch_delay_ms / 1000,
            metrics=metrics,
            structured_logger=structured_logger,
        )

    # Mode

    @property
    def mode(self) -> ResolverMode:
        """Effective mode (override wins over configuration)."""
        return self._mode_override or self._mode

    def set_mode_override(self, mode: ResolverMode | None) -> None:
        """Force a mode at runtime; ``None`` restores the configured mode."""
        self._mode_override = mode

    def is_offline(self) -> bool:
        return self.mode == ResolverMode.offline

    @property
    def cache(self) -> PersistentCache:
        return self._cache

    # Lifecycle

    async def open(self) -> None:
        await self._cache.open()

    async def aclose(self) -> None:
        """Flush the persistent cache and close adapter clients."""
        await self._cache.close()
        for provider in self._providers.values():
            await provider.aclose()

    # Resolution

    async def resolve_place(
        self, query: UnresolvedPlace, options: ResolutionOptions | None = None
    ) -> PlaceResolutionResult:
        """Resolve one place mention.

        Never raises for provider failures or missing matches; those are
        reported through ``result.error``.

        Raises:
            OSError: If an offline result cannot be flushed to disk
        """
        options = options or ResolutionOptions()
        start = self._clock()
        key = make_cache_key(query)

        if not options.force_refresh:
            remembered = self._memory.get(key)
            if remembered is not None:
                self._metrics.inc_cache_hit("memory")
                return self._finish(self._as_cache_hit(remembered, start), "cache_hit")

            stored = await self._cache.get_cached_result(query)
            if stored is not None:
                self._memory.set(key, stored.model_copy(update={"cached": False}))
                self._metrics.inc_cache_hit("disk")
                return self._finish(self._as_cache_hit(stored, start), "cache_hit")

            self._metrics.inc_cache_miss()

        if self.is_offline():
            result = await self._resolve_offline(query, start)
            await self._store(key, query, result)
            # Persist before returning; callers may exit before the debounce fires
            await self._cache.flush()
            return self._finish(result, "success")

        result = await self._resolve_live(query, options, start)
        if result.resolved is None:
            return self._finish(result, "no_match")

        await self._store(key, query, result)
        return self._finish(result, "success")

    async def resolve_places(
        self, queries: Sequence[UnresolvedPlace], options: ResolutionOptions | None = None
    ) -> list[PlaceResolutionResult]:
        """Resolve many places in rate-limited batches, preserving order.

        A query that fails unexpectedly yields a result carrying the error
        instead of aborting the remaining queries.
        """

        async def resolve_one(query: UnresolvedPlace) -> PlaceResolutionResult:
            try:
                return await self.resolve_place(query, options)
            except Exception as e:
                logger.exception('Resolution failed for "%s"', query.name)
                return PlaceResolutionResult(original=query, error=f"{type(e).__name__}: {e}")

        return await resolve_in_batches(
            queries,
            resolve_one,
            batch_size=self._batch_size,
            delay_seconds=self._batch_delay_seconds,
            sleep_fn=self._sleep,
        )

    # Internals

    def _elapsed_ms(self, start: float) -> float:
        return (self._clock() - start) * 1000

    def _as_cache_hit(self, result: PlaceResolutionResult, start: float) -> PlaceResolutionResult:
        return result.model_copy(
            update={"cached": True, "duration_ms": self._elapsed_ms(start)}, deep=True
        )

    def _finish(self, result: PlaceResolutionResult, outcome: str) -> PlaceResolutionResult:
        self._metrics.record_latency(result.provider, outcome, result.duration_ms)
        self._logger.log_resolution(result)
        return result

    async def _store(
        self, key: str, query: UnresolvedPlace, result: PlaceResolutionResult
    ) -> None:
        # Both tiers written together so they never disagree
        await self._cache.cache_result(query, result)
        self._memory.set(key, result.model_copy(deep=True))

    async def _find_local(self, query: UnresolvedPlace) -> LocalPOI | None:
        if not await self._local.has_data(query.city):
            return None

        poi = await self._local.find_exact(query.name, query.city)
        if poi is not None:
            return poi

        matches = await self._local.find_fuzzy(
            query.name,
            query.city,
            max_results=1,
            min_similarity=LOCAL_FUZZY_MIN_SIMILARITY,
            category=query.category,
        )
        return matches[0] if matches else None

    async def _resolve_offline(
        self, query: UnresolvedPlace, start: float
    ) -> PlaceResolutionResult:
        poi = await self._find_local(query)
        if poi is not None:
            logger.debug('Local reference match for "%s": %s', query.name, poi.name)
            resolved = poi.to_resolved()
        else:
            logger.debug('No local reference for "%s", generating synthetic place', query.name)
            resolved = generate_synthetic_place(query)

        return PlaceResolutionResult(
            original=query,
            resolved=resolved,
            provider=resolved.source.value,
            duration_ms=self._elapsed_ms(start),
        )

    async def _resolve_live(
        self, query: UnresolvedPlace, options: ResolutionOptions, start: float
    ) -> PlaceResolutionResult:
        order = providers_for(query.category, options.providers, options.skip_expensive_providers)
        hint = location_hint_for(query)
        last_error: str | None = None

        for source in order:
            try:
                candidates = await self._search_provider(source, query, hint)
            except Exception as e:
                last_error = str(e) or type(e).__name__
                logger.warning('%s failed for "%s": %s', source.value, query.name, last_error)
                continue

            if not candidates:
                continue

            ranked = sorted(candidates, key=lambda place: place.confidence, reverse=True)
            best = ranked[0]
            if best.confidence < options.min_confidence:
                continue

            alternatives = [p for p in ranked[1:] if not is_same_place(p, best)]
            return PlaceResolutionResult(
                original=query,
                resolved=best,
                alternatives=alternatives[: options.max_alternatives],
                provider=source.value,
                duration_ms=self._elapsed_ms(start),
            )

        return PlaceResolutionResult(
            original=query,
            error=last_error or NO_MATCH_ERROR,
            duration_ms=self._elapsed_ms(start),
        )

    async def _search_provider(
        self, source: PlaceSource, query: UnresolvedPlace, location_hint: str
    ) -> list[ResolvedPlace]:
        """Call one live adapter and normalize its candidates.

        In offline mode this refuses the call, logs a warning and returns no
        candidates.

        Raises:
            ProviderNotConfiguredError: If no adapter is registered for source
            Exception: Whatever the adapter or normalizer raised
        """
        if self.is_offline():
            logger.warning(
                'Refusing live %s search for "%s" in offline mode', source.value, query.name
            )
            self._metrics.inc_offline_refusal(source.value)
            return []

        provider = self._providers.get(source)
        if provider is None:
            raise ProviderNotConfiguredError(f"No adapter registered for {source.value}")

        attempt_start = self._clock()
        try:
            raw = await provider.search(query, location_hint, DEFAULT_RESULT_LIMIT)
            candidates = [normalize(source, record, query) for record in raw]
        except Exception as e:
            reason = error_reason(e)
            self._metrics.inc_provider_error(source.value, reason)
            self._logger.log_provider_attempt(
                query, source.value, "error", self._elapsed_ms(attempt_start), error_reason=reason
            )
            raise

        self._logger.log_provider_attempt(
            query,
            source.value,
            "success",
            self._elapsed_ms(attempt_start),
            candidates=len(candidates),
        )
        return candidates
