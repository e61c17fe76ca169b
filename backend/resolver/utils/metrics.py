"""Prometheus metrics for place resolution."""

from prometheus_client import Counter, Histogram

# Resolution metrics
resolution_latency_ms = Histogram(
    "place_resolution_latency_ms",
    "Place resolution latency in milliseconds",
    ["provider", "outcome"],
    buckets=[1, 5, 10, 50, 100, 200, 500, 1000, 2000, 5000],
)

provider_errors_total = Counter(
    "place_provider_errors_total",
    "Total provider search errors",
    ["provider", "reason"],
)

cache_hits_total = Counter(
    "place_cache_hits_total",
    "Total resolution cache hits",
    ["tier"],
)

cache_misses_total = Counter(
    "place_cache_misses_total",
    "Total resolution cache misses (both tiers)",
)

offline_refusals_total = Counter(
    "place_offline_refusals_total",
    "Live provider calls refused in offline mode",
    ["provider"],
)


class PrometheusResolverMetrics:
    """Prometheus-based resolver metrics implementation."""

    def record_latency(self, provider: str, outcome: str, latency_ms: float) -> None:
        """Record resolution latency."""
        resolution_latency_ms.labels(provider=provider, outcome=outcome).observe(latency_ms)

    def inc_provider_error(self, provider: str, reason: str) -> None:
        """Increment provider error counter."""
        provider_errors_total.labels(provider=provider, reason=reason).inc()

    def inc_cache_hit(self, tier: str) -> None:
        """Increment cache hit counter for ``memory`` or ``disk``."""
        cache_hits_total.labels(tier=tier).inc()

    def inc_cache_miss(self) -> None:
        cache_misses_total.inc()

    def inc_offline_refusal(self, provider: str) -> None:
        offline_refusals_total.labels(provider=provider).inc()
