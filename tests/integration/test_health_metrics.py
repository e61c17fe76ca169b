"""Integration tests for /health, /healthz and /metrics endpoints."""

from collections.abc import Callable, Iterator
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from backend.resolver.config import ResolverMode
from backend.resolver.main import create_app
from backend.resolver.orchestration.resolver import PlaceResolver
from backend.resolver.utils.metrics import PrometheusResolverMetrics


@pytest.fixture
def resolver(make_resolver: Callable[..., PlaceResolver]) -> PlaceResolver:
    return make_resolver(metrics=PrometheusResolverMetrics())


@pytest.fixture
def client(resolver: PlaceResolver) -> Iterator[TestClient]:
    """Create test client."""
    with TestClient(create_app(resolver)) as test_client:
        yield test_client


def test_health_always_ok(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root(client: TestClient) -> None:
    assert client.get("/").json()["message"] == "Place Resolver API"


class TestHealthzEndpoint:
    """Test /healthz endpoint."""

    def test_healthz_returns_200_with_fresh_cache(self, client: TestClient) -> None:
        response = client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["components"] == {"cache": "ok", "cache_entries": 0, "mode": "offline"}

    def test_healthz_counts_entries(self, client: TestClient) -> None:
        place = {"name": "Senso-ji", "city": "Tokyo", "country": "Japan"}
        client.post("/places/resolve", json={"place": place})

        data = client.get("/healthz").json()

        assert data["components"]["cache_entries"] == 1

    def test_healthz_reports_mode_override(self, client: TestClient, resolver: PlaceResolver) -> None:
        resolver.set_mode_override(ResolverMode.live)

        data = client.get("/healthz").json()

        assert data["components"]["mode"] == "live"

    @patch("backend.resolver.api.routes.health.check_cache")
    def test_healthz_returns_503_when_cache_unusable(
        self, mock_check_cache: MagicMock, client: TestClient
    ) -> None:
        mock_check_cache.return_value = (False, "read_only", 3)

        response = client.get("/healthz")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["components"]["cache"] == "read_only"
        assert data["components"]["cache_entries"] == 3


class TestMetricsEndpoint:
    """Test /metrics endpoint."""

    def test_metrics_exposes_resolver_series(self, client: TestClient) -> None:
        place = {"name": "Kiyomizu-dera", "city": "Kyoto", "country": "Japan"}
        client.post("/places/resolve", json={"place": place})
        client.post("/places/resolve", json={"place": place})

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        body = response.text
        assert "place_cache_hits_total" in body
        assert "place_cache_misses_total" in body
        assert "place_resolution_latency_ms" in body
