"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint.

    Exposes all registered Prometheus metrics including:
    - place_resolution_latency_ms{provider, outcome}
    - place_provider_errors_total{provider, reason}
    - place_cache_hits_total{tier}
    - place_cache_misses_total
    - place_offline_refusals_total{provider}
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
