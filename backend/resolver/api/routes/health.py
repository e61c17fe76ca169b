"""Health check endpoints.

- /health: liveness, always 200
- /healthz: persistent cache readability and directory writability, plus
  the effective resolver mode
"""

import asyncio
import os
from typing import Any

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from backend.resolver.api.dependencies import get_resolver
from backend.resolver.orchestration.resolver import PlaceResolver

router = APIRouter()


def _directory_writable(path: os.PathLike[str]) -> bool:
    # Missing directories are created on first flush
    return not os.path.exists(path) or os.access(path, os.W_OK)


async def check_cache(resolver: PlaceResolver) -> tuple[bool, str, int | None]:
    """Check the persistent cache.

    Returns:
        (is_ok, status_message, entry_count)
    """
    try:
        stats = await resolver.cache.stats()
    except Exception as e:
        return (False, f"error: {type(e).__name__}", None)

    writable = await asyncio.to_thread(_directory_writable, resolver.cache.index_path.parent)
    if not writable:
        return (False, "read_only", stats["entries"])
    return (True, "ok", stats["entries"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz(resolver: PlaceResolver = Depends(get_resolver)) -> dict[str, Any] | Response:
    """Health check endpoint.

    Returns:
        200 with component status if the cache is usable
        503 if the cache cannot be read or written
    """
    cache_ok, cache_status, entries = await check_cache(resolver)

    response_body: dict[str, Any] = {
        "status": "ok" if cache_ok else "degraded",
        "components": {
            "cache": cache_status,
            "cache_entries": entries,
            "mode": resolver.mode.value,
        },
    }

    if not cache_ok:
        return JSONResponse(content=response_body, status_code=503)

    return response_body
