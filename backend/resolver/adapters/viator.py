"""Viator partner API adapter for tours and bookable activities."""

from typing import Any, ClassVar

import httpx

from backend.resolver.adapters.base import (
    DEFAULT_RESULT_LIMIT,
    HTTPProvider,
    ProviderNotConfiguredError,
)
from backend.resolver.models.common import PlaceSource
from backend.resolver.models.places import UnresolvedPlace

VIATOR_BASE_URLS = {
    "sandbox": "https://api.sandbox.viator.com/partner",
    "production": "https://api.viator.com/partner",
}


def title_matches(query_name: str, title: str) -> bool:
    """Title contains the query, or the query contains the title's first three words."""
    query_lower = query_name.lower()
    title_lower = title.lower()
    if query_lower in title_lower:
        return True
    lead = " ".join(title_lower.split()[:3])
    return bool(lead) and lead in query_lower


class ViatorProvider(HTTPProvider):
    """Freetext product search filtered by title similarity."""

    tag: ClassVar[PlaceSource] = PlaceSource.viator

    def __init__(
        self,
        api_key: str,
        environment: str = "sandbox",
        client: httpx.AsyncClient | None = None,
        timeout_s: float = 5.0,
    ) -> None:
        super().__init__(client=client, timeout_s=timeout_s)
        self._api_key = api_key
        self._base_url = VIATOR_BASE_URLS.get(environment, VIATOR_BASE_URLS["sandbox"])

    async def search(
        self, query: UnresolvedPlace, location_hint: str, limit: int = DEFAULT_RESULT_LIMIT
    ) -> list[dict[str, Any]]:
        if not self._api_key:
            raise ProviderNotConfiguredError("VIATOR_API_KEY is not set")

        data = await self._request_json(
            "POST",
            f"{self._base_url}/search/freetext",
            json={
                "searchTerm": f"{query.name} {query.city}",
                "searchTypes": [{"searchType": "PRODUCTS", "pagination": {"start": 1, "count": limit}}],
                "currency": "USD",
            },
            headers={
                "exp-api-key": self._api_key,
                "Accept": "application/json;version=2.0",
                "Accept-Language": "en-US",
            },
        )
        products = data.get("products") if isinstance(data, dict) else None
        results = (products or {}).get("results") or []
        return [p for p in results if title_matches(query.name, p.get("title") or "")]
