"""Yelp Fusion business search adapter."""

from typing import Any, ClassVar

import httpx

from backend.resolver.adapters.base import (
    DEFAULT_RESULT_LIMIT,
    HTTPProvider,
    ProviderNotConfiguredError,
)
from backend.resolver.models.common import PlaceSource
from backend.resolver.models.places import UnresolvedPlace

YELP_SEARCH_URL = "https://api.yelp.com/v3/businesses/search"


class YelpProvider(HTTPProvider):
    """Term search within a location string."""

    tag: ClassVar[PlaceSource] = PlaceSource.yelp

    def __init__(
        self,
        api_key: str,
        client: httpx.AsyncClient | None = None,
        timeout_s: float = 5.0,
        base_url: str = YELP_SEARCH_URL,
    ) -> None:
        super().__init__(client=client, timeout_s=timeout_s)
        self._api_key = api_key
        self._base_url = base_url

    async def search(
        self, query: UnresolvedPlace, location_hint: str, limit: int = DEFAULT_RESULT_LIMIT
    ) -> list[dict[str, Any]]:
        if not self._api_key:
            raise ProviderNotConfiguredError("YELP_API_KEY is not set")

        data = await self._request_json(
            "GET",
            self._base_url,
            params={"term": query.name, "location": location_hint, "limit": limit},
            headers={"Authorization": f"Bearer {self._api_key}"},
        )
        businesses = list(data.get("businesses") or []) if isinstance(data, dict) else []

        # Yelp ranks by relevance to the term; pull a containing-name match forward
        needle = query.name.lower()
        for i, business in enumerate(businesses):
            if needle in (business.get("name") or "").lower():
                if i:
                    businesses.insert(0, businesses.pop(i))
                break
        return businesses
