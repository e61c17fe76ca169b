"""Foursquare Places search adapter."""

from typing import Any, ClassVar

import httpx

from backend.resolver.adapters.base import (
    DEFAULT_RESULT_LIMIT,
    HTTPProvider,
    ProviderNotConfiguredError,
)
from backend.resolver.models.common import PlaceSource
from backend.resolver.models.places import UnresolvedPlace

FOURSQUARE_SEARCH_URL = "https://places-api.foursquare.com/places/search"
FOURSQUARE_API_VERSION = "2025-06-17"


class FoursquareProvider(HTTPProvider):
    """Name search scoped with ``near``."""

    tag: ClassVar[PlaceSource] = PlaceSource.foursquare

    def __init__(
        self,
        api_key: str,
        client: httpx.AsyncClient | None = None,
        timeout_s: float = 5.0,
        base_url: str = FOURSQUARE_SEARCH_URL,
    ) -> None:
        super().__init__(client=client, timeout_s=timeout_s)
        self._api_key = api_key
        self._base_url = base_url

    async def search(
        self, query: UnresolvedPlace, location_hint: str, limit: int = DEFAULT_RESULT_LIMIT
    ) -> list[dict[str, Any]]:
        if not self._api_key:
            raise ProviderNotConfiguredError("FOURSQUARE_API_KEY is not set")

        data = await self._request_json(
            "GET",
            self._base_url,
            params={"query": query.name, "near": location_hint, "limit": limit},
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Accept": "application/json",
                "X-Places-Api-Version": FOURSQUARE_API_VERSION,
            },
        )
        return list(data.get("results") or []) if isinstance(data, dict) else []
