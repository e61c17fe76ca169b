"""OpenStreetMap adapter using Nominatim (keyless, 1 req/s usage policy)."""

from typing import Any, ClassVar

import httpx

from backend.resolver.adapters.base import DEFAULT_RESULT_LIMIT, HTTPProvider, ProviderHTTPError
from backend.resolver.models.common import PlaceSource
from backend.resolver.models.places import UnresolvedPlace

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"


class NominatimProvider(HTTPProvider):
    """Free-text search against Nominatim."""

    tag: ClassVar[PlaceSource] = PlaceSource.osm

    def __init__(
        self,
        user_agent: str,
        client: httpx.AsyncClient | None = None,
        timeout_s: float = 5.0,
        base_url: str = NOMINATIM_SEARCH_URL,
    ) -> None:
        super().__init__(client=client, timeout_s=timeout_s)
        self._user_agent = user_agent
        self._base_url = base_url

    async def search(
        self, query: UnresolvedPlace, location_hint: str, limit: int = DEFAULT_RESULT_LIMIT
    ) -> list[dict[str, Any]]:
        # Docs: https://nominatim.org/release-docs/latest/api/Search/
        params: dict[str, str | int] = {
            "q": f"{query.name}, {location_hint}",
            "format": "jsonv2",
            "addressdetails": 1,
            "extratags": 1,
            "namedetails": 1,
            "limit": limit,
        }
        data = await self._request_json(
            "GET", self._base_url, params=params, headers={"User-Agent": self._user_agent}
        )
        if not isinstance(data, list):
            raise ProviderHTTPError("osm returned an unexpected payload")
        return data
