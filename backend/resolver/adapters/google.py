"""Google Places (New) text search adapter. Billed per request."""

from typing import Any, ClassVar

import httpx

from backend.resolver.adapters.base import (
    DEFAULT_RESULT_LIMIT,
    HTTPProvider,
    ProviderNotConfiguredError,
)
from backend.resolver.models.common import PlaceSource
from backend.resolver.models.places import UnresolvedPlace

GOOGLE_TEXT_SEARCH_URL = "https://places.googleapis.com/v1/places:searchText"

GOOGLE_FIELD_MASK = ",".join(
    [
        "places.id",
        "places.displayName",
        "places.formattedAddress",
        "places.location",
        "places.rating",
        "places.userRatingCount",
        "places.priceLevel",
        "places.websiteUri",
        "places.internationalPhoneNumber",
        "places.regularOpeningHours",
        "places.addressComponents",
    ]
)


class GooglePlacesProvider(HTTPProvider):
    """``places:searchText`` with a restricted field mask."""

    tag: ClassVar[PlaceSource] = PlaceSource.google

    def __init__(
        self,
        api_key: str,
        client: httpx.AsyncClient | None = None,
        timeout_s: float = 5.0,
        base_url: str = GOOGLE_TEXT_SEARCH_URL,
    ) -> None:
        super().__init__(client=client, timeout_s=timeout_s)
        self._api_key = api_key
        self._base_url = base_url

    async def search(
        self, query: UnresolvedPlace, location_hint: str, limit: int = DEFAULT_RESULT_LIMIT
    ) -> list[dict[str, Any]]:
        if not self._api_key:
            raise ProviderNotConfiguredError("GOOGLE_PLACES_API_KEY is not set")

        data = await self._request_json(
            "POST",
            self._base_url,
            json={"textQuery": f"{query.name} {location_hint}", "maxResultCount": limit},
            headers={
                "X-Goog-Api-Key": self._api_key,
                "X-Goog-FieldMask": GOOGLE_FIELD_MASK,
            },
        )
        return list(data.get("places") or []) if isinstance(data, dict) else []
