"""Test doubles and raw provider records."""

from typing import Any

from backend.resolver.models.common import PlaceSource
from backend.resolver.models.places import UnresolvedPlace


class FakeProvider:
    """In-memory provider returning canned raw records (or raising)."""

    def __init__(
        self,
        tag: PlaceSource,
        records: list[dict[str, Any]] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.tag = tag
        self.records = records or []
        self.error = error
        self.calls: list[tuple[str, str, int]] = []
        self.closed = False

    async def search(
        self, query: UnresolvedPlace, location_hint: str, limit: int = 5
    ) -> list[dict[str, Any]]:
        self.calls.append((query.name, location_hint, limit))
        if self.error is not None:
            raise self.error
        return list(self.records)

    async def aclose(self) -> None:
        self.closed = True


def osm_record(name: str, osm_id: int, lat: float = 35.0, lon: float = 135.0) -> dict[str, Any]:
    """Minimal Nominatim jsonv2 record."""
    return {
        "osm_type": "way",
        "osm_id": osm_id,
        "lat": str(lat),
        "lon": str(lon),
        "display_name": f"{name}, Kyoto, Japan",
        "namedetails": {"name": name},
        "address": {"suburb": "Higashiyama"},
    }


def google_record(name: str, place_id: str) -> dict[str, Any]:
    """Minimal Google Places (v1) record."""
    return {
        "id": place_id,
        "displayName": {"text": name},
        "formattedAddress": f"{name}, Tokyo, Japan",
        "location": {"latitude": 35.6586, "longitude": 139.7454},
        "rating": 4.5,
        "userRatingCount": 1200,
        "priceLevel": "PRICE_LEVEL_MODERATE",
    }


def yelp_record(name: str, business_id: str) -> dict[str, Any]:
    """Minimal Yelp Fusion business."""
    return {
        "id": business_id,
        "name": name,
        "rating": 4.0,
        "review_count": 321,
        "price": "$$",
        "location": {"address1": "1-2-3 Shinjuku", "city": "Shinjuku"},
        "coordinates": {"latitude": 35.69, "longitude": 139.70},
    }
