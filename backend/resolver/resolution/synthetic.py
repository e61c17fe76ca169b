"""Deterministic synthetic places for offline mode.

Values are derived from a name hash rather than an RNG so that snapshot
tests stay stable: the seed is the sum of the name's UTF-16 code units, and
rating / review count are picked inside a category range from that seed.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from backend.resolver.models.common import Geo, PlaceSource
from backend.resolver.models.places import ResolvedPlace, UnresolvedPlace
from backend.resolver.resolution.provider_order import DEFAULT_CATEGORY, normalize_category

SYNTHETIC_CONFIDENCE = 0.7


@dataclass(frozen=True)
class RatingRange:
    """Plausible rating and review-count bounds for a category."""

    min_rating: float
    max_rating: float
    min_reviews: int
    max_reviews: int


CATEGORY_RATINGS: dict[str, RatingRange] = {
    "restaurant": RatingRange(3.8, 4.8, 50, 500),
    "temple": RatingRange(4.2, 4.9, 100, 2000),
    "shrine": RatingRange(4.0, 4.8, 80, 1500),
    "museum": RatingRange(4.0, 4.7, 200, 3000),
    "park": RatingRange(4.1, 4.6, 100, 800),
    "market": RatingRange(4.0, 4.5, 150, 1200),
    "cafe": RatingRange(4.0, 4.6, 30, 300),
    "bar": RatingRange(3.9, 4.5, 40, 400),
    "tour": RatingRange(4.3, 4.9, 50, 500),
    DEFAULT_CATEGORY: RatingRange(4.0, 4.6, 50, 500),
}

_UNSPLASH = "https://images.unsplash.com/photo-{}?w=800&h=600&fit=crop"

CATEGORY_PHOTOS: dict[str, list[str]] = {
    "restaurant": [_UNSPLASH.format("1517248135467-4c7edcad34c4"), _UNSPLASH.format("1552566626-52f8b828add9")],
    "temple": [_UNSPLASH.format("1545569341-9eb8b30979d9"), _UNSPLASH.format("1493976040374-85c8e12f0c0e")],
    "shrine": [_UNSPLASH.format("1478436127897-769e1b3f0f36"), _UNSPLASH.format("1528360983277-13d401cdc186")],
    "museum": [_UNSPLASH.format("1554907984-15263bfd63bd"), _UNSPLASH.format("1566127444979-b3d2b654e3d7")],
    "park": [_UNSPLASH.format("1519331379826-f10be5486c6f"), _UNSPLASH.format("1585320806297-9794b3e4eeae")],
    "market": [_UNSPLASH.format("1555529669-e69e7aa0ba9a"), _UNSPLASH.format("1534723452862-4c874018d66d")],
    "cafe": [_UNSPLASH.format("1501339847302-ac426a4a7cbb"), _UNSPLASH.format("1495474472287-4d71bcdd2085")],
    "bar": [_UNSPLASH.format("1572116469696-31de0f17cc34"), _UNSPLASH.format("1514933651103-005eec06c04b")],
    "tour": [_UNSPLASH.format("1469854523086-cc02fe5d8800"), _UNSPLASH.format("1530789253388-582c481c54b0")],
    "landmark": [_UNSPLASH.format("1480796927426-f609979314bd"), _UNSPLASH.format("1493976040374-85c8e12f0c0e")],
    "shopping": [_UNSPLASH.format("1441986300917-64674bd600d8"), _UNSPLASH.format("1481437156560-3205f6a55735")],
    "nightlife": [_UNSPLASH.format("1516450360452-9312f5e86fc7"), _UNSPLASH.format("1566417713940-fe7c737a9ef2")],
    DEFAULT_CATEGORY: [_UNSPLASH.format("1488646953014-85cb44e25828"), _UNSPLASH.format("1476514525535-07fb3b4ae5f1")],
}


def name_seed(name: str) -> int:
    """Sum of UTF-16 code units of ``name``."""
    encoded = name.encode("utf-16-le")
    return sum(int.from_bytes(encoded[i : i + 2], "little") for i in range(0, len(encoded), 2))


def _round_one_decimal(value: float) -> float:
    # Half-up on the exact binary value, e.g. 4.25 -> 4.3
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def synthetic_rating(seed: int, bounds: RatingRange) -> float:
    """Rating inside the category bounds, one decimal place."""
    span = bounds.max_rating - bounds.min_rating
    return _round_one_decimal(bounds.min_rating + (seed % 10) / 10 * span)


def synthetic_review_count(seed: int, bounds: RatingRange) -> int:
    """Review count inside the category bounds."""
    span = bounds.max_reviews - bounds.min_reviews
    return math.floor(bounds.min_reviews + (seed % 100) / 100 * span)


def synthetic_address(place: UnresolvedPlace) -> str:
    return f"{place.neighborhood or ''} {place.city}, {place.country}".strip()


def generate_synthetic_place(place: UnresolvedPlace) -> ResolvedPlace:
    """Build a plausible, fully deterministic ResolvedPlace for ``place``."""
    category = normalize_category(place.category)
    bounds = CATEGORY_RATINGS.get(category, CATEGORY_RATINGS[DEFAULT_CATEGORY])
    photos = CATEGORY_PHOTOS.get(category, CATEGORY_PHOTOS[DEFAULT_CATEGORY])
    seed = name_seed(place.name)

    return ResolvedPlace(
        name=place.name,
        address=synthetic_address(place),
        neighborhood=place.neighborhood or "",
        coordinates=place.coordinates or Geo(),
        rating=synthetic_rating(seed, bounds),
        review_count=synthetic_review_count(seed, bounds),
        photos=list(photos),
        confidence=SYNTHETIC_CONFIDENCE,
        source=PlaceSource.synthetic,
    )
