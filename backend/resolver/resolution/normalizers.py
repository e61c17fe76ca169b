"""Provider record -> ResolvedPlace converters.

Each converter is pure: it scores the candidate name against the query,
keeps the provider's native identifier, and maps price encodings onto a
common 0-4 scale. Missing optional fields become ``None`` (or an empty photo
list) rather than raising.
"""

from collections.abc import Callable
from typing import Any

from backend.resolver.models.common import Geo, PlaceSource
from backend.resolver.models.places import ResolvedPlace, UnresolvedPlace
from backend.resolver.resolution.scoring import calculate_confidence

RawCandidate = dict[str, Any]
Normalizer = Callable[[RawCandidate, UnresolvedPlace], ResolvedPlace]

GOOGLE_PRICE_LEVELS = {
    "PRICE_LEVEL_FREE": 0,
    "PRICE_LEVEL_INEXPENSIVE": 1,
    "PRICE_LEVEL_MODERATE": 2,
    "PRICE_LEVEL_EXPENSIVE": 3,
    "PRICE_LEVEL_VERY_EXPENSIVE": 4,
}

GOOGLE_NEIGHBORHOOD_TYPES = ("neighborhood", "sublocality", "sublocality_level_1")

MAX_VIATOR_PHOTOS = 5


def _dig(data: Any, *keys: str | int) -> Any:
    """Walk nested dicts/lists, returning None at the first missing step."""
    current = data
    for key in keys:
        if isinstance(key, int):
            if not isinstance(current, list) or len(current) <= key:
                return None
        elif not isinstance(current, dict):
            return None
        current = current[key] if isinstance(key, int) else current.get(key)
        if current is None:
            return None
    return current


def _as_float(value: Any) -> float | None:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _as_int(value: Any) -> int | None:
    number = _as_float(value)
    return int(number) if number is not None else None


def _geo(lat: Any, lon: Any) -> Geo:
    lat_f = _as_float(lat)
    lon_f = _as_float(lon)
    if lat_f is None or lon_f is None:
        return Geo()
    return Geo(lat=lat_f, lon=lon_f)


def to_price_level(value: Any) -> int | None:
    """Map a provider price encoding onto the 0-4 scale.

    Accepts Google enum strings, Yelp dollar signs, plain integers and
    Foursquare ``{"tier": n}`` objects.
    """
    if value is None:
        return None
    if isinstance(value, dict):
        return to_price_level(value.get("tier"))
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return max(0, min(4, int(value)))
    if isinstance(value, str):
        if value in GOOGLE_PRICE_LEVELS:
            return GOOGLE_PRICE_LEVELS[value]
        if value and set(value) == {"$"}:
            return min(4, len(value))
        if value.isdigit():
            return max(0, min(4, int(value)))
    return None


def normalize_foursquare(raw: RawCandidate, query: UnresolvedPlace) -> ResolvedPlace:
    """Convert a Foursquare Places search result."""
    name = raw.get("name") or ""
    location = raw.get("location") or {}
    neighborhoods = location.get("neighborhood") or []
    photos = [
        f"{photo['prefix']}original{photo['suffix']}"
        for photo in raw.get("photos") or []
        if isinstance(photo, dict) and photo.get("prefix") and photo.get("suffix")
    ]
    lat = _dig(raw, "geocodes", "main", "latitude")
    lon = _dig(raw, "geocodes", "main", "longitude")
    if lat is None or lon is None:
        lat, lon = raw.get("latitude"), raw.get("longitude")
    closed_bucket = raw.get("closed_bucket")

    return ResolvedPlace(
        name=name,
        address=location.get("formatted_address") or location.get("address") or "",
        neighborhood=(neighborhoods[0] if neighborhoods else location.get("locality")) or "",
        coordinates=_geo(lat, lon),
        rating=_as_float(raw.get("rating")),
        review_count=_as_int(_dig(raw, "stats", "total_ratings")),
        photos=photos,
        confidence=calculate_confidence(query.name, name),
        source=PlaceSource.foursquare,
        source_id=raw.get("fsq_place_id") or raw.get("fsq_id"),
        price_level=to_price_level(raw.get("price")),
        is_open_now=closed_bucket == "LikelyOpen" if closed_bucket else None,
        website=raw.get("website"),
        phone=raw.get("tel"),
    )


def normalize_osm(raw: RawCandidate, query: UnresolvedPlace) -> ResolvedPlace:
    """Convert a Nominatim search result."""
    display_name = raw.get("display_name") or ""
    native_name = _dig(raw, "namedetails", "name") or raw.get("name")
    name = native_name or display_name.split(",")[0].strip()
    address = raw.get("address") or {}
    osm_type = raw.get("osm_type")
    osm_id = raw.get("osm_id")

    return ResolvedPlace(
        name=name,
        address=display_name,
        neighborhood=address.get("suburb") or address.get("neighbourhood") or "",
        coordinates=_geo(raw.get("lat"), raw.get("lon")),
        photos=[],
        confidence=calculate_confidence(query.name, native_name or display_name),
        source=PlaceSource.osm,
        source_id=f"{osm_type}/{osm_id}" if osm_type and osm_id is not None else None,
        website=_dig(raw, "extratags", "website"),
        phone=_dig(raw, "extratags", "phone"),
    )


def normalize_yelp(raw: RawCandidate, query: UnresolvedPlace) -> ResolvedPlace:
    """Convert a Yelp Fusion business."""
    name = raw.get("name") or ""
    location = raw.get("location") or {}
    image_url = raw.get("image_url")

    return ResolvedPlace(
        name=name,
        address=location.get("address1") or (_dig(location, "display_address", 0) or ""),
        neighborhood=location.get("city") or "",
        coordinates=_geo(
            _dig(raw, "coordinates", "latitude"), _dig(raw, "coordinates", "longitude")
        ),
        rating=_as_float(raw.get("rating")),
        review_count=_as_int(raw.get("review_count")),
        photos=[image_url] if image_url else [],
        confidence=calculate_confidence(query.name, name),
        source=PlaceSource.yelp,
        source_id=raw.get("id"),
        price_level=to_price_level(raw.get("price")),
        is_open_now=_dig(raw, "hours", 0, "is_open_now"),
        website=raw.get("url"),
        phone=raw.get("display_phone") or raw.get("phone") or None,
    )


def normalize_viator(raw: RawCandidate, query: UnresolvedPlace) -> ResolvedPlace:
    """Convert a Viator product. Products carry no coordinates."""
    title = raw.get("title") or ""
    photos: list[str] = []
    for image in (raw.get("images") or [])[:MAX_VIATOR_PHOTOS]:
        url = _dig(image, "variants", 0, "url")
        if url:
            photos.append(url)

    return ResolvedPlace(
        name=title,
        address=query.city,
        neighborhood="",
        coordinates=query.coordinates or Geo(),
        rating=_as_float(_dig(raw, "reviews", "combinedAverageRating")),
        review_count=_as_int(_dig(raw, "reviews", "totalReviews")),
        photos=photos,
        confidence=calculate_confidence(query.name, title),
        source=PlaceSource.viator,
        source_id=raw.get("productCode"),
        website=raw.get("productUrl"),
    )


def _google_neighborhood(raw: RawCandidate) -> str:
    for component in raw.get("addressComponents") or []:
        types = component.get("types") or []
        if any(t in types for t in GOOGLE_NEIGHBORHOOD_TYPES):
            return component.get("longText") or ""
    return ""


def normalize_google(raw: RawCandidate, query: UnresolvedPlace) -> ResolvedPlace:
    """Convert a Google Places (v1) text search result."""
    name = _dig(raw, "displayName", "text") or ""
    hours = raw.get("regularOpeningHours") or {}

    return ResolvedPlace(
        name=name,
        address=raw.get("formattedAddress") or "",
        neighborhood=_google_neighborhood(raw),
        coordinates=_geo(_dig(raw, "location", "latitude"), _dig(raw, "location", "longitude")),
        rating=_as_float(raw.get("rating")),
        review_count=_as_int(raw.get("userRatingCount")),
        photos=[],  # photo media needs a separate request per reference
        confidence=calculate_confidence(query.name, name),
        source=PlaceSource.google,
        source_id=raw.get("id"),
        price_level=to_price_level(raw.get("priceLevel")),
        is_open_now=hours.get("openNow"),
        website=raw.get("websiteUri"),
        phone=raw.get("internationalPhoneNumber"),
        opening_hours=hours.get("weekdayDescriptions"),
    )


NORMALIZERS: dict[PlaceSource, Normalizer] = {
    PlaceSource.foursquare: normalize_foursquare,
    PlaceSource.osm: normalize_osm,
    PlaceSource.yelp: normalize_yelp,
    PlaceSource.viator: normalize_viator,
    PlaceSource.google: normalize_google,
}


def normalize(source: PlaceSource, raw: RawCandidate, query: UnresolvedPlace) -> ResolvedPlace:
    """Dispatch to the converter registered for ``source``.

    Raises:
        KeyError: If no converter exists for the source
    """
    return NORMALIZERS[source](raw, query)
