"""Category -> provider ordering, expressed as data."""

from collections.abc import Iterable

from backend.resolver.models.common import EXPENSIVE_PROVIDERS, PlaceSource

DEFAULT_CATEGORY = "default"

# Yelp first for food since it carries reviews; Viator for bookable tours;
# OSM for landmarks; Google is the paid fallback everywhere.
CATEGORY_PROVIDER_MAP: dict[str, list[PlaceSource]] = {
    "restaurant": [PlaceSource.yelp, PlaceSource.google],
    "cafe": [PlaceSource.yelp, PlaceSource.google],
    "bar": [PlaceSource.yelp, PlaceSource.google],
    "food": [PlaceSource.yelp, PlaceSource.google],
    "tour": [PlaceSource.viator, PlaceSource.google],
    "activity": [PlaceSource.viator, PlaceSource.google],
    "experience": [PlaceSource.viator, PlaceSource.google],
    "temple": [PlaceSource.osm, PlaceSource.google],
    "shrine": [PlaceSource.osm, PlaceSource.google],
    "museum": [PlaceSource.osm, PlaceSource.google],
    "park": [PlaceSource.osm, PlaceSource.google],
    "landmark": [PlaceSource.osm, PlaceSource.google],
    "hotel": [PlaceSource.google],
    "shopping": [PlaceSource.yelp, PlaceSource.google],
    DEFAULT_CATEGORY: [PlaceSource.osm, PlaceSource.google],
}


def normalize_category(category: str | None) -> str:
    """Lowercase category name, or "default" when absent."""
    return (category or "").strip().lower() or DEFAULT_CATEGORY


def providers_for(
    category: str | None,
    allowed: Iterable[PlaceSource],
    skip_expensive: bool = False,
) -> list[PlaceSource]:
    """Ordered providers to try for a category.

    Args:
        category: Place category (unknown categories use the default ordering)
        allowed: Caller allow-list
        skip_expensive: Drop providers that bill per request

    Returns:
        Category ordering filtered by the allow-list and cost flag
    """
    ordering = CATEGORY_PROVIDER_MAP.get(
        normalize_category(category), CATEGORY_PROVIDER_MAP[DEFAULT_CATEGORY]
    )
    allowed_set = set(allowed)
    providers = [p for p in ordering if p in allowed_set]
    if skip_expensive:
        providers = [p for p in providers if p not in EXPENSIVE_PROVIDERS]
    return providers
