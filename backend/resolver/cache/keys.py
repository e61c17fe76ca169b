"""Cache key derivation shared by both cache tiers."""

from backend.resolver.models.places import UnresolvedPlace


def make_cache_key(place: UnresolvedPlace) -> str:
    """Case-folded ``name|city|country|category`` key."""
    return f"{place.name}|{place.city}|{place.country}|{place.category or ''}".lower()
