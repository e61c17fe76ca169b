"""Models package - re-exports for convenience."""

from backend.resolver.models.cache import CacheEntry, CacheIndex
from backend.resolver.models.common import (
    EXPENSIVE_PROVIDERS,
    LIVE_PROVIDERS,
    Geo,
    PlaceSource,
)
from backend.resolver.models.itinerary import (
    Activity,
    ActivityPlace,
    DayPlan,
    ItineraryPlaceResolution,
    Slot,
    SlotOption,
    StructuredItinerary,
)
from backend.resolver.models.places import (
    DEFAULT_PROVIDERS,
    PlaceResolutionResult,
    ResolutionOptions,
    ResolvedPlace,
    UnresolvedPlace,
)
from backend.resolver.models.requests import (
    ResolveItineraryRequest,
    ResolvePlaceRequest,
    ResolvePlacesRequest,
)

__all__ = [
    # Common
    "Geo",
    "PlaceSource",
    "LIVE_PROVIDERS",
    "EXPENSIVE_PROVIDERS",
    # Places
    "UnresolvedPlace",
    "ResolvedPlace",
    "PlaceResolutionResult",
    "ResolutionOptions",
    "DEFAULT_PROVIDERS",
    # Cache
    "CacheEntry",
    "CacheIndex",
    # Itinerary
    "StructuredItinerary",
    "DayPlan",
    "Slot",
    "SlotOption",
    "Activity",
    "ActivityPlace",
    "ItineraryPlaceResolution",
    # Requests
    "ResolvePlaceRequest",
    "ResolvePlacesRequest",
    "ResolveItineraryRequest",
]
