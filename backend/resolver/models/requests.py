"""Request bodies for the HTTP API."""

from pydantic import BaseModel, Field

from backend.resolver.models.itinerary import StructuredItinerary
from backend.resolver.models.places import ResolutionOptions, UnresolvedPlace


class ResolvePlaceRequest(BaseModel):
    """POST /places/resolve body."""

    place: UnresolvedPlace
    options: ResolutionOptions = Field(default_factory=ResolutionOptions)


class ResolvePlacesRequest(BaseModel):
    """POST /places/resolve-batch body."""

    places: list[UnresolvedPlace] = Field(..., max_length=100)
    options: ResolutionOptions = Field(default_factory=ResolutionOptions)


class ResolveItineraryRequest(BaseModel):
    """POST /itineraries/resolve-places body."""

    itinerary: StructuredItinerary
    options: ResolutionOptions = Field(default_factory=ResolutionOptions)
