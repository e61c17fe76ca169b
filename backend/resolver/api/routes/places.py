"""Place resolution endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from backend.resolver.api.dependencies import get_resolver
from backend.resolver.models.itinerary import ItineraryPlaceResolution
from backend.resolver.models.places import PlaceResolutionResult
from backend.resolver.models.requests import (
    ResolveItineraryRequest,
    ResolvePlaceRequest,
    ResolvePlacesRequest,
)
from backend.resolver.orchestration.itinerary import resolve_itinerary_places
from backend.resolver.orchestration.resolver import PlaceResolver

router = APIRouter()
logger = logging.getLogger(__name__)

ResolverDep = Annotated[PlaceResolver, Depends(get_resolver)]


@router.post("/places/resolve", response_model=PlaceResolutionResult)
async def resolve_place(request: ResolvePlaceRequest, resolver: ResolverDep) -> PlaceResolutionResult:
    """Resolve a single place mention.

    Returns 200 even when nothing matched; check ``resolved`` and ``error``.
    """
    return await resolver.resolve_place(request.place, request.options)


@router.post("/places/resolve-batch", response_model=list[PlaceResolutionResult])
async def resolve_places(
    request: ResolvePlacesRequest, resolver: ResolverDep
) -> list[PlaceResolutionResult]:
    """Resolve many places; results follow request order."""
    logger.info("Batch resolution of %d places", len(request.places))
    return await resolver.resolve_places(request.places, request.options)


@router.post("/itineraries/resolve-places", response_model=list[ItineraryPlaceResolution])
async def resolve_itinerary(
    request: ResolveItineraryRequest, resolver: ResolverDep
) -> list[ItineraryPlaceResolution]:
    """Resolve every slot option in an itinerary."""
    return await resolve_itinerary_places(resolver, request.itinerary, request.options)
