"""Itinerary-level adapter: days -> slots -> options to resolver queries."""

from backend.resolver.models.itinerary import ItineraryPlaceResolution, StructuredItinerary
from backend.resolver.models.places import ResolutionOptions, UnresolvedPlace
from backend.resolver.orchestration.resolver import PlaceResolver


def flatten_itinerary(
    itinerary: StructuredItinerary,
) -> list[tuple[tuple[int, str, str], UnresolvedPlace]]:
    """Every slot option as ``((day_number, slot_id, option_id), query)``."""
    country = itinerary.country or itinerary.destination
    flattened: list[tuple[tuple[int, str, str], UnresolvedPlace]] = []
    for day in itinerary.days:
        for slot in day.slots:
            for option in slot.options:
                activity = option.activity
                query = UnresolvedPlace(
                    name=activity.name,
                    category=activity.category,
                    neighborhood=activity.place.neighborhood if activity.place else None,
                    city=day.city,
                    country=country,
                )
                flattened.append(((day.day_number, slot.slot_id, option.id), query))
    return flattened


async def resolve_itinerary_places(
    resolver: PlaceResolver,
    itinerary: StructuredItinerary,
    options: ResolutionOptions | None = None,
) -> list[ItineraryPlaceResolution]:
    """Resolve every activity in ``itinerary``.

    Results come back in itinerary order. An option whose resolution has
    ``resolved=None`` keeps its original AI-suggested details.
    """
    flattened = flatten_itinerary(itinerary)
    results = await resolver.resolve_places([query for _, query in flattened], options)
    return [
        ItineraryPlaceResolution(
            day_number=day_number,
            slot_id=slot_id,
            option_id=option_id,
            resolution=result,
        )
        for ((day_number, slot_id, option_id), _), result in zip(flattened, results, strict=True)
    ]
