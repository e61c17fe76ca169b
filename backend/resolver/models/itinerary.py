"""Itinerary shapes consumed by the itinerary-level adapter."""

from pydantic import BaseModel, Field

from backend.resolver.models.places import PlaceResolutionResult


class ActivityPlace(BaseModel):
    """Location details the AI attached to an activity."""

    neighborhood: str | None = None


class Activity(BaseModel):
    """Activity suggested for a slot option."""

    name: str
    category: str
    place: ActivityPlace | None = None


class SlotOption(BaseModel):
    """One candidate option within a time slot."""

    id: str
    activity: Activity


class Slot(BaseModel):
    """Time slot holding alternative options."""

    slot_id: str
    options: list[SlotOption] = Field(default_factory=list)


class DayPlan(BaseModel):
    """Single itinerary day in one city."""

    day_number: int
    city: str
    slots: list[Slot] = Field(default_factory=list)


class StructuredItinerary(BaseModel):
    """Days -> slots -> options structure produced by the planner."""

    destination: str
    country: str | None = None
    days: list[DayPlan] = Field(default_factory=list)


class ItineraryPlaceResolution(BaseModel):
    """Resolution result tied back to its itinerary position."""

    day_number: int
    slot_id: str
    option_id: str
    resolution: PlaceResolutionResult
