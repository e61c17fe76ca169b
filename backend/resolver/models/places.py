"""Place resolution models - queries, resolved records and results."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.resolver.models.common import LIVE_PROVIDERS, Geo, PlaceSource


class UnresolvedPlace(BaseModel):
    """AI-generated place mention awaiting verification."""

    model_config = ConfigDict(frozen=True)

    name: str
    category: str | None = None  # "restaurant", "temple", "museum", "tour", ...
    neighborhood: str | None = None
    city: str
    country: str
    coordinates: Geo | None = None  # hint from the AI


class ResolvedPlace(BaseModel):
    """Verified place record in the canonical shape shared by all providers."""

    name: str
    address: str = ""
    neighborhood: str = ""
    coordinates: Geo = Field(default_factory=Geo)
    rating: float | None = None
    review_count: int | None = None
    photos: list[str] = Field(default_factory=list)
    confidence: float = Field(..., ge=0.0, le=1.0)
    source: PlaceSource
    source_id: str | None = None
    price_level: int | None = Field(None, ge=0, le=4)
    is_open_now: bool | None = None
    website: str | None = None
    phone: str | None = None
    opening_hours: list[str] | None = None


class PlaceResolutionResult(BaseModel):
    """Outcome of one resolution attempt."""

    original: UnresolvedPlace
    resolved: ResolvedPlace | None = None
    alternatives: list[ResolvedPlace] = Field(default_factory=list)
    error: str | None = None
    provider: str = "none"
    duration_ms: float = 0.0
    cached: bool = False


DEFAULT_PROVIDERS: list[PlaceSource] = [
    PlaceSource.foursquare,
    PlaceSource.osm,
    PlaceSource.yelp,
    PlaceSource.google,
]


class ResolutionOptions(BaseModel):
    """Caller controls for a resolution."""

    providers: list[PlaceSource] = Field(default_factory=lambda: list(DEFAULT_PROVIDERS))
    max_alternatives: int = Field(2, ge=0)
    min_confidence: float = Field(0.5, ge=0.0, le=1.0)
    skip_expensive_providers: bool = False
    force_refresh: bool = False

    @field_validator("providers")
    @classmethod
    def providers_must_be_live(cls, value: list[PlaceSource]) -> list[PlaceSource]:
        """Only live adapters can appear in the allow-list."""
        offline_only = [p.value for p in value if p not in LIVE_PROVIDERS]
        if offline_only:
            raise ValueError(f"Not a live provider: {', '.join(offline_only)}")
        return value
