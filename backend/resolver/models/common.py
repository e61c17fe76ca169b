"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, Field


class Geo(BaseModel):
    """Geographic coordinates (WGS84). Zero values mean unknown."""

    lat: float = Field(0.0, ge=-90, le=90)
    lon: float = Field(0.0, ge=-180, le=180)


class PlaceSource(str, Enum):
    """Origin of a resolved place."""

    foursquare = "foursquare"
    osm = "osm"
    yelp = "yelp"
    viator = "viator"
    google = "google"
    local_reference = "local_reference"
    synthetic = "synthetic"


# Sources backed by a live, network-calling adapter
LIVE_PROVIDERS = frozenset(
    {
        PlaceSource.foursquare,
        PlaceSource.osm,
        PlaceSource.yelp,
        PlaceSource.viator,
        PlaceSource.google,
    }
)

# Providers that bill per request
EXPENSIVE_PROVIDERS = frozenset({PlaceSource.google})
