"""Builds the live provider set from settings."""

import httpx

from backend.resolver.adapters.base import PlaceProvider
from backend.resolver.adapters.foursquare import FoursquareProvider
from backend.resolver.adapters.google import GooglePlacesProvider
from backend.resolver.adapters.nominatim import NominatimProvider
from backend.resolver.adapters.viator import ViatorProvider
from backend.resolver.adapters.yelp import YelpProvider
from backend.resolver.config import Settings
from backend.resolver.models.common import PlaceSource


def build_default_providers(
    settings: Settings, client: httpx.AsyncClient | None = None
) -> dict[PlaceSource, PlaceProvider]:
    """One adapter per live vendor, sharing ``client`` when given.

    Adapters without credentials are still registered; they raise
    ``ProviderNotConfiguredError`` when searched, which the resolver logs and
    skips like any other provider failure.
    """
    timeout_s = settings.provider_timeout_ms / 1000
    providers: list[PlaceProvider] = [
        FoursquareProvider(settings.foursquare_api_key, client=client, timeout_s=timeout_s),
        NominatimProvider(settings.nominatim_user_agent, client=client, timeout_s=timeout_s),
        YelpProvider(settings.yelp_api_key, client=client, timeout_s=timeout_s),
        ViatorProvider(
            settings.viator_api_key,
            environment=settings.viator_env,
            client=client,
            timeout_s=timeout_s,
        ),
        GooglePlacesProvider(settings.google_places_api_key, client=client, timeout_s=timeout_s),
    ]
    return {provider.tag: provider for provider in providers}
