"""Typed settings configuration - single source of truth."""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

OFFLINE_MODE_NAMES = frozenset({"test", "development", "dev", "offline"})
LIVE_MODE_NAMES = frozenset({"live", "production", "prod"})


class ResolverMode(str, Enum):
    """Whether live provider adapters may be called."""

    offline = "offline"
    live = "live"


def parse_resolver_mode(value: str) -> ResolverMode:
    """Map an environment mode name onto a ResolverMode.

    Raises:
        ValueError: If the name is not a known mode
    """
    name = value.strip().lower()
    if name in OFFLINE_MODE_NAMES:
        return ResolverMode.offline
    if name in LIVE_MODE_NAMES:
        return ResolverMode.live
    raise ValueError(f"Unknown PLACE_RESOLVER_MODE: {value!r}")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Mode ("test"/"dev" run offline, "live"/"production" call providers);
    # AI_MODE is read when PLACE_RESOLVER_MODE is unset
    place_resolver_mode: str = Field(
        "test", validation_alias=AliasChoices("place_resolver_mode", "ai_mode")
    )

    # Persistent cache
    resolver_cache_dir: str = "./place-resolver-cache"
    cache_flush_delay_ms: int = 100

    # Ephemeral cache TTL (hours)
    memory_cache_ttl_hours: int = 24

    # Batch resolution
    batch_size: int = 5
    batch_delay_ms: int = 200

    # Offline reference data (defaults to the bundled fixtures)
    local_poi_dir: str | None = None

    # Provider adapters
    provider_timeout_ms: int = 5000
    foursquare_api_key: str = ""
    yelp_api_key: str = ""
    google_places_api_key: str = ""
    viator_api_key: str = ""
    viator_env: str = "sandbox"
    nominatim_user_agent: str = "place-resolver/0.1 (contact: example@example.com)"

    @property
    def resolver_mode(self) -> ResolverMode:
        """Parsed resolver mode."""
        return parse_resolver_mode(self.place_resolver_mode)

    @property
    def cache_path(self) -> Path:
        """Directory holding the persistent index."""
        return Path(self.resolver_cache_dir)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
