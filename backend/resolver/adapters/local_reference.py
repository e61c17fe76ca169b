"""Offline POI lookup backed by per-city JSON files.

Each file is named after the city slug (``kyoto.json``) and holds a list of
POI records. Files are read lazily, once per city, off the event loop.
"""

import asyncio
import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel
from rapidfuzz import fuzz, process, utils

from backend.resolver.models.common import Geo, PlaceSource
from backend.resolver.models.places import ResolvedPlace
from backend.resolver.resolution.provider_order import normalize_category

logger = logging.getLogger(__name__)

DEFAULT_POI_DIR = Path(__file__).resolve().parent.parent / "fixtures" / "poi"
LOCAL_REFERENCE_CONFIDENCE = 0.9


class LocalPOI(BaseModel):
    """Reference record for one point of interest."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    aliases: list[str] = Field(default_factory=list)
    category: str | None = None
    address: str | None = None
    neighborhood: str | None = None
    city: str
    country: str
    coordinates: Geo
    rating: float | None = None
    review_count: int | None = None
    photos: list[str] = Field(default_factory=list)
    website: str | None = None
    phone: str | None = None

    def to_resolved(self) -> ResolvedPlace:
        """Resolved record with local-reference provenance."""
        address = self.address or f"{self.neighborhood or ''} {self.city}, {self.country}".strip()
        return ResolvedPlace(
            name=self.name,
            address=address,
            neighborhood=self.neighborhood or "",
            coordinates=self.coordinates,
            rating=self.rating,
            review_count=self.review_count,
            photos=list(self.photos),
            confidence=LOCAL_REFERENCE_CONFIDENCE,
            source=PlaceSource.local_reference,
            source_id=self.id,
            website=self.website,
            phone=self.phone,
        )


def city_slug(city: str) -> str:
    return "-".join(city.strip().lower().split())


class LocalReferenceData:
    """Exact and fuzzy name lookup scoped to a city."""

    def __init__(self, data_dir: str | Path | None = None) -> None:
        self._data_dir = Path(data_dir) if data_dir else DEFAULT_POI_DIR
        self._by_city: dict[str, list[LocalPOI]] = {}

    async def has_data(self, city: str) -> bool:
        """True when a non-empty POI file exists for ``city``."""
        return bool(await self._load_city(city))

    async def find_exact(self, name: str, city: str) -> LocalPOI | None:
        """Case-insensitive match on name or alias."""
        needle = name.strip().casefold()
        for poi in await self._load_city(city):
            if poi.name.casefold() == needle or any(a.casefold() == needle for a in poi.aliases):
                return poi
        return None

    async def find_fuzzy(
        self,
        name: str,
        city: str,
        max_results: int = 5,
        min_similarity: float = 0.6,
        category: str | None = None,
    ) -> list[LocalPOI]:
        """Best fuzzy matches above ``min_similarity`` (0-1).

        Scores use token-set similarity over names and aliases. Among equal
        scores, POIs whose category matches ``category`` rank first.
        """
        pois = await self._load_city(city)
        if not pois or max_results <= 0:
            return []

        choices: list[str] = []
        owners: list[int] = []
        for i, poi in enumerate(pois):
            for label in [poi.name, *poi.aliases]:
                choices.append(label)
                owners.append(i)

        matches = process.extract(
            name,
            choices,
            scorer=fuzz.token_set_ratio,
            processor=utils.default_process,
            limit=None,
            score_cutoff=min_similarity * 100,
        )

        best: dict[int, float] = {}
        for _label, score, choice_index in matches:
            owner = owners[choice_index]
            best[owner] = max(best.get(owner, 0.0), score)

        wanted = normalize_category(category) if category else None
        ranked = sorted(
            best.items(),
            key=lambda item: (
                -item[1],
                0 if wanted and normalize_category(pois[item[0]].category) == wanted else 1,
                item[0],
            ),
        )
        return [pois[i] for i, _score in ranked[:max_results]]

    async def _load_city(self, city: str) -> list[LocalPOI]:
        slug = city_slug(city)
        if slug not in self._by_city:
            self._by_city[slug] = await asyncio.to_thread(self._read_city_file, slug)
        return self._by_city[slug]

    def _read_city_file(self, slug: str) -> list[LocalPOI]:
        path = self._data_dir / f"{slug}.json"
        if not path.is_file():
            return []
        try:
            records = json.loads(path.read_text(encoding="utf-8"))
            return [LocalPOI.model_validate(record) for record in records]
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Ignoring unreadable POI file %s: %s", path, e)
            return []
