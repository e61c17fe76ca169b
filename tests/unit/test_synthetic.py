"""Tests for deterministic synthetic places."""

from backend.resolver.models.common import Geo, PlaceSource
from backend.resolver.models.places import UnresolvedPlace
from backend.resolver.resolution.synthetic import (
    CATEGORY_PHOTOS,
    CATEGORY_RATINGS,
    SYNTHETIC_CONFIDENCE,
    RatingRange,
    generate_synthetic_place,
    name_seed,
    synthetic_rating,
    synthetic_review_count,
)


def test_name_seed_sums_utf16_code_units() -> None:
    assert name_seed("Senso-ji") == 776
    assert name_seed("") == 0
    # Astral characters count as a surrogate pair
    assert name_seed("😀") == 0xD83D + 0xDE00


def test_rating_rounds_half_up() -> None:
    bounds = RatingRange(4.0, 4.5, 0, 100)
    assert synthetic_rating(5, bounds) == 4.3


def test_review_count_stays_in_bounds() -> None:
    bounds = CATEGORY_RATINGS["museum"]
    for seed in range(0, 500, 7):
        count = synthetic_review_count(seed, bounds)
        assert bounds.min_reviews <= count <= bounds.max_reviews


def test_senso_ji_scenario() -> None:
    place = UnresolvedPlace(name="Senso-ji", category="temple", city="Tokyo", country="Japan")

    resolved = generate_synthetic_place(place)

    temple = CATEGORY_RATINGS["temple"]
    assert resolved.source == PlaceSource.synthetic
    assert resolved.confidence == SYNTHETIC_CONFIDENCE == 0.7
    assert resolved.photos == CATEGORY_PHOTOS["temple"]
    assert resolved.rating is not None
    assert temple.min_rating <= resolved.rating <= temple.max_rating
    assert resolved.rating == 4.6
    assert resolved.review_count is not None
    assert temple.min_reviews <= resolved.review_count <= temple.max_reviews
    assert resolved.address == "Tokyo, Japan"
    assert resolved.coordinates == Geo()


def test_generation_is_deterministic() -> None:
    place = UnresolvedPlace(
        name="Tsukiji Outer Market",
        category="market",
        neighborhood="Tsukiji",
        city="Tokyo",
        country="Japan",
        coordinates=Geo(lat=35.6655, lon=139.7707),
    )

    first = generate_synthetic_place(place)
    second = generate_synthetic_place(place)

    assert first == second
    assert first.address == "Tsukiji Tokyo, Japan"
    assert first.neighborhood == "Tsukiji"
    assert first.coordinates == Geo(lat=35.6655, lon=139.7707)


def test_unknown_category_uses_default_tables() -> None:
    place = UnresolvedPlace(name="Mystery Spot", category="Onsen", city="Hakone", country="Japan")

    resolved = generate_synthetic_place(place)

    default = CATEGORY_RATINGS["default"]
    assert resolved.photos == CATEGORY_PHOTOS["default"]
    assert resolved.rating is not None
    assert default.min_rating <= resolved.rating <= default.max_rating
