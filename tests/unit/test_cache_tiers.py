"""Tests for cache keys and the ephemeral (in-process) cache tier."""

from backend.resolver.cache.ephemeral import EphemeralCache
from backend.resolver.cache.keys import make_cache_key
from backend.resolver.models.places import PlaceResolutionResult, UnresolvedPlace


def _result(name: str) -> PlaceResolutionResult:
    return PlaceResolutionResult(
        original=UnresolvedPlace(name=name, city="Kyoto", country="Japan")
    )


class TestCacheKey:
    """Key derivation."""

    def test_key_layout(self) -> None:
        place = UnresolvedPlace(name="Kinkaku-ji", category="temple", city="Kyoto", country="Japan")
        assert make_cache_key(place) == "kinkaku-ji|kyoto|japan|temple"

    def test_missing_category_is_empty_segment(self) -> None:
        place = UnresolvedPlace(name="Kinkaku-ji", city="Kyoto", country="Japan")
        assert make_cache_key(place) == "kinkaku-ji|kyoto|japan|"

    def test_case_insensitive(self) -> None:
        a = UnresolvedPlace(name="Senso-ji", category="Temple", city="Tokyo", country="Japan")
        b = UnresolvedPlace(name="SENSO-JI", category="temple", city="tokyo", country="JAPAN")
        assert make_cache_key(a) == make_cache_key(b)

    def test_neighborhood_and_coordinates_do_not_affect_key(self) -> None:
        a = UnresolvedPlace(name="Senso-ji", city="Tokyo", country="Japan")
        b = UnresolvedPlace(
            name="Senso-ji",
            city="Tokyo",
            country="Japan",
            neighborhood="Asakusa",
            coordinates={"lat": 35.7148, "lon": 139.7967},
        )
        assert make_cache_key(a) == make_cache_key(b)


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestEphemeralCache:
    """TTL behavior with an injected clock."""

    def test_get_missing_returns_none(self) -> None:
        assert EphemeralCache().get("nope") is None

    def test_set_then_get(self) -> None:
        cache = EphemeralCache()
        result = _result("Kinkaku-ji")
        cache.set("k", result)
        assert cache.get("k") is result

    def test_entry_expires_after_ttl(self) -> None:
        clock = FakeClock()
        cache = EphemeralCache(ttl_seconds=60, clock=clock)
        cache.set("k", _result("Kinkaku-ji"))

        clock.now += 59
        assert cache.get("k") is not None

        clock.now += 1
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_last_write_wins(self) -> None:
        cache = EphemeralCache()
        cache.set("k", _result("first"))
        cache.set("k", _result("second"))

        entry = cache.get("k")
        assert entry is not None
        assert entry.original.name == "second"

    def test_clear(self) -> None:
        cache = EphemeralCache()
        cache.set("a", _result("a"))
        cache.set("b", _result("b"))
        cache.clear()
        assert len(cache) == 0
