"""Integration tests for the place resolution endpoints."""

import json
from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient

from backend.resolver.cache.persistent import PersistentCache
from backend.resolver.main import create_app
from backend.resolver.orchestration.resolver import PlaceResolver

SENSO_JI = {"name": "Senso-ji", "category": "temple", "city": "Tokyo", "country": "Japan"}


@pytest.fixture
def client(make_resolver: Callable[..., PlaceResolver]) -> Iterator[TestClient]:
    """Client for an offline resolver backed by the temp cache."""
    with TestClient(create_app(make_resolver())) as test_client:
        yield test_client


class TestResolvePlace:
    """POST /places/resolve."""

    def test_unknown_city_resolves_synthetic(self, client: TestClient) -> None:
        response = client.post("/places/resolve", json={"place": SENSO_JI})

        assert response.status_code == 200
        data = response.json()
        assert data["provider"] == "synthetic"
        assert data["cached"] is False
        assert data["resolved"]["source"] == "synthetic"
        assert data["resolved"]["name"] == "Senso-ji"
        assert data["original"] == {**SENSO_JI, "neighborhood": None, "coordinates": None}

    def test_second_call_is_cached(self, client: TestClient) -> None:
        first = client.post("/places/resolve", json={"place": SENSO_JI}).json()
        second = client.post("/places/resolve", json={"place": SENSO_JI}).json()

        assert second["cached"] is True
        assert second["resolved"] == first["resolved"]

    def test_local_reference_match(self, client: TestClient) -> None:
        place = {"name": "Golden Pavilion", "city": "Kyoto", "country": "Japan"}

        data = client.post("/places/resolve", json={"place": place}).json()

        assert data["provider"] == "local_reference"
        assert data["resolved"]["name"] == "Kinkaku-ji"
        assert data["resolved"]["source_id"] == "osm:way/25410513"

    def test_result_is_persisted(self, client: TestClient, cache: PersistentCache) -> None:
        client.post("/places/resolve", json={"place": SENSO_JI})

        index = json.loads(cache.index_path.read_text())
        assert len(index["entries"]) == 1
        assert index["totalMisses"] == 1

    def test_missing_city_is_rejected(self, client: TestClient) -> None:
        place = {"name": "Senso-ji", "country": "Japan"}

        response = client.post("/places/resolve", json={"place": place})

        assert response.status_code == 422

    def test_offline_provider_in_allow_list_is_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/places/resolve",
            json={"place": SENSO_JI, "options": {"providers": ["synthetic"]}},
        )

        assert response.status_code == 422


class TestResolveBatch:
    """POST /places/resolve-batch."""

    def test_results_follow_request_order(self, client: TestClient) -> None:
        names = ["Kiyomizu-dera", "Unknown Noodle Bar", "Nishiki Market"]
        places = [{"name": n, "city": "Kyoto", "country": "Japan"} for n in names]

        response = client.post("/places/resolve-batch", json={"places": places})

        assert response.status_code == 200
        data = response.json()
        assert [r["original"]["name"] for r in data] == names
        assert [r["provider"] for r in data] == ["local_reference", "synthetic", "local_reference"]

    def test_empty_batch(self, client: TestClient) -> None:
        response = client.post("/places/resolve-batch", json={"places": []})

        assert response.status_code == 200
        assert response.json() == []

    def test_batch_size_limit(self, client: TestClient) -> None:
        places = [{"name": f"Place {i}", "city": "Kyoto", "country": "Japan"} for i in range(101)]

        response = client.post("/places/resolve-batch", json={"places": places})

        assert response.status_code == 422


def test_resolve_itinerary_places(client: TestClient) -> None:
    itinerary = {
        "destination": "Japan",
        "days": [
            {
                "day_number": 1,
                "city": "Kyoto",
                "slots": [
                    {
                        "slot_id": "morning",
                        "options": [
                            {"id": "opt-1", "activity": {"name": "Fushimi Inari Shrine", "category": "shrine"}},
                            {"id": "opt-2", "activity": {"name": "Kinkaku-ji", "category": "temple"}},
                        ],
                    }
                ],
            },
            {
                "day_number": 2,
                "city": "Tokyo",
                "slots": [
                    {
                        "slot_id": "lunch",
                        "options": [
                            {
                                "id": "opt-3",
                                "activity": {
                                    "name": "Ichiran",
                                    "category": "restaurant",
                                    "place": {"neighborhood": "Shinjuku"},
                                },
                            }
                        ],
                    }
                ],
            },
        ],
    }

    response = client.post("/itineraries/resolve-places", json={"itinerary": itinerary})

    assert response.status_code == 200
    data = response.json()
    assert [(r["day_number"], r["slot_id"], r["option_id"]) for r in data] == [
        (1, "morning", "opt-1"),
        (1, "morning", "opt-2"),
        (2, "lunch", "opt-3"),
    ]
    assert data[0]["resolution"]["resolved"]["name"] == "Fushimi Inari Taisha"
    assert data[2]["resolution"]["provider"] == "synthetic"
    assert data[2]["resolution"]["original"]["neighborhood"] == "Shinjuku"
    assert data[2]["resolution"]["original"]["country"] == "Japan"
