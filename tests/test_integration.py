import pytest
from fastapi.testclient import TestClient

from routeplanner.config import settings
from routeplanner.main import create_app
from routeplanner.models.domain import Coordinate
from routeplanner.services.routing import service as routing_service
from routeplanner.services.routing.errors import ResolutionError


class DummyGeocoder:
    known = {"Gare du Nord": Coordinate(48.8809, 2.3553)}

    def resolve(self, query: str) -> Coordinate:
        if query not in self.known:
            raise ResolutionError(query)
        return self.known[query]


class DummyOSRM:
    def route(self, coordinates):
        return {
            "code": "Ok",
            "routes": [{"distance": 2500.0, "duration": 300.0, "geometry": "_p~iF~ps|U_ulLnnqC_mqNvxq`@"}],
        }


@pytest.fixture
def api_client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.setattr(routing_service, "NominatimGeocoder", lambda: DummyGeocoder())
    return TestClient(create_app())


def _payload(**overrides):
    payload = {
        "stops": [
            {"id": "a", "name": "A", "latitude": 0, "longitude": 0},
            {"id": "b", "name": "B", "latitude": 0, "longitude": 10},
            {"id": "c", "name": "C", "latitude": 0, "longitude": 5},
        ]
    }
    payload.update(overrides)
    return payload


def test_health(api_client: TestClient):
    assert api_client.get("/api/health").json() == {"status": "ok"}
    assert api_client.get("/api/health/osrm").json() == {"service": "osrm", "healthy": False}


def test_optimize_orders_stops_without_metrics(api_client: TestClient):
    response = api_client.post("/api/routes/optimize", json=_payload())

    assert response.status_code == 200
    body = response.json()
    assert [stop["id"] for stop in body["stops"]] == ["a", "c", "b"]
    assert [stop["sequence"] for stop in body["stops"]] == [1, 2, 3]
    assert body["metrics"] is None
    assert body["excluded"] == []
    assert body["metadata"]["summary"] == "OK: 3 stops"
    assert body["metadata"]["crossings"] == 0
    assert body["navigation"]["google_maps_app"].startswith("comgooglemaps://")
    assert body["geojson"]["features"][0]["geometry"]["type"] == "LineString"


def test_optimize_with_metrics_and_resolution(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "osrm_base_url", "http://osrm.test")
    monkeypatch.setattr(routing_service, "OSRMClient", lambda: DummyOSRM())
    payload = _payload()
    payload["stops"] += [
        {"id": "gdn", "name": "Station", "address": "Gare du Nord"},
        {"id": "lost", "name": "Lost", "address": "Atlantis"},
    ]

    body = api_client.post("/api/routes/optimize", json=payload).json()

    assert len(body["stops"]) == 4
    assert [stop["id"] for stop in body["excluded"]] == ["lost"]
    assert body["metrics"]["total_distance_m"] == 7500.0
    assert body["metrics"]["total_duration_s"] == 900.0
    assert body["metrics"]["partial"] is False
    assert body["metadata"]["summary"] == "OK: 4 stops - 7 km, 15 min"
    assert body["metrics"]["legs"][0]["geometry"][0] == [38.5, -120.2]
    leg_lines = [f for f in body["geojson"]["features"] if f["properties"]["kind"] == "leg"]
    assert len(leg_lines) == 3
    assert {f["properties"]["source"] for f in leg_lines} == {"road"}
    assert leg_lines[0]["geometry"]["coordinates"][0] == [-120.2, 38.5]


def test_resolution_can_be_disabled(api_client: TestClient):
    payload = _payload(resolve_missing=False)
    payload["stops"].append({"id": "gdn", "address": "Gare du Nord"})

    body = api_client.post("/api/routes/optimize", json=payload).json()

    assert [stop["id"] for stop in body["excluded"]] == ["gdn"]
    assert body["excluded"][0]["name"] == "Gare du Nord"


def test_single_stop_is_a_bad_request(api_client: TestClient):
    response = api_client.post(
        "/api/routes/optimize",
        json={"stops": [{"name": "A", "latitude": 1, "longitude": 1}]},
    )
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert "At least 2" in detail["message"]
    assert detail["excluded"] == []


def test_unlocated_stops_are_listed_in_the_bad_request(api_client: TestClient):
    response = api_client.post(
        "/api/routes/optimize",
        json={
            "stops": [
                {"id": "a", "name": "A", "latitude": 1, "longitude": 1},
                {"id": "lost", "name": "Lost", "address": "Atlantis"},
            ]
        },
    )

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert "1 stop(s) could not be located" in detail["message"]
    assert [(stop["id"], stop["name"], stop["address"]) for stop in detail["excluded"]] == [
        ("lost", "Lost", "Atlantis")
    ]


def test_typed_lat_lon_address_needs_no_lookup(api_client: TestClient):
    payload = _payload(resolve_missing=False)
    payload["stops"].append({"id": "typed", "address": " 0.5 , 7 "})

    body = api_client.post("/api/routes/optimize", json=payload).json()

    assert body["excluded"] == []
    typed = next(stop for stop in body["stops"] if stop["id"] == "typed")
    assert (typed["latitude"], typed["longitude"]) == (0.5, 7.0)
    assert typed["address"] == "0.5 , 7"


def test_half_coordinate_pair_is_rejected(api_client: TestClient):
    response = api_client.post(
        "/api/routes/optimize",
        json={"stops": [{"name": "A", "latitude": 1}, {"name": "B", "latitude": 2, "longitude": 2}]},
    )
    assert response.status_code == 422


def test_import_csv(api_client: TestClient):
    response = api_client.post(
        "/api/routes/import-csv",
        json={"content": "Depot, 48.85, 2.35\nBakery, 12 Rue Oberkampf\n48.86,2.36"},
    )

    assert response.status_code == 200
    stops = response.json()["stops"]
    assert [stop["name"] for stop in stops] == ["Depot", "Bakery", "Stop 3"]
    assert stops[1]["latitude"] is None


def test_import_csv_bad_coordinate(api_client: TestClient):
    response = api_client.post("/api/routes/import-csv", json={"content": "A, 100, 0"})
    assert response.status_code == 400
