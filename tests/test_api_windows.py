from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import app.db_models  # noqa: F401 - register tables on Base
from app.api.windows import get_window_planner
from app.db import Base, get_db
from app.main import app
from app.models import HourlySample
from app.services import WindowPlanner

BASE = datetime(2030, 6, 2, 0, tzinfo=timezone.utc)


class FakeForecastIngestor:
    def __init__(self, samples: list[HourlySample] | None = None, fail: bool = False):
        self.samples = samples or []
        self.fail = fail

    async def get_hourly(self, lat: float, lon: float, days=None):
        if self.fail:
            raise RuntimeError("Forecast service error")
        return self.samples


def _samples(good_hours: range) -> list[HourlySample]:
    return [
        HourlySample(
            time=BASE + timedelta(hours=hour),
            temperature_c=21.0 if hour in good_hours else 4.0,
            humidity_pct=45.0,
            uv_index=2.0,
            cloud_cover_pct=10.0,
        )
        for hour in range(24)
    ]


@pytest.fixture
def api(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path}/api.db", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    ingestor = FakeForecastIngestor(_samples(range(8, 20)))

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_window_planner] = lambda: WindowPlanner(ingestor=ingestor)
    client = TestClient(app)
    try:
        yield {"client": client, "ingestor": ingestor}
    finally:
        client.close()
        app.dependency_overrides.clear()
        engine.dispose()


def _create_location(client: TestClient) -> str:
    response = client.post(
        "/api/v1/locations",
        json={"name": "Lisbon", "latitude": 38.72, "longitude": -9.14, "timezone": "UTC"},
    )
    assert response.status_code == 201
    return response.json()["id"]


def _policy() -> dict:
    return {
        "min_temperature_c": 15,
        "max_temperature_c": 25,
        "max_humidity_pct": 60,
        "max_uv_index": 5,
        "max_cloud_cover_pct": 40,
        "allow_precipitation": False,
    }


def test_health_check(api):
    response = api["client"].get("/healthz")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_location_lifecycle(api):
    client = api["client"]
    location_id = _create_location(client)

    listed = client.get("/api/v1/locations").json()
    assert [loc["id"] for loc in listed] == [location_id]

    assert client.delete(f"/api/v1/locations/{location_id}").status_code == 204
    assert client.delete(f"/api/v1/locations/{location_id}").status_code == 404


def test_location_rejects_unknown_timezone(api):
    response = api["client"].post(
        "/api/v1/locations",
        json={"name": "Nowhere", "latitude": 0, "longitude": 0, "timezone": "Mars/Olympus"},
    )

    assert response.status_code == 422


def test_refresh_returns_windows_and_days(api):
    client = api["client"]
    location_id = _create_location(client)

    response = client.post(
        f"/api/v1/locations/{location_id}/windows/refresh", json={"policy": _policy()}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["location_id"] == location_id
    assert len(body["windows"]) == 1
    window = body["windows"][0]
    assert window["min_temperature_c"] == 21.0
    assert window["plan"] is None
    assert window["skipped"] is False
    assert len(body["days"]) == 1


def test_refresh_with_work_hours_splits_windows(api):
    client = api["client"]
    location_id = _create_location(client)

    response = client.post(
        f"/api/v1/locations/{location_id}/windows/refresh",
        json={"policy": _policy(), "work_hours": {"start_hour": 9, "end_hour": 17}},
    )

    assert response.status_code == 200
    assert len(response.json()["windows"]) == 3


@pytest.mark.parametrize(
    "payload",
    [
        {"policy": {**_policy(), "min_temperature_c": 30}},
        {"work_hours": {"start_hour": 17, "end_hour": 9}},
        {"work_hours": {"start_hour": 9, "end_hour": 25}},
    ],
)
def test_refresh_rejects_invalid_configuration(api, payload):
    client = api["client"]
    location_id = _create_location(client)

    response = client.post(f"/api/v1/locations/{location_id}/windows/refresh", json=payload)

    assert response.status_code == 422


def test_refresh_unknown_location(api):
    response = api["client"].post("/api/v1/locations/missing/windows/refresh", json={})

    assert response.status_code == 404


def test_refresh_upstream_failure_maps_to_bad_gateway(api):
    client = api["client"]
    location_id = _create_location(client)
    api["ingestor"].fail = True

    response = client.post(f"/api/v1/locations/{location_id}/windows/refresh", json={})

    assert response.status_code == 502


def test_annotation_survives_refresh(api):
    client = api["client"]
    location_id = _create_location(client)
    refresh_url = f"/api/v1/locations/{location_id}/windows/refresh"
    window_id = client.post(refresh_url, json={"policy": _policy()}).json()["windows"][0]["id"]

    patched = client.patch(
        f"/api/v1/locations/{location_id}/windows/{window_id}", json={"plan": "Sailing"}
    )
    assert patched.status_code == 200
    assert patched.json()["plan"] == "Sailing"

    api["ingestor"].samples = _samples(range(7, 21))
    refreshed = client.post(refresh_url, json={"policy": _policy()}).json()

    assert [w["plan"] for w in refreshed["windows"]] == ["Sailing"]
    listed = client.get(f"/api/v1/locations/{location_id}/windows").json()
    assert listed["windows"][0]["plan"] == "Sailing"


def test_annotate_unknown_window(api):
    client = api["client"]
    location_id = _create_location(client)

    response = client.patch(
        f"/api/v1/locations/{location_id}/windows/nope", json={"skipped": True}
    )

    assert response.status_code == 404


def test_reminders_skip_skipped_windows(api):
    client = api["client"]
    location_id = _create_location(client)
    windows = client.post(
        f"/api/v1/locations/{location_id}/windows/refresh",
        json={"policy": _policy(), "work_hours": {"start_hour": 9, "end_hour": 17}},
    ).json()["windows"]
    client.patch(
        f"/api/v1/locations/{location_id}/windows/{windows[0]['id']}", json={"skipped": True}
    )

    reminders = client.get(
        f"/api/v1/locations/{location_id}/reminders", params={"lead_minutes": 15}
    ).json()

    assert [r["window_id"] for r in reminders] == [w["id"] for w in windows[1:]]
    assert reminders[0]["key"] == f"{location_id}-{windows[1]['id']}"
