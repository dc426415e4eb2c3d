"""Tests for the /api/usage endpoints against a temporary session file."""
import pytest
from fastapi.testclient import TestClient

from usagechart.config import PACKAGE_DIR
from usagechart.main import app
from usagechart.services.session_source import SessionRepository, get_repository

SAMPLE = PACKAGE_DIR / "assets" / "mock-data.json"


@pytest.fixture
def client():
    app.dependency_overrides[get_repository] = lambda: SessionRepository(SAMPLE)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_daily_usage(client):
    response = client.get("/api/usage/daily", params={"date": "2026-02-23"})

    assert response.status_code == 200
    body = response.json()
    assert body["date"] == "2026-02-23"
    assert [(a["app_name"], a["total_minutes"]) for a in body["apps"]] == [
        ("YouTube", 125),
        ("Clock", 65),
        ("Messages", 45),
        ("Calculator", 12),
        ("Weather", 3),
    ]
    clock = body["apps"][1]
    assert clock["hourly"][8] == {"hour": 8, "minutes": 50}
    assert clock["hourly"][9] == {"hour": 9, "minutes": 15}
    messages = body["apps"][2]
    assert messages["hourly"][0]["minutes"] == 20


def test_category_breakdown(client):
    response = client.get("/api/usage/categories", params={"date": "2026-02-23"})

    assert response.status_code == 200
    assert response.json() == [
        {"category": "Entertainment", "minutes": 125},
        {"category": "System", "minutes": 65},
        {"category": "Social", "minutes": 45},
        {"category": "Other", "minutes": 15},
    ]


def test_app_rows(client):
    response = client.get("/api/usage/apps", params={"date": "2026-02-23"})

    assert response.status_code == 200
    rows = {r["app_name"]: r for r in response.json()}
    assert "Notes" not in rows
    assert rows["YouTube"]["sessions_count"] == 2
    assert rows["YouTube"]["sessions_text"] == "2 sessions"
    assert rows["Clock"]["sessions_text"] == "1 session"
    assert rows["Weather"]["category"] == "Other"


def test_app_rows_with_now_cutoff(client):
    response = client.get("/api/usage/apps", params={"date": "2026-02-23", "now": "2026-02-23T12:00:00Z"})

    assert response.status_code == 200
    assert [(r["app_name"], r["total_minutes"]) for r in response.json()] == [
        ("Clock", 65),
        ("Messages", 20),
        ("Calculator", 12),
        ("Weather", 3),
    ]


def test_summary(client):
    response = client.get("/api/usage/summary", params={"date": "2026-02-23"})

    assert response.status_code == 200
    body = response.json()
    assert body["total_minutes"] == 250
    assert body["total_duration"] == "4h 10m"
    assert [(c["category"], c["percentage"]) for c in body["categories"]] == [
        ("Entertainment", "50%"),
        ("System", "26%"),
        ("Social", "18%"),
        ("Other", "6%"),
    ]
    assert body["apps"][0]["duration"] == "2h 5m"
    assert body["apps"][-1]["percentage"] == "1%"


def test_default_date(client):
    response = client.get("/api/usage/daily")

    assert response.status_code == 200
    assert response.json()["date"] == "2026-02-23"


def test_day_without_usage(client):
    response = client.get("/api/usage/summary", params={"date": "2026-03-01"})

    assert response.status_code == 200
    body = response.json()
    assert body["total_minutes"] == 0
    assert body["total_duration"] == "0m"
    assert body["apps"] == []


def test_invalid_date(client):
    response = client.get("/api/usage/daily", params={"date": "23.02.2026"})

    assert response.status_code == 400
    assert "Invalid target date" in response.json()["detail"]


def test_missing_source(tmp_path):
    app.dependency_overrides[get_repository] = lambda: SessionRepository(tmp_path / "missing.json")
    try:
        response = TestClient(app).get("/api/usage/daily", params={"date": "2026-02-23"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    assert "missing.json" in response.json()["detail"]


def test_clip_future_drops_usage_after_now(sessions_file):
    path = sessions_file([{
        "session_id": "f-1",
        "app_name": "Clock",
        "category": "System",
        "start_timestamp": "2099-01-01T08:00:00Z",
        "end_timestamp": "2099-01-01T09:00:00Z",
    }])
    app.dependency_overrides[get_repository] = lambda: SessionRepository(path)
    try:
        client = TestClient(app)
        clipped = client.get("/api/usage/apps", params={"date": "2099-01-01", "clip_future": "true"})
        unclipped = client.get("/api/usage/apps", params={"date": "2099-01-01"})
    finally:
        app.dependency_overrides.clear()

    assert clipped.status_code == 200
    assert clipped.json() == []
    assert [(r["app_name"], r["total_minutes"]) for r in unclipped.json()] == [("Clock", 60)]
