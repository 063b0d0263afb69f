"""
Tests for the HTTP API.

The tracker service is overridden with in-memory persistence and a
fixed clock; the packaged trail catalog is used as is.
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from trailwalk.api.deps import get_catalog, get_tracker_service
from trailwalk.features.trails import TierEntitlement
from trailwalk.features.tracker import InMemoryPersistence, TrackerService, UserLockRegistry
from trailwalk.main import app, status_for
from trailwalk.shared.clock import FixedClock
from trailwalk.shared.errors import (
    InvalidMeasurementError,
    NonMonotonicDistanceError,
    NotEntitledError,
    RunAlreadyCompletedError,
    RunNotFoundError,
    UnknownTrailError,
)


NOW = datetime(2024, 3, 10, 18, 0, tzinfo=timezone.utc)
PREFS = {"daily_goal": 10000, "stride_length_cm": 75}


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def client():
    persistence = InMemoryPersistence()
    locks = UserLockRegistry()
    clock = FixedClock(NOW)

    def override(premium: bool = False):
        catalog = get_catalog()
        return TrackerService(
            persistence,
            catalog,
            TierEntitlement(catalog.free_trail_ids(), premium=premium),
            clock,
            locks=locks,
        )

    app.dependency_overrides[get_tracker_service] = override
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Test error mapping
# =============================================================================

class TestStatusFor:

    def test_statuses(self):
        assert status_for(UnknownTrailError("x")) == 404
        assert status_for(RunNotFoundError("u", "x")) == 404
        assert status_for(NotEntitledError("x")) == 403
        assert status_for(NonMonotonicDistanceError(10.0, 5.0)) == 409
        assert status_for(RunAlreadyCompletedError("u", "x")) == 409
        assert status_for(InvalidMeasurementError("bad")) == 400


# =============================================================================
# Test endpoints
# =============================================================================

class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestTrailRoutes:

    def test_list_marks_locked(self, client):
        trails = {t["id"]: t for t in client.get("/api/v1/trails").json()}
        assert trails["10k-classic"]["locked"] is False
        assert trails["inca-trail"]["locked"] is True

    def test_premium_unlocks(self, client):
        trails = client.get("/api/v1/trails", params={"premium": True}).json()
        assert not any(t["locked"] for t in trails)

    def test_unknown_trail(self, client):
        assert client.get("/api/v1/trails/nope").status_code == 404

    def test_miles(self, client):
        trail = client.get("/api/v1/trails/10k-classic", params={"unit": "mi"}).json()
        assert trail["total_distance"] == "6.2 mi"


class TestActivityRoutes:

    def test_record_and_list(self, client):
        response = client.put(
            "/api/v1/users/u1/activity/2024-03-09", params=PREFS, json={"steps": 12000}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["entry"]["distance_m"] == pytest.approx(9000.0)
        assert body["day_status"] == "achieved"
        assert [b["id"] for b in body["unlocked_badges"]] == ["step-5k", "step-10k", "dist-5k"]

        entries = client.get(
            "/api/v1/users/u1/activity", params={"start": "2024-03-01", "end": "2024-03-31"}
        ).json()
        assert [e["day"] for e in entries] == ["2024-03-09"]

    def test_invalid_date(self, client):
        response = client.put("/api/v1/users/u1/activity/2024-02-30", json={"steps": 100})
        assert response.status_code == 400

    def test_future_date(self, client):
        response = client.put("/api/v1/users/u1/activity/2024-03-11", json={"steps": 100})
        assert response.status_code == 400

    def test_negative_steps_rejected_by_schema(self, client):
        response = client.put("/api/v1/users/u1/activity/2024-03-09", json={"steps": -1})
        assert response.status_code == 422

    def test_days_span_limit(self, client):
        response = client.get(
            "/api/v1/users/u1/days", params={"start": "0001-01-01", "end": "9999-12-31"}
        )
        assert response.status_code == 400

    def test_days_calendar_streaks(self, client):
        client.put("/api/v1/users/u1/activity/2024-03-09", params=PREFS, json={"steps": 12000})

        days = client.get(
            "/api/v1/users/u1/days",
            params={"start": "2024-03-08", "end": "2024-03-10", **PREFS},
        ).json()
        assert [d["status"] for d in days] == ["failed", "achieved", "future"]

        months = client.get("/api/v1/users/u1/calendar", params=PREFS).json()
        assert [(m["year"], m["month"]) for m in months] == [(2024, 2), (2024, 3)]
        assert months[1]["achieved_count"] == 1

        streaks = client.get("/api/v1/users/u1/streaks", params=PREFS).json()
        assert streaks == {"current": 1, "longest": 1}


class TestRunRoutes:

    def test_cancel(self, client):
        client.post("/api/v1/users/u1/runs", json={"trail_id": "10k-classic", "goal_days": 5})
        assert client.delete("/api/v1/users/u1/runs/10k-classic").status_code == 204
        assert client.get("/api/v1/users/u1/runs/10k-classic").status_code == 404
        assert client.delete("/api/v1/users/u1/runs/10k-classic").status_code == 404

    def test_cancel_completed(self, client):
        client.post("/api/v1/users/u1/runs", json={"trail_id": "10k-classic", "goal_days": 5})
        client.put("/api/v1/users/u1/activity/2024-03-10", params=PREFS, json={"steps": 14000})
        assert client.delete("/api/v1/users/u1/runs/10k-classic").status_code == 409

    def test_start_and_progress(self, client):
        response = client.post(
            "/api/v1/users/u1/runs", params=PREFS, json={"trail_id": "10k-classic", "goal_days": 5}
        )
        assert response.status_code == 200
        assert response.json()["snapshot"]["landmarks_reached"] == 1

        update = client.put(
            "/api/v1/users/u1/activity/2024-03-10", params=PREFS, json={"steps": 8000}
        ).json()
        progress = update["progress"][0]
        assert progress["snapshot"]["cumulative_distance_m"] == pytest.approx(6000.0)
        assert progress["milestones"] == [25, 50]

        snapshot = client.get("/api/v1/users/u1/runs/10k-classic").json()
        assert snapshot["progress"] == "60%"

    def test_locked_trail(self, client):
        response = client.post(
            "/api/v1/users/u1/runs", json={"trail_id": "inca-trail", "goal_days": 5}
        )
        assert response.status_code == 403

    def test_premium_trail(self, client):
        response = client.post(
            "/api/v1/users/u1/runs",
            params={"premium": True},
            json={"trail_id": "inca-trail", "goal_days": 5},
        )
        assert response.status_code == 200

    def test_unknown_and_missing(self, client):
        response = client.post("/api/v1/users/u1/runs", json={"trail_id": "nope", "goal_days": 5})
        assert response.status_code == 404
        assert client.get("/api/v1/users/u1/runs/10k-classic").status_code == 404

    def test_decrease_conflict(self, client):
        client.post("/api/v1/users/u1/runs", json={"trail_id": "10k-classic", "goal_days": 5})
        client.put("/api/v1/users/u1/activity/2024-03-10", params=PREFS, json={"steps": 8000})
        response = client.put(
            "/api/v1/users/u1/activity/2024-03-10", params=PREFS, json={"steps": 2000}
        )
        assert response.status_code == 409

    def test_extend_and_completed(self, client):
        client.post("/api/v1/users/u1/runs", json={"trail_id": "10k-classic", "goal_days": 5})
        extended = client.post(
            "/api/v1/users/u1/runs/10k-classic/extend", json={"additional_days": 2}
        ).json()
        assert extended["goal_days"] == 7

        client.put("/api/v1/users/u1/activity/2024-03-10", params=PREFS, json={"steps": 14000})
        completed = client.get("/api/v1/users/u1/runs/completed").json()
        assert [c["trail_id"] for c in completed] == ["10k-classic"]
        assert completed[0]["total_steps"] == 14000


class TestAchievementRoutes:

    def test_badges(self, client):
        client.put("/api/v1/users/u1/activity/2024-03-09", params=PREFS, json={"steps": 6000})
        body = client.get("/api/v1/users/u1/badges", params={"limit": 2, **PREFS}).json()
        assert [b["id"] for b in body["earned"]] == ["step-5k"]
        assert len(body["next"]) == 2
        assert body["next"][0]["badge"]["id"] == "dist-5k"
        assert body["next"][0]["percent"] == 90

    def test_dashboard(self, client):
        client.put("/api/v1/users/u1/activity/2024-03-09", params=PREFS, json={"steps": 6000})
        body = client.get("/api/v1/users/u1/dashboard", params=PREFS).json()
        assert body["monthly_steps"] == 6000
        assert body["weekly"]["last_week"] == 6000
        assert len(body["chart"]) == 7
