"""
Tests for the HTTP surface. The planner is replaced with a mock so these only
cover request validation, response shape and error mapping.
"""

import pytest
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient

from dayplanner import main
from dayplanner.activities import ActivityCategory
from dayplanner.exceptions import InsufficientStops, UnresolvedLocation
from dayplanner.schema import Itinerary, ScheduledStop, TravelSegment

@pytest.fixture
def client():
    # No context manager, so the lifespan (real HTTP clients) never starts
    return TestClient(main.app)

@pytest.fixture
def builder(monkeypatch):
    mock = AsyncMock()
    monkeypatch.setitem(main.app_state, "builder", mock)
    return mock

@pytest.fixture
def itinerary(sample_places):
    nine = datetime(2025, 6, 14, 9, 0, tzinfo=timezone.utc)
    one = datetime(2025, 6, 14, 13, 0, tzinfo=timezone.utc)
    return Itinerary(
        query="coffee in Soho at 9, lunch in Mayfair at 1pm",
        city="London",
        start_location="Soho",
        places=[
            ScheduledStop(venue=sample_places["soho_cafe"], time=nine, is_fixed=True,
                          activity="coffee", category=ActivityCategory.CAFE, area="Soho"),
            ScheduledStop(venue=sample_places["mayfair_lunch"], time=one, is_fixed=True,
                          activity="lunch", category=ActivityCategory.RESTAURANT, area="Mayfair"),
        ],
        travel_times=[TravelSegment(from_name="Bar Italia", to="Scott's", duration_minutes=7,
                                    arrival_time=datetime(2025, 6, 14, 10, 7, tzinfo=timezone.utc))],
        created=datetime(2025, 6, 13, 18, 0, tzinfo=timezone.utc),
    )

class TestHealth:

    def test_health_check(self, client):
        response = client.get("/_ah/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_home(self, client):
        assert client.get("/").status_code == 200

    def test_config_status_has_no_secrets(self, client):
        response = client.get("/config/status")
        assert response.status_code == 200
        body = response.json()
        assert body["placesApi"] is True
        assert body["aiProcessing"] is False
        assert "test-key" not in response.text

class TestPlanEndpoint:

    def test_successful_plan(self, client, builder, itinerary):
        builder.build.return_value = itinerary

        response = client.post("/plan", json={
            "query": "coffee in Soho at 9, lunch in Mayfair at 1pm",
            "date": "2025-06-14",
            "startTime": "08:30",
        })

        assert response.status_code == 200, response.text
        body = response.json()
        assert [p["name"] for p in body["places"]] == ["Bar Italia", "Scott's"]
        assert body["places"][0]["placeId"] == "soho_cafe"
        assert body["places"][0]["category"] == "cafe"
        assert body["places"][0]["isFixed"] is True
        assert body["travelTimes"][0]["from"] == "Bar Italia"
        assert body["travelTimes"][0]["duration"] == 7
        assert body["startLocation"] == "Soho"
        kwargs = builder.build.await_args.kwargs
        assert kwargs["plan_date"] == date(2025, 6, 14)
        assert kwargs["start_time"] == "08:30"

    def test_planning_failure_is_422_with_suggestions(self, client, builder):
        builder.build.side_effect = InsufficientStops(1, [UnresolvedLocation("Atlantis", ["Soho", "Mayfair"])])

        response = client.post("/plan", json={"query": "lunch in Soho at 1pm, dinner in Atlantis at 8"})

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error"] == "insufficient_stops"
        assert detail["suggestions"] == {"Atlantis": ["Soho", "Mayfair"]}

    @pytest.mark.parametrize("payload", [
        {"query": "   "},
        {"query": "lunch in Soho", "date": "not a date"},
        {"query": "lunch in Soho", "startTime": "25:00"},
        {"query": "lunch in Soho", "startTime": "noon"},
        {},
    ])
    def test_invalid_request_is_400(self, client, builder, payload):
        response = client.post("/plan", json=payload)
        assert response.status_code == 400, f"{payload} should be rejected"
        builder.build.assert_not_awaited()

    def test_value_error_is_400(self, client, builder):
        builder.build.side_effect = ValueError("Query cannot be empty")
        response = client.post("/plan", json={"query": "lunch"})
        assert response.status_code == 400

    def test_unexpected_error_is_500(self, client, builder):
        builder.build.side_effect = RuntimeError("boom")
        response = client.post("/plan", json={"query": "lunch in Soho at 1pm"})
        assert response.status_code == 500

    def test_planner_not_started(self, client, monkeypatch):
        monkeypatch.delitem(main.app_state, "builder", raising=False)
        response = client.post("/plan", json={"query": "lunch in Soho at 1pm"})
        assert response.status_code == 503

    def test_daily_limit(self, client, builder):
        with patch.object(main.limiter, "consume", AsyncMock(return_value=False)):
            response = client.post("/plan", json={"query": "lunch in Soho at 1pm"})
        assert response.status_code == 429
        builder.build.assert_not_awaited()
