"""
Tests for travel time estimates between venues.
"""

from datetime import datetime, timedelta

from dayplanner.schema import Location, Place, ScheduledStop
from dayplanner.travel import build_travel_segments, estimate_travel_minutes, haversine_km

from conftest import make_place

class TestEstimateTravelMinutes:

    def test_identical_coordinates_hit_the_floor(self):
        a = make_place("a", "A", 51.5, -0.12)
        b = make_place("b", "B", 51.5, -0.12)
        assert estimate_travel_minutes(a, b) == 5

    def test_missing_coordinates_default(self):
        a = make_place("a", "A")
        b = Place(place_id="b", name="B")
        assert estimate_travel_minutes(a, b) == 30

    def test_long_distance_capped(self):
        london = make_place("a", "London", 51.5074, -0.1278)
        edinburgh = make_place("b", "Edinburgh", 55.9533, -3.1883)
        assert estimate_travel_minutes(london, edinburgh) == 120

    def test_central_london_hop(self):
        """Soho to Covent Garden is under 1 km, so a short hop"""
        soho = make_place("a", "Soho", 51.5136, -0.1318)
        covent = make_place("b", "Covent Garden", 51.5111, -0.1234)
        minutes = estimate_travel_minutes(soho, covent)
        assert 5 <= minutes <= 10

    def test_haversine_known_distance(self):
        km = haversine_km(Location(lat=51.5074, lng=-0.1278), Location(lat=48.8566, lng=2.3522))
        assert 340 < km < 345, f"London-Paris should be about 343 km, got {km}"

def test_segments_between_consecutive_stops(sample_places):
    stops = [
        ScheduledStop(venue=sample_places["soho_cafe"], time=datetime(2025, 6, 10, 9, 0),
                      is_fixed=True, duration_minutes=60),
        ScheduledStop(venue=sample_places["mayfair_lunch"], time=datetime(2025, 6, 10, 13, 0),
                      is_fixed=True, duration_minutes=90),
        ScheduledStop(venue=sample_places["covent_dinner"], time=datetime(2025, 6, 10, 20, 0), is_fixed=True),
    ]
    segments = build_travel_segments(stops)

    assert len(segments) == len(stops) - 1
    first = segments[0]
    assert (first.from_name, first.to) == ("Bar Italia", "Scott's")
    assert first.arrival_time == datetime(2025, 6, 10, 10, 0) + timedelta(minutes=first.duration_minutes)
    assert 5 <= first.duration_minutes <= 120
    second = segments[1]
    assert second.arrival_time == datetime(2025, 6, 10, 14, 30) + timedelta(minutes=second.duration_minutes)
    assert segments[0].model_dump(by_alias=True)["from"] == "Bar Italia"

def test_no_segments_for_single_stop(sample_places):
    stop = ScheduledStop(venue=sample_places["soho_cafe"], time=datetime(2025, 6, 10, 9), is_fixed=True)
    assert build_travel_segments([stop]) == []
