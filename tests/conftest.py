"""
Pytest configuration and shared fixtures for the day planner tests.

This file contains:
- Environment setup so no test needs real credentials
- City configs and the read-only lookups built from them
- A fake venue resolver that answers from a fixed table
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from typing import Dict, Optional

from dayplanner.cities import BOSTON, LONDON, NEW_YORK
from dayplanner.gazetteer import Gazetteer
from dayplanner.location_normalizer import LocationNormalizer
from dayplanner.schema import Location, Place, VenueQuery, VenueResult

# Test environment setup
@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Automatically set up test environment for all tests"""
    monkeypatch.setenv("PLANNER_CITY", "london")
    monkeypatch.setenv("GOOGLE_PLACES_API_KEY", "test-key")
    # Model and forecast stay disabled unless a test opts in
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
    monkeypatch.delenv("REDIS_URL", raising=False)

@pytest.fixture
def london():
    return LONDON

@pytest.fixture
def new_york():
    return NEW_YORK

@pytest.fixture
def london_gazetteer():
    return Gazetteer(LONDON.areas)

@pytest.fixture
def london_normalizer(london_gazetteer):
    return LocationNormalizer(LONDON, london_gazetteer)

@pytest.fixture
def nyc_normalizer():
    return LocationNormalizer(NEW_YORK)

@pytest.fixture
def boston_normalizer():
    return LocationNormalizer(BOSTON)

def make_place(place_id: str, name: str, lat: float = 51.5136, lng: float = -0.1365,
               types=None, rating: Optional[float] = 4.5, address: Optional[str] = None) -> Place:
    return Place(
        place_id=place_id,
        name=name,
        address=address or f"{name}, London",
        location=Location(lat=lat, lng=lng),
        types=types or ["restaurant", "food", "establishment"],
        rating=rating,
    )

class FakeResolver:
    """Answers resolve() from a table keyed by location.

    Filler queries always carry keywords; with answer_fillers=False they get
    no result, so only the stops the user asked for are resolved.
    """

    def __init__(self, table: Dict[str, VenueResult], answer_fillers: bool = True):
        self.table = {k.lower(): v for k, v in table.items()}
        self.answer_fillers = answer_fillers
        self.calls = []

    async def resolve(self, location: str, query: Optional[VenueQuery] = None) -> Optional[VenueResult]:
        query = query or VenueQuery()
        self.calls.append((location, query))
        if query.keywords and not self.answer_fillers:
            return None
        return self.table.get(location.lower())

@pytest.fixture
def sample_places():
    """Venues in central London, roughly 1-2 km apart"""
    return {
        "soho_cafe": make_place("soho_cafe", "Bar Italia", 51.5136, -0.1318, ["cafe", "food", "establishment"]),
        "mayfair_lunch": make_place("mayfair_lunch", "Scott's", 51.5100, -0.1500),
        "mayfair_drinks": make_place("mayfair_drinks", "Connaught Bar", 51.5105, -0.1495, ["bar", "establishment"]),
        "mayfair_dinner": make_place("mayfair_dinner", "Hide", 51.5068, -0.1447),
        "covent_dinner": make_place("covent_dinner", "Rules", 51.5111, -0.1234),
        "green_park": make_place("green_park", "Green Park", 51.5040, -0.1430,
                                 ["park", "tourist_attraction", "point_of_interest"]),
        "royal_academy": make_place("royal_academy", "Royal Academy of Arts", 51.5094, -0.1394,
                                    ["art_gallery", "museum", "tourist_attraction"]),
    }

@pytest.fixture
def mock_places_client():
    """Mock venue resolver for testing"""
    mock = AsyncMock()
    mock.resolve = AsyncMock(return_value=None)
    return mock

def mock_session(*payloads):
    """aiohttp-style session whose get() yields each payload in turn as the JSON body."""
    contexts = []
    for payload in payloads:
        response = MagicMock()
        response.raise_for_status = MagicMock()
        response.json = AsyncMock(return_value=payload)
        context = MagicMock()
        context.__aenter__ = AsyncMock(return_value=response)
        context.__aexit__ = AsyncMock(return_value=False)
        contexts.append(context)
    session = MagicMock()
    session.get = MagicMock(side_effect=contexts)
    return session

class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds
