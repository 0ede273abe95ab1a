"""
Tests for forecast fetching and weather-aware substitution of outdoor stops.
"""

import asyncio
import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from dayplanner.activities import ActivityCategory
from dayplanner.cache import TTLCache
from dayplanner.exceptions import ExternalServiceUnavailable
from dayplanner.schema import ScheduledStop
from dayplanner.weather import (
    FORECAST_CACHE_TTL, ForecastSample, WeatherAwareSubstitution, WeatherClient,
    closest_sample, is_outdoor_venue, is_weather_suitable,
)

from conftest import FakeClock, mock_session

NOON_UTC = datetime(2025, 6, 10, 12, 0, tzinfo=timezone.utc)

def forecast_payload(condition="Rain", temp=12.0):
    return {
        "list": [
            {"dt": int(NOON_UTC.timestamp()), "main": {"temp": temp}, "weather": [{"main": condition}]},
            {"dt": int(NOON_UTC.timestamp()) + 3 * 3600, "main": {"temp": 20.0}, "weather": [{"main": "Clear"}]},
        ]
    }

def sample(condition, temp=15.0):
    return ForecastSample(timestamp=NOON_UTC, temperature_c=temp, condition=condition)

@pytest.fixture
def park_stop(sample_places):
    """Green Park at 13:00 UTC with an indoor gallery as its alternative"""
    park = sample_places["green_park"].model_copy(update={'alternatives': [sample_places["royal_academy"]]})
    return ScheduledStop(venue=park, time=datetime(2025, 6, 10, 13, 0, tzinfo=timezone.utc),
                         is_fixed=True, category=ActivityCategory.PARK)

def substitution_with(samples=None, error=None):
    client = MagicMock()
    client.forecast = AsyncMock(return_value=samples or [], side_effect=error)
    return WeatherAwareSubstitution(client, enabled=True), client

class TestClassification:

    def test_outdoor_venue(self):
        assert is_outdoor_venue(["park", "point_of_interest"])
        assert not is_outdoor_venue(["museum", "tourist_attraction"]), "Indoor tags win"
        assert not is_outdoor_venue([])

    @pytest.mark.parametrize("condition,temp,suitable", [
        ("Clear", 20, True), ("Clouds", 5, True), ("Rain", 20, False),
        ("Drizzle", 18, False), ("Clear", 2, False), ("Clear", 33, False),
    ])
    def test_suitability(self, condition, temp, suitable):
        assert is_weather_suitable(sample(condition, temp)) is suitable

    def test_closest_sample(self):
        samples = WeatherClient.parse_forecast(forecast_payload())
        picked = closest_sample(samples, datetime(2025, 6, 10, 14, 0, tzinfo=timezone.utc))
        assert picked.condition == "Clear"
        assert closest_sample([], NOON_UTC) is None

    def test_parse_forecast_dt_txt(self):
        samples = WeatherClient.parse_forecast(
            {"list": [{"dt_txt": "2025-06-10 12:00:00", "main": {"temp": 9}, "weather": [{"main": "Snow"}]}]})
        assert samples[0].timestamp == NOON_UTC
        assert samples[0].condition == "Snow"

class TestSubstitution:

    @pytest.mark.asyncio
    async def test_rain_swaps_in_indoor_alternative(self, park_stop):
        """Rain at a park with an indoor alternative schedules the alternative"""
        substitution, _ = substitution_with([sample("Rain")])
        used = {"green_park"}

        result = await substitution.apply(park_stop, used)

        assert result.venue.place_id == "royal_academy"
        assert result.weather_suitable is False
        assert result.venue.alternatives[0].place_id == "green_park", "Original venue kept as an alternative"
        assert used == {"royal_academy"}
        assert result.time == park_stop.time

    @pytest.mark.asyncio
    async def test_good_weather_keeps_primary(self, park_stop):
        substitution, _ = substitution_with([sample("Clear", 21)])
        result = await substitution.apply(park_stop, {"green_park"})
        assert result.venue.place_id == "green_park"
        assert result.weather_suitable is True
        assert [p.place_id for p in result.indoor_alternatives] == ["royal_academy"]

    @pytest.mark.asyncio
    async def test_no_indoor_alternative_flags_stop(self, park_stop, sample_places):
        outdoor_only = park_stop.venue.model_copy(update={'alternatives': [
            sample_places["green_park"].model_copy(update={'place_id': "hyde_park", 'name': "Hyde Park"})]})
        stop = park_stop.model_copy(update={'venue': outdoor_only})
        substitution, _ = substitution_with([sample("Thunderstorm")])

        result = await substitution.apply(stop, {"green_park"})

        assert result.venue.place_id == "green_park"
        assert result.weather_suitable is False

    @pytest.mark.asyncio
    async def test_used_alternative_not_substituted(self, park_stop):
        substitution, _ = substitution_with([sample("Rain")])
        result = await substitution.apply(park_stop, {"green_park", "royal_academy"})
        assert result.venue.place_id == "green_park"
        assert result.weather_suitable is False

    @pytest.mark.asyncio
    async def test_forecast_failure_keeps_primary(self, park_stop):
        substitution, _ = substitution_with(error=ExternalServiceUnavailable("OpenWeatherMap", "timeout"))
        result = await substitution.apply(park_stop, {"green_park"})
        assert result.venue.place_id == "green_park"
        assert result.weather_suitable is None
        assert [p.place_id for p in result.indoor_alternatives] == ["royal_academy"]

    @pytest.mark.asyncio
    async def test_indoor_venue_not_checked(self, sample_places):
        substitution, client = substitution_with([sample("Rain")])
        gallery = sample_places["royal_academy"].model_copy(update={'alternatives': [sample_places["green_park"]]})
        stop = ScheduledStop(venue=gallery, time=NOON_UTC, is_fixed=True)

        result = await substitution.apply(stop, set())

        assert result is stop
        client.forecast.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_disabled(self, park_stop):
        client = MagicMock()
        client.forecast = AsyncMock()
        substitution = WeatherAwareSubstitution(client, enabled=False)
        assert await substitution.apply(park_stop, set()) is park_stop
        client.forecast.assert_not_awaited()

class TestWeatherClient:

    @pytest.mark.asyncio
    async def test_forecast_cached_until_ttl(self):
        clock = FakeClock()
        session = mock_session(forecast_payload("Rain"), forecast_payload("Clear"))
        client = WeatherClient(session, "test-key", cache=TTLCache(FORECAST_CACHE_TTL, clock=clock))

        first = await client.forecast(51.5041, -0.1430)
        second = await client.forecast(51.5043, -0.1428)
        assert session.get.call_count == 1, "Nearby coordinates share a cache entry"
        assert second == first

        clock.advance(FORECAST_CACHE_TTL + 1)
        third = await client.forecast(51.5041, -0.1430)
        assert session.get.call_count == 2, "Expired entry is fetched again"
        assert third[0].condition == "Clear"

    @pytest.mark.asyncio
    async def test_request_params(self):
        session = mock_session(forecast_payload())
        client = WeatherClient(session, "test-key")
        await client.forecast(51.5, -0.12)
        params = session.get.call_args.kwargs["params"]
        assert params["units"] == "metric"
        assert params["appid"] == "test-key"

    @pytest.mark.asyncio
    async def test_timeout_raises_service_unavailable(self):
        session = MagicMock()
        session.get = MagicMock(side_effect=asyncio.TimeoutError())
        client = WeatherClient(session, "test-key")
        with pytest.raises(ExternalServiceUnavailable):
            await client.forecast(51.5, -0.12)
