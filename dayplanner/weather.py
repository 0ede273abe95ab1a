"""
Weather-aware venue substitution.

Outdoor stops are checked against an OpenWeatherMap 5-day/3-hour forecast and
swapped for an indoor alternative when the weather at the scheduled time is
poor. Forecasts are cached per ~1 km coordinate cell for 30 minutes.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Set
import aiohttp
from dateutil import parser as date_parser
from pydantic import BaseModel

from .cache import TTLCache, coordinate_key
from .exceptions import ExternalServiceUnavailable
from .schema import Place, ScheduledStop

FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"
FORECAST_CACHE_TTL = 30 * 60

OUTDOOR_TYPES = {"park", "campground", "natural_feature", "point_of_interest",
                 "tourist_attraction", "zoo", "amusement_park"}
# Any of these wins over an outdoor tag, e.g. a museum that is also a tourist_attraction
STRONG_INDOOR_TYPES = {"museum", "restaurant", "cafe", "bar", "movie_theater", "theater",
                       "shopping_mall", "department_store", "library", "art_gallery"}
UNSUITABLE_CONDITIONS = {"rain", "snow", "thunderstorm", "drizzle"}
MIN_COMFORT_TEMP_C = 5.0
MAX_COMFORT_TEMP_C = 30.0

class ForecastSample(BaseModel):
    timestamp: datetime
    temperature_c: float
    condition: str

def is_outdoor_venue(types: Iterable[str]) -> bool:
    tags = {t.lower() for t in types or []}
    if tags & STRONG_INDOOR_TYPES:
        return False
    return bool(tags & OUTDOOR_TYPES)

def is_weather_suitable(sample: ForecastSample) -> bool:
    if sample.condition.lower() in UNSUITABLE_CONDITIONS:
        return False
    return MIN_COMFORT_TEMP_C <= sample.temperature_c <= MAX_COMFORT_TEMP_C

def closest_sample(samples: List[ForecastSample], when: datetime) -> Optional[ForecastSample]:
    if not samples:
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return min(samples, key=lambda s: abs((s.timestamp - when).total_seconds()))

class WeatherClient:
    """OpenWeatherMap forecast client with an injected TTL cache."""

    def __init__(self, session: aiohttp.ClientSession, api_key: str, cache=None):
        self.api_key = api_key
        self.cache = cache if cache is not None else TTLCache(FORECAST_CACHE_TTL)
        self.logger = logging.getLogger(__name__)
        self._session = session

    @staticmethod
    def parse_forecast(payload: Dict[str, Any]) -> List[ForecastSample]:
        samples = []
        for item in payload.get('list', []):
            if item.get('dt') is not None:
                timestamp = datetime.fromtimestamp(item['dt'], tz=timezone.utc)
            elif item.get('dt_txt'):
                timestamp = date_parser.parse(item['dt_txt']).replace(tzinfo=timezone.utc)
            else:
                continue
            weather = item.get('weather') or [{}]
            samples.append(ForecastSample(
                timestamp=timestamp,
                temperature_c=item.get('main', {}).get('temp', 0.0),
                condition=weather[0].get('main', 'Unknown'),
            ))
        return samples

    async def forecast(self, lat: float, lng: float) -> List[ForecastSample]:
        """Forecast samples for a coordinate. Raises ExternalServiceUnavailable on failure."""
        key = coordinate_key("weather", lat, lng)
        cached = await self.cache.get(key)
        if cached is not None:
            self.logger.debug(f"Weather cache hit for {key}")
            return [ForecastSample.model_validate(s) for s in cached]

        params = {'lat': lat, 'lon': lng, 'units': 'metric', 'appid': self.api_key}
        try:
            async with self._session.get(FORECAST_URL, params=params, timeout=10) as response:
                response.raise_for_status()
                payload = await response.json()
        except aiohttp.ClientResponseError as e:
            self.logger.error(f"Weather API HTTP error for {key}: {e.status} {e.message}")
            raise ExternalServiceUnavailable("OpenWeatherMap", f"HTTP {e.status}")
        except asyncio.TimeoutError:
            self.logger.error(f"Weather API timeout for {key}")
            raise ExternalServiceUnavailable("OpenWeatherMap", "timeout")
        except aiohttp.ClientError as e:
            self.logger.error(f"Weather API error for {key}: {str(e)}")
            raise ExternalServiceUnavailable("OpenWeatherMap", str(e))

        samples = self.parse_forecast(payload)
        await self.cache.set(key, [s.model_dump(mode="json") for s in samples])
        return samples

    async def close(self):
        await self.cache.close()

class WeatherAwareSubstitution:
    def __init__(self, weather_client: Optional[WeatherClient], enabled: bool = True):
        self.weather_client = weather_client
        self.enabled = enabled and weather_client is not None
        self.logger = logging.getLogger(__name__)

    async def apply(self, stop: ScheduledStop, used_place_ids: Set[str]) -> ScheduledStop:
        """Return the stop, possibly with an indoor venue swapped in.

        `used_place_ids` is updated when a substitution changes the venue.
        """
        venue = stop.venue
        if not self.enabled or not venue.alternatives or not is_outdoor_venue(venue.types):
            return stop

        indoor = [alt for alt in venue.alternatives
                  if not is_outdoor_venue(alt.types) and alt.place_id not in used_place_ids]

        sample = None
        if venue.location is not None:
            try:
                samples = await self.weather_client.forecast(venue.location.lat, venue.location.lng)
                sample = closest_sample(samples, stop.time)
            except ExternalServiceUnavailable as e:
                self.logger.warning(f"⚠️ Skipping weather check for {venue.name}: {e}")
        if sample is None:
            return stop.model_copy(update={'indoor_alternatives': indoor})

        if is_weather_suitable(sample):
            return stop.model_copy(update={'weather_suitable': True, 'indoor_alternatives': indoor})

        if not indoor:
            self.logger.info(f"🌧️ {sample.condition} {sample.temperature_c}°C at {venue.name}, no indoor alternative")
            return stop.model_copy(update={'weather_suitable': False})

        replacement = indoor[0]
        remaining: List[Place] = [venue.model_copy(update={'alternatives': []})]
        remaining += [a for a in venue.alternatives if a.place_id != replacement.place_id]
        used_place_ids.discard(venue.place_id)
        used_place_ids.add(replacement.place_id)
        self.logger.info(f"🌧️ {sample.condition} {sample.temperature_c}°C at {venue.name}, "
                         f"switching to indoor {replacement.name}")
        return stop.model_copy(update={
            'venue': replacement.model_copy(update={'alternatives': remaining}),
            'weather_suitable': False,
            'indoor_alternatives': indoor[1:],
        })
