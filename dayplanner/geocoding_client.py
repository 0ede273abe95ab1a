import asyncio
import logging
from typing import Any, Dict, List, Optional
import aiohttp

from .cities import CityConfig

GEOCODING_URL = "https://maps.googleapis.com/maps/api/geocode/json"

# Most specific first
COMPONENT_PREFERENCE = [
    ("neighborhood", "sublocality", "sublocality_level_1"),
    ("locality",),
    ("administrative_area_level_2",),
]

class GoogleGeocodingClient:
    """Best-effort canonicalization of place names through the Geocoding API."""

    def __init__(self, session: aiohttp.ClientSession, api_key: str, city: Optional[CityConfig] = None):
        self.api_key = api_key
        self.city = city
        self.logger = logging.getLogger(__name__)
        self._session = session

    @staticmethod
    def pick_component(components: List[Dict[str, Any]]) -> Optional[str]:
        for wanted in COMPONENT_PREFERENCE:
            for component in components:
                if any(t in component.get('types', []) for t in wanted):
                    return component.get('long_name')
        return None

    async def normalize_location(self, name: str) -> str:
        """Return the geocoder's name for the area containing `name`, or `name` unchanged."""
        if not name or not name.strip():
            return name
        address = f"{name}, {self.city.name}" if self.city else name
        params = {'address': address, 'key': self.api_key}
        if self.city:
            params['region'] = self.city.region
        try:
            async with self._session.get(GEOCODING_URL, params=params, timeout=10) as response:
                response.raise_for_status()
                result = await response.json()
            if result.get('status') != 'OK' or not result.get('results'):
                self.logger.warning(f"Geocoding API error for {name}: {result.get('status')}")
                return name
            components = result['results'][0].get('address_components', [])
            canonical = self.pick_component(components)
            if canonical and self.city and canonical.lower() == self.city.name.lower():
                # A bare city name is less useful than what the user typed
                return name
            if canonical and canonical != name:
                self.logger.info(f"📍 Geocoder normalized '{name}' -> '{canonical}'")
            return canonical or name
        except aiohttp.ClientResponseError as e:
            self.logger.error(f"Geocoding HTTP error for {name}: {e.status} {e.message}")
            return name
        except asyncio.TimeoutError:
            self.logger.error(f"Geocoding timeout for {name}")
            return name
        except Exception as e:
            self.logger.error(f"Geocoding unexpected error for {name}: {str(e)}")
            return name
