import os
import asyncio
import logging
from typing import Any, Dict, List, Optional
import aiohttp

from .cache import TTLCache
from .cities import CityConfig
from .exceptions import ExternalServiceUnavailable
from .schema import Location, Place, VenueQuery, VenueResult

TEXT_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/textsearch/json"
PLACES_CACHE_TTL = 48 * 60 * 60  # 48 hours
MAX_ALTERNATIVES = 4
SEARCH_RADIUS_METERS = 15000
RETRYABLE_STATUSES = {"OVER_QUERY_LIMIT", "UNKNOWN_ERROR"}
CLOSED_STATUSES = {"CLOSED_PERMANENTLY", "CLOSED_TEMPORARILY"}

class GooglePlacesClient:
    """Venue resolver backed by the Google Places Text Search API."""

    def __init__(self, session: aiohttp.ClientSession, api_key: Optional[str] = None,
                 city: Optional[CityConfig] = None, cache=None, retries: int = 1):
        self.api_key = api_key or os.getenv('GOOGLE_PLACES_API_KEY')
        if not self.api_key:
            logging.critical("GOOGLE_PLACES_API_KEY environment variable is not set!")
            raise ValueError("GOOGLE_PLACES_API_KEY environment variable is required")
        self.city = city
        self.cache = cache if cache is not None else TTLCache(PLACES_CACHE_TTL)
        self.retries = retries
        self.logger = logging.getLogger(__name__)
        self._session = session

    def build_search_text(self, location: str, query: VenueQuery) -> str:
        if query.keywords:
            text = f"{' '.join(query.keywords)} in {location}"
        elif query.type:
            text = f"{query.type.replace('_', ' ')} in {location}"
        else:
            text = location
        if self.city and self.city.name.lower() not in text.lower():
            text = f"{text}, {self.city.name}"
        return text

    async def text_search(self, text: str, place_type: Optional[str] = None, open_now: bool = False) -> Dict[str, Any]:
        """Run one text search, retrying transient failures.

        Raises ExternalServiceUnavailable once retries are exhausted.
        """
        params = {'query': text, 'key': self.api_key}
        if place_type:
            params['type'] = place_type
        if open_now:
            params['opennow'] = 'true'
        if self.city:
            params['region'] = self.city.region
            params['location'] = f"{self.city.center.lat},{self.city.center.lng}"
            params['radius'] = SEARCH_RADIUS_METERS

        last_error = ""
        for attempt in range(self.retries + 1):
            try:
                async with self._session.get(TEXT_SEARCH_URL, params=params, timeout=10) as response:
                    response.raise_for_status()
                    result = await response.json()
                status = result.get('status')
                if status == 'OK':
                    self.logger.info(f"✅ Places text search '{text}' found {len(result.get('results', []))} places")
                    return result
                if status == 'ZERO_RESULTS':
                    self.logger.info(f"🔍 Places text search '{text}': no results")
                    return {'results': []}
                last_error = f"{status}: {result.get('error_message', 'No error message')}"
                if status not in RETRYABLE_STATUSES:
                    self.logger.error(f"❌ Places API error for '{text}': {last_error}")
                    raise ExternalServiceUnavailable("Google Places", last_error)
            except aiohttp.ClientResponseError as e:
                last_error = f"HTTP {e.status} {e.message}"
            except asyncio.TimeoutError:
                last_error = "timeout"
            except aiohttp.ClientError as e:
                last_error = str(e)
            self.logger.warning(f"⚠️ Places search attempt {attempt + 1} for '{text}' failed: {last_error}")
        raise ExternalServiceUnavailable("Google Places", last_error)

    @staticmethod
    def to_place(result: Dict[str, Any]) -> Place:
        geometry = (result.get('geometry') or {}).get('location')
        location = None
        if geometry and geometry.get('lat') is not None and geometry.get('lng') is not None:
            location = Location(lat=geometry['lat'], lng=geometry['lng'])
        return Place(
            place_id=result['place_id'],
            name=result.get('name', ''),
            address=result.get('formatted_address') or result.get('vicinity'),
            location=location,
            types=result.get('types', []),
            rating=result.get('rating'),
        )

    def _filter(self, results: List[Dict[str, Any]], query: VenueQuery) -> List[Dict[str, Any]]:
        kept = []
        for result in results:
            if not result.get('place_id'):
                continue
            if result.get('business_status') in CLOSED_STATUSES:
                continue
            if query.min_rating is not None:
                rating = result.get('rating')
                if rating is None or rating < query.min_rating:
                    continue
            kept.append(result)
        return kept

    async def resolve(self, location: str, query: Optional[VenueQuery] = None) -> Optional[VenueResult]:
        """Find a primary venue plus alternatives, or None when nothing matches."""
        query = query or VenueQuery()
        text = self.build_search_text(location, query)
        cache_key = f"places:{text.lower()}:{query.type or ''}:{int(query.require_open_now)}"

        results = await self.cache.get(cache_key)
        if results is None:
            response = await self.text_search(text, place_type=query.type, open_now=query.require_open_now)
            results = response.get('results', [])
            await self.cache.set(cache_key, results)

        candidates = self._filter(results, query)
        if not candidates:
            self.logger.info(f"No venues for '{text}' (min rating {query.min_rating})")
            return None
        places = [self.to_place(r) for r in candidates[:MAX_ALTERNATIVES + 1]]
        primary = places[0].model_copy(update={'alternatives': places[1:]})
        return VenueResult(primary=primary, alternatives=places[1:])

    async def close(self):
        """The aiohttp session belongs to the application lifespan; only the cache is ours."""
        await self.cache.close()
