"""
Itinerary assembly: parse -> resolve -> fill gaps -> weather -> travel times.

A build either returns a complete Itinerary or raises a PlannerError; partial
itineraries are never returned.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Set
from dateutil import tz

from .cities import CityConfig
from .exceptions import ExternalServiceUnavailable, InsufficientStops, UnresolvedLocation
from .location_normalizer import LocationNormalizer
from .request_parser import RequestParser
from .scheduler import DEFAULT_STOP_MINUTES, GapFillingScheduler, pick_unused_venue
from .schema import FixedTimeEntry, Itinerary, ScheduledStop, StructuredRequest, VenueQuery
from .time_utils import normalize_time, to_minutes
from .travel import build_travel_segments
from .weather import WeatherAwareSubstitution

MIN_STOPS = 2

class ItineraryBuilder:
    def __init__(self, city: CityConfig, parser: RequestParser, resolver,
                 scheduler: GapFillingScheduler, normalizer: LocationNormalizer,
                 weather: Optional[WeatherAwareSubstitution] = None):
        self.city = city
        self.parser = parser
        self.resolver = resolver
        self.scheduler = scheduler
        self.normalizer = normalizer
        self.weather = weather
        self.tzinfo = tz.gettz(city.timezone)
        self.logger = logging.getLogger(__name__)

    def _reference_time(self, plan_date: date, start_time: Optional[str]) -> datetime:
        if start_time:
            hour, minute = map(int, start_time.split(":"))
            return datetime.combine(plan_date, time(hour, minute), tzinfo=self.tzinfo)
        now = datetime.now(self.tzinfo)
        if plan_date == now.date():
            return now
        return datetime.combine(plan_date, time(9, 0), tzinfo=self.tzinfo)

    def _at(self, plan_date: date, hhmm: str, day_offset: int = 0) -> datetime:
        hour, minute = map(int, hhmm.split(":"))
        return datetime.combine(plan_date + timedelta(days=day_offset), time(hour, minute), tzinfo=self.tzinfo)

    @staticmethod
    def venue_query(entry: FixedTimeEntry) -> VenueQuery:
        keywords = list(entry.keywords)
        if not keywords and entry.search_term:
            keywords = [entry.search_term]
        return VenueQuery(
            type=entry.type,
            keywords=keywords,
            min_rating=entry.min_rating,
            require_open_now=entry.require_open_now,
        )

    async def resolve_entries(self, request: StructuredRequest, plan_date: date, used_place_ids: Set[str],
                              warnings: List[str]) -> tuple:
        """Resolve requested stops in time order. Returns (stops, unresolved)."""
        stops: List[ScheduledStop] = []
        unresolved: List[UnresolvedLocation] = []

        for entry in request.fixed_times:
            if not entry.category.is_venue:
                self.logger.info(f"Skipping non-venue activity '{entry.activity}' at {entry.location}")
                continue
            try:
                result = await self.resolver.resolve(entry.location, self.venue_query(entry))
            except ExternalServiceUnavailable as e:
                self.logger.error(f"❌ Could not search for {entry.location}: {e}")
                warnings.append(str(e))
                result = None

            venue = pick_unused_venue(result, used_place_ids)
            if venue is None:
                missing = UnresolvedLocation(entry.location, self.normalizer.suggest_alternatives(entry.location))
                self.logger.warning(f"⚠️ {missing}")
                unresolved.append(missing)
                continue

            if not self.normalizer.verify_match(entry.location, f"{venue.name} {venue.address or ''}", venue.types):
                self.logger.warning(f"Result '{venue.name}' may not be in {entry.location}")

            used_place_ids.add(venue.place_id)
            stops.append(ScheduledStop(
                venue=venue,
                time=self._at(plan_date, entry.time, entry.day_offset),
                is_fixed=True,
                activity=entry.activity,
                category=entry.category,
                duration_minutes=entry.duration_minutes or DEFAULT_STOP_MINUTES,
                area=entry.location,
            ))
        return stops, unresolved

    async def build(self, query: str, plan_date: Optional[date] = None,
                    start_time: Optional[str] = None) -> Itinerary:
        plan_date = plan_date or datetime.now(self.tzinfo).date()
        if start_time:
            start_time = normalize_time(start_time).time
        reference = self._reference_time(plan_date, start_time)
        self.logger.info(f"🚀 Building itinerary for {plan_date} in {self.city.name}: '{query}'")

        request = await self.parser.parse(query, reference)
        warnings: List[str] = []
        if start_time:
            kept = [e for e in request.fixed_times
                    if e.day_offset > 0 or to_minutes(e.time) >= to_minutes(start_time)]
            for dropped in request.fixed_times:
                if dropped not in kept:
                    warnings.append(f"Skipped {dropped.activity or 'activity'} at {dropped.time}, before start time {start_time}")
            request = request.model_copy(update={'fixed_times': kept})

        used_place_ids: Set[str] = set()
        stops, unresolved = await self.resolve_entries(request, plan_date, used_place_ids, warnings)
        if len(stops) < MIN_STOPS:
            raise InsufficientStops(len(stops), unresolved)
        warnings.extend(str(u) for u in unresolved)

        stops.sort(key=lambda s: s.time)
        stops = await self.scheduler.fill_gaps(
            stops, list(request.preferences.requirements), used_place_ids,
            is_weekend=plan_date.weekday() >= 5,
        )

        if self.weather is not None:
            stops = [await self.weather.apply(stop, used_place_ids) for stop in stops]

        itinerary = Itinerary(
            query=query,
            city=self.city.name,
            start_location=request.start_location,
            places=stops,
            travel_times=build_travel_segments(stops),
            created=datetime.now(self.tzinfo),
            warnings=warnings,
        )
        self.logger.info(f"✅ Itinerary ready: {len(stops)} stops, {len(itinerary.travel_times)} travel segments")
        return itinerary
