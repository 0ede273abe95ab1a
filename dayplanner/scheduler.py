import math
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Set

from .activities import ActivityCategory
from .exceptions import ExternalServiceUnavailable
from .gazetteer import Gazetteer
from .schema import Area, Place, ScheduledStop, VenueQuery, VenueResult
from .time_utils import time_bucket

DEFAULT_STOP_MINUTES = 60
GAP_THRESHOLD_MINUTES = 90
MAX_FILLERS_PER_GAP = 3

# Generic activities by time of day: (label, category)
GENERIC_ACTIVITIES = {
    "morning": [
        ("coffee and pastries", ActivityCategory.CAFE),
        ("museum visit", ActivityCategory.MUSEUM),
        ("walk in the park", ActivityCategory.PARK),
    ],
    "midday": [
        ("light lunch", ActivityCategory.RESTAURANT),
        ("art gallery", ActivityCategory.ART_GALLERY),
        ("local market", ActivityCategory.SHOPPING),
    ],
    "afternoon": [
        ("afternoon tea", ActivityCategory.CAFE),
        ("museum", ActivityCategory.MUSEUM),
        ("boutique shopping", ActivityCategory.SHOPPING),
    ],
    "evening": [
        ("cocktail bar", ActivityCategory.BAR),
        ("live music", ActivityCategory.ENTERTAINMENT),
        ("dessert", ActivityCategory.BAKERY),
    ],
}

@dataclass
class FillerCandidate:
    location: str
    query: VenueQuery
    activity: str
    category: ActivityCategory
    area: Optional[str] = None

def pick_unused_venue(result: Optional[VenueResult], used_place_ids: Set[str]) -> Optional[Place]:
    """First venue in the result (primary, then alternatives) not already in the itinerary."""
    if result is None:
        return None
    options = [result.primary] + list(result.alternatives)
    for index, place in enumerate(options):
        if place.place_id in used_place_ids:
            continue
        others = [p.model_copy(update={'alternatives': []}) for i, p in enumerate(options)
                  if i != index and p.place_id not in used_place_ids]
        return place.model_copy(update={'alternatives': others})
    return None

def filler_count(gap_minutes: float) -> int:
    return min(math.ceil(gap_minutes / 60 / 2), MAX_FILLERS_PER_GAP)

class GapFillingScheduler:
    """Fills idle time between fixed stops with nearby activities."""

    def __init__(self, resolver, gazetteer: Gazetteer,
                 default_stop_minutes: int = DEFAULT_STOP_MINUTES,
                 threshold_minutes: int = GAP_THRESHOLD_MINUTES):
        self.resolver = resolver
        self.gazetteer = gazetteer
        self.default_stop_minutes = default_stop_minutes
        self.threshold_minutes = threshold_minutes
        self.logger = logging.getLogger(__name__)

    def _area_candidate(self, area: Area) -> FillerCandidate:
        highlight = area.popular_for[0] if area.popular_for else None
        return FillerCandidate(
            location=area.name,
            query=VenueQuery(keywords=[highlight] if highlight else []),
            activity=f"{highlight} in {area.name}" if highlight else f"explore {area.name}",
            category=ActivityCategory.ATTRACTION,
            area=area.name,
        )

    def candidates(self, current_location: str, when: datetime, requirements: List[str],
                   is_weekend: bool) -> List[FillerCandidate]:
        """Filler ideas for one slot, from the first tier that yields any."""
        wanted = [r.lower() for r in requirements]

        if "non-crowded" in wanted:
            quiet = self.gazetteer.find_quiet_areas(when.hour, is_weekend, near=current_location)
            if quiet:
                return [self._area_candidate(a) for a in quiet]

        terms = [r for r in wanted if r != "non-crowded"]
        if terms:
            matching = self.gazetteer.find_by_characteristics(terms, exclude=[current_location])
            if matching:
                return [self._area_candidate(a) for a in matching]

        bucket = time_bucket(when.hour)
        return [
            FillerCandidate(
                location=current_location,
                query=VenueQuery(type=category.venue_type, keywords=[label]),
                activity=label,
                category=category,
            )
            for label, category in GENERIC_ACTIVITIES[bucket]
        ]

    async def _resolve_candidate(self, candidate: FillerCandidate, used_place_ids: Set[str]) -> Optional[Place]:
        try:
            result = await self.resolver.resolve(candidate.location, candidate.query)
        except ExternalServiceUnavailable as e:
            self.logger.warning(f"Filler '{candidate.activity}' skipped: {e}")
            return None
        return pick_unused_venue(result, used_place_ids)

    async def fill_gaps(self, stops: List[ScheduledStop], requirements: List[str],
                        used_place_ids: Set[str], is_weekend: bool = False) -> List[ScheduledStop]:
        """Insert filler stops into long gaps between consecutive fixed stops.

        `stops` must be time-sorted. `used_place_ids` is updated with every
        venue added. Returns the full list sorted by time, fixed stops first
        on ties.
        """
        fixed = [s for s in stops if s.is_fixed]
        fillers: List[ScheduledStop] = []
        tried_activities: Set[str] = set()

        for current, following in zip(fixed, fixed[1:]):
            current_end = current.time + timedelta(minutes=current.duration_minutes)
            gap = (following.time - current_end).total_seconds() / 60
            if gap <= self.threshold_minutes:
                continue

            count = filler_count(gap)
            slot = gap / count
            location = current.area or current.venue.name
            self.logger.info(f"⏳ {int(gap)} minute gap after {current.venue.name}, adding up to {count} fillers")

            for i in range(count):
                when = current_end + timedelta(minutes=slot * i)
                for candidate in self.candidates(location, when, requirements, is_weekend):
                    if candidate.activity in tried_activities:
                        continue
                    tried_activities.add(candidate.activity)
                    venue = await self._resolve_candidate(candidate, used_place_ids)
                    if venue is None:
                        continue
                    used_place_ids.add(venue.place_id)
                    fillers.append(ScheduledStop(
                        venue=venue,
                        time=when,
                        is_fixed=False,
                        activity=candidate.activity,
                        category=candidate.category,
                        duration_minutes=int(min(self.default_stop_minutes, slot)),
                        area=candidate.area or location,
                    ))
                    break

        combined = list(stops) + fillers
        return sorted(combined, key=lambda s: (s.time, 0 if s.is_fixed else 1))
