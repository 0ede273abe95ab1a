import math
import logging
from datetime import timedelta
from typing import List, Optional

from .schema import Location, Place, ScheduledStop, TravelSegment

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0
AVERAGE_SPEED_KMH = 20.0  # walking plus public transport in a city centre
MIN_TRAVEL_MINUTES = 5
MAX_TRAVEL_MINUTES = 120
DEFAULT_TRAVEL_MINUTES = 30

def haversine_km(a: Location, b: Location) -> float:
    lat1, lng1, lat2, lng2 = map(math.radians, (a.lat, a.lng, b.lat, b.lng))
    dlat = lat2 - lat1
    dlng = lng2 - lng1
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))

def _usable(location: Optional[Location]) -> bool:
    if location is None:
        return False
    try:
        return math.isfinite(float(location.lat)) and math.isfinite(float(location.lng))
    except (TypeError, ValueError):
        return False

def estimate_travel_minutes(origin: Place, destination: Place) -> int:
    """Door-to-door estimate between two venues, clamped to [5, 120] minutes."""
    if not (_usable(origin.location) and _usable(destination.location)):
        logger.warning(f"Missing coordinates between {origin.name} and {destination.name}, "
                       f"assuming {DEFAULT_TRAVEL_MINUTES} minutes")
        return DEFAULT_TRAVEL_MINUTES
    distance = haversine_km(origin.location, destination.location)
    minutes = round(distance / AVERAGE_SPEED_KMH * 60)
    return max(MIN_TRAVEL_MINUTES, min(MAX_TRAVEL_MINUTES, minutes))

def build_travel_segments(stops: List[ScheduledStop]) -> List[TravelSegment]:
    segments = []
    for current, following in zip(stops, stops[1:]):
        duration = estimate_travel_minutes(current.venue, following.venue)
        departure = current.time + timedelta(minutes=current.duration_minutes)
        segments.append(TravelSegment(
            from_name=current.venue.name,
            to=following.venue.name,
            duration_minutes=duration,
            arrival_time=departure + timedelta(minutes=duration),
        ))
    return segments
