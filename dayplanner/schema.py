from datetime import datetime
from typing import List, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .activities import ActivityCategory

class Location(BaseModel):
    lat: float
    lng: float

class Place(BaseModel):
    """A concrete venue returned by the place-search service."""
    place_id: str
    name: str
    address: Optional[str] = None
    location: Optional[Location] = None
    types: List[str] = []  # Google category tags
    rating: Optional[float] = None
    alternatives: List["Place"] = []

class VenueResult(BaseModel):
    primary: Place
    alternatives: List[Place] = []

class VenueQuery(BaseModel):
    type: Optional[str] = None
    keywords: List[str] = []
    min_rating: Optional[float] = None
    require_open_now: bool = False

class CrowdLevels(BaseModel):
    morning: int = Field(ge=1, le=5)
    afternoon: int = Field(ge=1, le=5)
    evening: int = Field(ge=1, le=5)
    weekend: int = Field(ge=1, le=5)

class Area(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    kind: str  # "borough", "neighborhood" or "area"
    borough: Optional[str] = None
    characteristics: List[str] = []
    neighbors: List[str] = []
    popular_for: List[str] = []
    crowd_levels: CrowdLevels

    @field_validator('kind')
    @classmethod
    def validate_kind(cls, v):
        if v not in ('borough', 'neighborhood', 'area'):
            raise ValueError(f"Unknown area kind: {v}")
        return v

class FixedTimeEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: str
    time: str  # "HH:MM", 24h
    category: ActivityCategory = ActivityCategory.ACTIVITY
    type: Optional[str] = None  # venue type passed to the resolver
    activity: Optional[str] = None  # the user's own words, e.g. "lunch"
    search_term: Optional[str] = None
    keywords: List[str] = []
    min_rating: Optional[float] = None
    require_open_now: bool = False
    duration_minutes: Optional[int] = None
    is_flexible: bool = False
    day_offset: int = 0  # 1 when the stop falls after midnight

class Preferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Optional[str] = None  # budget level: "budget", "moderate", "upscale"
    requirements: List[str] = []

class StructuredRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_location: Optional[str] = None
    destinations: List[str] = []
    fixed_times: List[FixedTimeEntry] = []
    preferences: Preferences = Preferences()
    interpretation_notes: List[str] = []
    source: str = "deterministic"  # "model" or "deterministic"

class ScheduledStop(BaseModel):
    venue: Place
    time: datetime
    is_fixed: bool
    activity: Optional[str] = None
    category: ActivityCategory = ActivityCategory.ACTIVITY
    duration_minutes: int = 60
    area: Optional[str] = None  # gazetteer area a filler was drawn from
    weather_suitable: Optional[bool] = None
    indoor_alternatives: List[Place] = []

class TravelSegment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_name: str = Field(alias="from")
    to: str
    duration_minutes: int
    arrival_time: datetime

class Itinerary(BaseModel):
    query: str
    city: str
    start_location: Optional[str] = None
    places: List[ScheduledStop]
    travel_times: List[TravelSegment]
    created: datetime
    warnings: List[str] = []

# API models, camelCase for the web client
class PlannedStop(BaseModel):
    name: str
    placeId: str
    address: Optional[str] = None
    location: Optional[Location] = None
    types: List[str] = []
    rating: Optional[float] = None
    time: str  # ISO timestamp
    isFixed: bool
    activity: Optional[str] = None
    category: str
    durationMinutes: int
    area: Optional[str] = None
    weatherSuitable: Optional[bool] = None
    indoorAlternatives: List[Dict[str, Optional[str]]] = []

class PlannedTravel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_name: str = Field(alias="from")
    to: str
    duration: int
    arrivalTime: str

class PlanResponse(BaseModel):
    query: str
    city: str
    startLocation: Optional[str] = None
    places: List[PlannedStop]
    travelTimes: List[PlannedTravel]
    created: str
    warnings: List[str] = []
