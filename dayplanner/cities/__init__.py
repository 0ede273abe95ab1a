"""
Per-city data tables.

The planning engine is city-agnostic; everything that differs between cities
(areas, stations, colloquial names, spelling fixes, landmarks, defaults) lives
in a CityConfig selected once at startup.
"""

from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict

from ..schema import Area, CrowdLevels, Location

class CityConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    timezone: str
    region: str  # Google region bias, e.g. "uk"
    center: Location
    areas: List[Area]
    stations: List[str] = []
    colloquial_names: Dict[str, List[str]] = {}  # canonical -> variations (lowercase)
    spelling_corrections: Dict[str, str] = {}  # lowercase misspelling -> canonical
    landmarks: List[str] = []  # streets and landmarks recognised in free text
    popular_defaults: List[str] = []
    default_start: Dict[str, str] = {}  # time bucket -> area name
    vague_locations: List[str] = []

    def default_start_for(self, bucket: str) -> str:
        return self.default_start.get(bucket) or self.popular_defaults[0]

def area(name: str, kind: str, borough: Optional[str], characteristics: List[str],
         neighbors: List[str], popular_for: List[str], crowd: Tuple[int, int, int, int]) -> Area:
    """Build an Area from a crowd tuple ordered (morning, afternoon, evening, weekend)."""
    morning, afternoon, evening, weekend = crowd
    return Area(
        name=name,
        kind=kind,
        borough=borough,
        characteristics=characteristics,
        neighbors=neighbors,
        popular_for=popular_for,
        crowd_levels=CrowdLevels(morning=morning, afternoon=afternoon, evening=evening, weekend=weekend),
    )

from .london import LONDON  # noqa: E402
from .new_york import NEW_YORK  # noqa: E402
from .boston import BOSTON  # noqa: E402

CITIES: Dict[str, CityConfig] = {
    LONDON.key: LONDON,
    NEW_YORK.key: NEW_YORK,
    BOSTON.key: BOSTON,
}

CITY_ALIASES = {
    "nyc": NEW_YORK.key,
    "new york": NEW_YORK.key,
    "new-york": NEW_YORK.key,
    "ldn": LONDON.key,
    "bos": BOSTON.key,
}

def get_city_config(name: Optional[str]) -> CityConfig:
    key = (name or LONDON.key).strip().lower()
    key = CITY_ALIASES.get(key, key)
    if key not in CITIES:
        raise ValueError(f"Unsupported city '{name}'. Available: {', '.join(sorted(CITIES))}")
    return CITIES[key]
