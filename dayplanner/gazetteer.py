import logging
from typing import Dict, Iterable, List, Optional

from .schema import Area
from .time_utils import crowd_bucket

class Gazetteer:
    """Read-only lookup over a city's named areas.

    Built once at startup and shared by every request. Nothing here mutates the
    underlying Area records.
    """

    def __init__(self, areas: Iterable[Area]):
        self._areas: List[Area] = list(areas)
        self._by_name: Dict[str, Area] = {a.name.lower(): a for a in self._areas}
        self.logger = logging.getLogger(__name__)

    @property
    def areas(self) -> List[Area]:
        return list(self._areas)

    def names(self) -> List[str]:
        return [a.name for a in self._areas]

    def get(self, name: Optional[str]) -> Optional[Area]:
        if not name:
            return None
        return self._by_name.get(name.strip().lower())

    def is_neighbor(self, a: str, b: str) -> bool:
        """True when either area lists the other as a neighbor."""
        a_low, b_low = a.strip().lower(), b.strip().lower()
        for first, second in ((a_low, b_low), (b_low, a_low)):
            area = self._by_name.get(first)
            if area and any(n.lower() == second for n in area.neighbors):
                return True
        return False

    def crowd_level(self, area: Area, hour: int, is_weekend: bool = False) -> int:
        bucket = crowd_bucket(hour, is_weekend)
        return getattr(area.crowd_levels, bucket)

    def find_by_characteristics(self, terms: Iterable[str], exclude: Iterable[str] = ()) -> List[Area]:
        """Areas whose characteristics or popular_for mention any of the terms."""
        wanted = {t.strip().lower() for t in terms if t and t.strip()}
        excluded = {e.strip().lower() for e in exclude if e}
        if not wanted:
            return []
        matches = []
        for area in self._areas:
            if area.name.lower() in excluded:
                continue
            tags = {t.lower() for t in area.characteristics} | {p.lower() for p in area.popular_for}
            if wanted & tags:
                matches.append(area)
        return matches

    def find_quiet_areas(self, hour: int, is_weekend: bool = False, near: Optional[str] = None,
                         max_crowd: int = 2) -> List[Area]:
        """Areas with crowd level <= max_crowd, restricted to neighbors of `near` if given."""
        candidates = self._areas
        if near:
            candidates = [a for a in self._areas
                          if a.name.lower() != near.strip().lower() and self.is_neighbor(a.name, near)]
        quiet = [a for a in candidates if self.crowd_level(a, hour, is_weekend) <= max_crowd]
        self.logger.debug(f"Quiet areas near {near or 'anywhere'} at {hour}:00: {[a.name for a in quiet]}")
        return quiet
