import re
import math
import logging
from difflib import SequenceMatcher, get_close_matches
from typing import List, Optional, Tuple

from .activities import classify_activity
from .cities import CityConfig
from .gazetteer import Gazetteer

AREA_RESULT_TAGS = {"sublocality", "sublocality_level_1", "neighborhood", "political", "locality"}
STOP_WORDS = {"the", "and", "of", "in", "at", "near", "on", "for"}
LOWERCASE_WORDS = {"of", "the", "and", "on", "in", "at", "by", "upon"}
FUZZY_CUTOFF = 0.85

class LocationNormalizer:
    """Canonicalizes location names for one city and checks search results against them."""

    def __init__(self, city: CityConfig, gazetteer: Optional[Gazetteer] = None):
        self.city = city
        self.gazetteer = gazetteer or Gazetteer(city.areas)
        self.logger = logging.getLogger(__name__)
        self._colloquial = {}
        for canonical, variations in city.colloquial_names.items():
            self._colloquial[canonical.lower()] = canonical
            for variation in variations:
                self._colloquial.setdefault(variation.lower(), canonical)
        self._landmarks = {l.lower(): l for l in city.landmarks}
        self._stations = {s.lower(): s for s in city.stations}
        self._fuzzy_targets = {}
        for name in self.gazetteer.names() + list(city.landmarks):
            self._fuzzy_targets.setdefault(name.lower(), name)

    def _lookup(self, key: str) -> Optional[str]:
        if key in self._colloquial:
            return self._colloquial[key]
        if key in self.city.spelling_corrections:
            return self.city.spelling_corrections[key]
        area = self.gazetteer.get(key)
        if area:
            return area.name
        return self._landmarks.get(key)

    def _station_name(self, key: str) -> Optional[str]:
        base = re.sub(r"\s+(?:station|stn)$", "", key)
        station = self._stations.get(base)
        return f"{station} Station" if station else None

    @staticmethod
    def _capitalize_word(word: str, first: bool) -> str:
        if not first and word.lower() in LOWERCASE_WORDS:
            return word.lower()
        parts = word.split("-")
        out = []
        for part in parts:
            if not part:
                out.append(part)
            elif any(c.isupper() for c in part[1:]):
                # Keep deliberate inner capitals like "McDonald" or "SoHo"
                out.append(part[0].upper() + part[1:])
            else:
                out.append(part[0].upper() + part[1:].lower())
        return "-".join(out)

    def normalize(self, name: str) -> str:
        """Return the canonical form of a location name.

        Raises ValueError on empty input.
        """
        if name is None or not str(name).strip():
            raise ValueError("Location name cannot be empty")
        trimmed = re.sub(r"\s+", " ", str(name).strip())
        key = trimmed.lower()

        for candidate in (key, key.replace("-", " ")):
            found = self._lookup(candidate)
            if found:
                if found.lower() != key:
                    self.logger.debug(f"Matched location: '{name}' -> '{found}'")
                return found

        station = self._station_name(key)
        if station:
            return station

        close = get_close_matches(key, list(self._fuzzy_targets), n=1, cutoff=FUZZY_CUTOFF)
        if close:
            corrected = self._fuzzy_targets[close[0]]
            self.logger.info(f"🔤 Corrected location spelling: '{name}' -> '{corrected}'")
            return corrected

        words = trimmed.split(" ")
        return " ".join(self._capitalize_word(w, i == 0) for i, w in enumerate(words))

    def is_known(self, name: Optional[str]) -> bool:
        """True when the name is an area, landmark, station or table entry for this city."""
        if not name or not name.strip():
            return False
        key = re.sub(r"\s+", " ", name.strip().lower())
        return self._lookup(key) is not None or self._station_name(key) is not None

    def try_normalize(self, name: Optional[str]) -> Optional[str]:
        try:
            return self.normalize(name)
        except ValueError:
            return None

    @staticmethod
    def _significant_words(text: str) -> List[str]:
        return [w for w in re.findall(r"[a-z0-9']+", text.lower()) if len(w) > 2 and w not in STOP_WORDS]

    def verify_match(self, requested: str, returned: str, result_tags: Optional[List[str]] = None) -> bool:
        """Decide whether a search result plausibly is the place that was asked for."""
        if not requested or not returned:
            return False
        req = requested.strip().lower()
        ret = returned.strip().lower()
        if req == ret:
            return True
        if req and ret and (req in ret or ret in req):
            return True

        station = self._station_name(req)
        if station:
            base = station[:-len(" Station")].lower()
            if base in ret:
                return True

        req_words = self._significant_words(req)
        ret_words = self._significant_words(ret)

        def overlaps(word: str) -> bool:
            return any(word in other or other in word for other in ret_words)

        if len(req_words) >= 2:
            needed = math.ceil(len(req_words) / 2)
            if sum(1 for w in req_words if overlaps(w)) >= needed:
                return True

        tags = {t.lower() for t in (result_tags or [])}
        if tags & AREA_RESULT_TAGS:
            if any(len(w) > 3 and overlaps(w) for w in req_words):
                return True
            area = self.gazetteer.get(self.try_normalize(requested))
            if area:
                if area.name.lower() in ret:
                    return True
                if any(n.lower() in ret for n in area.neighbors):
                    self.logger.info(f"'{returned}' accepted as neighbor of '{area.name}'")
                    return True

        self.logger.debug(f"Location mismatch: requested '{requested}', got '{returned}'")
        return False

    def _candidates(self) -> List[Tuple[str, List[str]]]:
        """(display name, match keys) in source order: colloquial table, areas, neighbors."""
        seen = set()
        candidates = []

        def add(display: str, keys: List[str]):
            if display.lower() in seen:
                return
            seen.add(display.lower())
            candidates.append((display, [display.lower()] + [k.lower() for k in keys]))

        for canonical, variations in self.city.colloquial_names.items():
            add(canonical, variations)
        for area in self.gazetteer.areas:
            add(area.name, [])
        for area in self.gazetteer.areas:
            for neighbor in area.neighbors:
                add(neighbor, [])
        return candidates

    @staticmethod
    def _match_tier(query: str, key: str) -> Optional[int]:
        if key == query:
            return 3
        if key.startswith(query):
            return 2
        if query in key:
            return 1
        if key in query:
            return 0
        return None

    def suggest_alternatives(self, name: Optional[str], limit: int = 3) -> List[str]:
        """Up to `limit` known locations resembling `name`, best match first."""
        if not name or not str(name).strip():
            return list(self.city.popular_defaults[:limit])
        query = re.sub(r"\s+", " ", str(name).strip().lower())

        scored = []
        for index, (display, keys) in enumerate(self._candidates()):
            tiers = [t for t in (self._match_tier(query, k) for k in keys) if t is not None]
            if tiers:
                scored.append((-max(tiers), index, display))
            else:
                ratio = max(SequenceMatcher(None, query, k).ratio() for k in keys)
                if ratio >= 0.6:
                    # Below every containment tier, closer spellings first
                    scored.append((1 - ratio, index, display))

        scored.sort(key=lambda s: (s[0], s[1]))
        suggestions = [display for _, _, display in scored[:limit]]
        if not suggestions:
            return list(self.city.popular_defaults[:limit])
        return suggestions

    def map_activity_to_place_type(self, activity: Optional[str]) -> Optional[str]:
        return classify_activity(activity).venue_type
