"""
Turns a free-text day plan into a StructuredRequest.

The model-assisted path is tried first when a model is configured. The
deterministic parser is always available and is a pure function of the query
and city, so it can be tested without any network access.
"""

import re
import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from .activities import ActivityCategory, GENERIC_ACTIVITY_WORDS, match_activity, classify_activity
from .cities import CityConfig
from .gazetteer import Gazetteer
from .llm_parser import ModelParseResult, ModelRequestInterpreter
from .location_normalizer import LocationNormalizer
from .schema import FixedTimeEntry, Preferences, StructuredRequest
from .time_utils import (add_minutes, day_offsets, extract_time_phrase, normalize_time, parse_duration,
                         time_bucket, to_minutes)

logger = logging.getLogger(__name__)

DEFAULT_MIN_RATING = 4.0
DEFAULT_STOP_MINUTES = 60

CLAUSE_SPLIT = re.compile(
    r"[,;!?]+|(?<![Ss]t)\.(?=\s|$)|\s+(?:and then|then|and|afterwards|after that|followed by|later on|later|before|next)\s+",
    re.IGNORECASE,
)
PREPOSITION_PHRASE = re.compile(
    r"\b(?:in|at|near|from|around|by|to|on)\s+((?:[Tt]he\s+)?[A-Z][\w'&.-]*(?:\s+(?:[A-Z][\w'&.-]*|of|and|the|&))*)"
)
START_PATTERN = re.compile(
    r"\b(?:start(?:ing)?|begin(?:ning)?)(?:\s+(?:the|my)\s+day)?\s+(?:in|at|from|near)\s+([A-Za-z][\w'&. -]*?)(?=\s*(?:[,;.!?]|\band\b|\bthen\b|\bat\s+\d|$))",
    re.IGNORECASE,
)
NON_LOCATION_WORDS = {
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
    "january", "february", "march", "april", "may", "june", "july", "august",
    "september", "october", "november", "december", "i", "noon", "midnight",
}
TRAILING_CONNECTORS = re.compile(r"(?:\s+(?:of|and|the|&))+$", re.IGNORECASE)

REQUIREMENT_PATTERNS = [
    ("non-crowded", re.compile(r"\b(?:quiet|quieter|peaceful|calm|tranquil|non-crowded|not (?:too )?crowded|"
                               r"less crowded|uncrowded|avoid(?:ing)? (?:the )?crowds?|away from (?:the )?crowds?)\b")),
    ("upscale", re.compile(r"\b(?:upscale|fancy|luxury|luxurious|posh|fine dining|high-end|classy)\b")),
    ("budget", re.compile(r"\b(?:cheap|budget|affordable|inexpensive|cheap eats)\b")),
    ("outdoor", re.compile(r"\b(?:outdoors?|outside|open[- ]air|al fresco)\b")),
    ("indoor", re.compile(r"\b(?:indoors?|inside)\b")),
]

# Used when a clause names an activity but no time
CATEGORY_DEFAULT_TIMES = {
    ActivityCategory.CAFE: "10:00",
    ActivityCategory.BAKERY: "15:00",
    ActivityCategory.RESTAURANT: "12:30",
    ActivityCategory.BAR: "19:00",
    ActivityCategory.NIGHTLIFE: "22:00",
    ActivityCategory.MUSEUM: "11:00",
    ActivityCategory.ART_GALLERY: "11:00",
    ActivityCategory.PARK: "14:00",
    ActivityCategory.SHOPPING: "14:00",
    ActivityCategory.ENTERTAINMENT: "19:30",
}

def extract_requirements(query: str, gazetteer: Optional[Gazetteer] = None) -> List[str]:
    """Requirement tags mentioned anywhere in the query, in a stable order."""
    lowered = query.lower()
    found = [tag for tag, pattern in REQUIREMENT_PATTERNS if pattern.search(lowered)]
    if gazetteer:
        for area in gazetteer.areas:
            for characteristic in area.characteristics:
                term = characteristic.lower()
                if term not in found and len(term) > 3 and re.search(rf"\b{re.escape(term)}\b", lowered):
                    found.append(term)
    return found

def budget_preference(requirements: List[str]) -> Optional[str]:
    if "budget" in requirements:
        return "budget"
    if "upscale" in requirements:
        return "upscale"
    return None

def entry_order(entry: FixedTimeEntry) -> Tuple[int, int]:
    return entry.day_offset, to_minutes(entry.time)

def with_day_offsets(entries: List[FixedTimeEntry]) -> List[FixedTimeEntry]:
    """Move entries that fall after midnight onto the next day. Expects query order."""
    offsets = day_offsets([e.time for e in entries])
    return [e.model_copy(update={'day_offset': offset}) if offset != e.day_offset else e
            for e, offset in zip(entries, offsets)]

def merge_entries(entries: List[FixedTimeEntry]) -> List[FixedTimeEntry]:
    """Merge fixed-time and flexible entries that refer to the same stop.

    Entries are keyed by (location, category group). Entries of the same kind
    are all kept, so lunch and dinner in one area stay two stops. A flexible
    entry matching a fixed-time one only contributes when its category is more
    specific, and then it refines the fixed entry instead of adding a new one.
    The same goes for two flexible entries at the same time. Result is sorted
    by day and time.
    """
    merged: Dict[Tuple[str, str, int], FixedTimeEntry] = {}
    index: Dict[Tuple[str, str], Tuple[str, str, int]] = {}
    ordered = [e for e in entries if not e.is_flexible] + [e for e in entries if e.is_flexible]

    for position, entry in enumerate(ordered):
        key = (entry.location.lower(), entry.category.key_group)
        existing_key = index.get(key)
        if existing_key is None:
            slot = key + (position,)
            merged[slot] = entry
            index[key] = slot
            continue
        existing = merged[existing_key]
        same_kind = entry.is_flexible == existing.is_flexible
        if same_kind and not (entry.is_flexible and entry_order(entry) == entry_order(existing)):
            merged[key + (position,)] = entry
            continue
        if entry.category.specificity > existing.category.specificity:
            refined = {
                'category': entry.category,
                'type': entry.type,
                'search_term': entry.search_term or existing.search_term,
                'keywords': entry.keywords or existing.keywords,
                'min_rating': entry.min_rating if entry.min_rating is not None else existing.min_rating,
            }
            merged[existing_key] = existing.model_copy(update=refined)
            logger.debug(f"Refined {existing.location} from {existing.category.value} to {entry.category.value}")

    return sorted(merged.values(), key=entry_order)

def resolve_start_location(explicit: Optional[str], entries: List[FixedTimeEntry],
                           city: CityConfig, reference: Optional[datetime]) -> str:
    if explicit:
        return explicit
    fixed = [e for e in entries if not e.is_flexible]
    if fixed:
        return min(fixed, key=entry_order).location
    if entries:
        return entries[0].location
    bucket = time_bucket(reference.hour) if reference else "morning"
    return city.default_start_for(bucket)

def build_request(entries: List[FixedTimeEntry], requirements: List[str], budget: Optional[str],
                  explicit_start: Optional[str], city: CityConfig, reference: Optional[datetime],
                  notes: Optional[List[str]] = None, source: str = "deterministic") -> StructuredRequest:
    fixed_times = merge_entries(with_day_offsets(entries))
    destinations = []
    for entry in fixed_times:
        if entry.location not in destinations and entry.location.lower() != city.name.lower():
            destinations.append(entry.location)
    return StructuredRequest(
        start_location=resolve_start_location(explicit_start, fixed_times, city, reference),
        destinations=destinations,
        fixed_times=fixed_times,
        preferences=Preferences(type=budget, requirements=requirements),
        interpretation_notes=notes or [],
        source=source,
    )

class DeterministicParser:
    """Rule-based query parser. Holds only read-only city tables."""

    def __init__(self, city: CityConfig, normalizer: Optional[LocationNormalizer] = None):
        self.city = city
        self.normalizer = normalizer or LocationNormalizer(city)
        phrases = set(name.lower() for name in city.landmarks)
        phrases.update(a.name.lower() for a in city.areas)
        phrases.update(city.spelling_corrections)
        phrases.update(s.lower() for s in city.stations)
        for canonical, variations in city.colloquial_names.items():
            phrases.add(canonical.lower())
            phrases.update(v.lower() for v in variations)
        # Longest first so "covent garden market" wins over "covent garden"
        self._known = [
            (phrase, re.compile(rf"(?<![\w']){re.escape(phrase)}(?![\w'])"))
            for phrase in sorted(phrases, key=len, reverse=True)
        ]
        self._vague = [re.compile(re.escape(v.lower())) for v in city.vague_locations]

    def is_vague(self, text: str) -> bool:
        lowered = re.sub(r"^(?:somewhere|anywhere)\s+(?:in|around|near)\s+", "", text.lower().strip())
        return any(p.fullmatch(lowered) for p in self._vague)

    def find_location(self, segment: str) -> Optional[str]:
        lowered = segment.lower()
        for phrase, pattern in self._known:
            if pattern.search(lowered):
                return self.normalizer.normalize(phrase)
        for match in PREPOSITION_PHRASE.finditer(segment):
            phrase = TRAILING_CONNECTORS.sub("", match.group(1).strip().rstrip("."))
            if phrase.lower().startswith("the "):
                bare = phrase[4:]
            else:
                bare = phrase
            if not bare or bare.lower() in NON_LOCATION_WORDS:
                continue
            if self.is_vague(phrase):
                continue
            return self.normalizer.normalize(phrase)
        return None

    def find_start(self, query: str) -> Optional[str]:
        match = START_PATTERN.search(query)
        if not match:
            return None
        phrase = match.group(1).strip()
        if not phrase or self.is_vague(phrase):
            return None
        return self.find_location(f"in {phrase}") or self.normalizer.try_normalize(phrase)

    def parse(self, query: str, reference: Optional[datetime] = None) -> StructuredRequest:
        if not query or not query.strip():
            raise ValueError("Query cannot be empty")

        explicit_start = self.find_start(query)
        requirements = extract_requirements(query, self.normalizer.gazetteer)
        min_rating_floor = 4.5 if "upscale" in requirements else DEFAULT_MIN_RATING

        entries: List[FixedTimeEntry] = []
        last_location: Optional[str] = None
        for segment in (s.strip() for s in CLAUSE_SPLIT.split(query)):
            if not segment:
                continue
            category, keyword = match_activity(segment)
            location = self.find_location(segment)
            found_time = extract_time_phrase(segment)

            if START_PATTERN.search(segment) and found_time is None and category.is_generic:
                last_location = location or last_location
                continue
            if location is None and found_time is None and category.is_generic:
                continue

            if location is None:
                location = last_location or explicit_start or self.city.default_start_for(
                    time_bucket(reference.hour) if reference else "morning")

            if found_time is not None:
                phrase, explicit = found_time
                time = normalize_time(phrase, context=segment).time
                is_flexible = not explicit
            else:
                previous = entries[-1] if entries else None
                if previous is not None:
                    time = add_minutes(previous.time, (previous.duration_minutes or DEFAULT_STOP_MINUTES) + 30)
                else:
                    time = CATEGORY_DEFAULT_TIMES.get(category, "10:00")
                is_flexible = True

            search_term = keyword if keyword and keyword not in GENERIC_ACTIVITY_WORDS else None
            entries.append(FixedTimeEntry(
                location=location,
                time=time,
                category=category,
                type=category.venue_type,
                activity=keyword or category.value,
                search_term=search_term,
                keywords=[search_term] if search_term else [],
                min_rating=min_rating_floor if category.is_food else None,
                duration_minutes=parse_duration(segment),
                is_flexible=is_flexible,
            ))
            last_location = location

        request = build_request(entries, requirements, budget_preference(requirements),
                                explicit_start, self.city, reference)
        logger.info(f"🧩 Deterministic parse: {len(request.fixed_times)} entries, start {request.start_location}")
        return request

def parse_query_deterministic(query: str, city: CityConfig, reference: Optional[datetime] = None) -> StructuredRequest:
    return DeterministicParser(city).parse(query, reference)

class RequestParser:
    def __init__(self, city: CityConfig, normalizer: Optional[LocationNormalizer] = None,
                 interpreter: Optional[ModelRequestInterpreter] = None, geocoder=None):
        self.city = city
        self.normalizer = normalizer or LocationNormalizer(city)
        self.deterministic = DeterministicParser(city, self.normalizer)
        self.interpreter = interpreter
        self.geocoder = geocoder
        self.logger = logging.getLogger(__name__)

    def _resolve_model_location(self, location: str, last_location: Optional[str],
                                reference: Optional[datetime]) -> str:
        if not location or not location.strip() or self.deterministic.is_vague(location):
            return last_location or self.city.default_start_for(
                time_bucket(reference.hour) if reference else "morning")
        return self.normalizer.normalize(location)

    def from_model_result(self, query: str, result: ModelParseResult,
                          reference: Optional[datetime] = None) -> StructuredRequest:
        requirements = extract_requirements(query, self.normalizer.gazetteer)
        entries = []
        last_location = None
        for activity in result.activities:
            for requirement in activity.requirements:
                tag = requirement.strip().lower()
                if tag and tag not in requirements:
                    requirements.append(tag)

            params = activity.searchParameters
            category = classify_activity(activity.description)
            if category.is_venue:
                category = ActivityCategory.from_venue_type(params.type) or category
            location = self._resolve_model_location(activity.location, last_location, reference)
            time = normalize_time(activity.time, context=activity.description).time
            min_rating = params.minRating
            if min_rating is None and category.is_food:
                min_rating = DEFAULT_MIN_RATING

            entries.append(FixedTimeEntry(
                location=location,
                time=time,
                category=category,
                type=category.venue_type,
                activity=activity.description,
                search_term=params.searchTerm,
                keywords=params.keywords,
                min_rating=min_rating,
                require_open_now=params.requireOpenNow,
                duration_minutes=parse_duration(activity.description),
                is_flexible=activity.timeKind == "flexible",
            ))
            last_location = location

        explicit_start = None
        if result.startLocation and not self.deterministic.is_vague(result.startLocation):
            explicit_start = self.normalizer.try_normalize(result.startLocation)
        budget = result.budget or budget_preference(requirements)
        return build_request(entries, requirements, budget, explicit_start, self.city, reference,
                             notes=result.interpretationNotes, source="model")

    async def _validate_locations(self, request: StructuredRequest) -> StructuredRequest:
        """Run locations the city tables don't know through the geocoder."""
        mapping = {}
        for entry in request.fixed_times:
            if entry.location in mapping or self.normalizer.is_known(entry.location):
                continue
            mapping[entry.location] = await self.geocoder.normalize_location(entry.location)
        changed = {k: v for k, v in mapping.items() if v and v != k}
        if not changed:
            return request
        fixed_times = [e.model_copy(update={'location': changed.get(e.location, e.location)})
                       for e in request.fixed_times]
        destinations = []
        for d in request.destinations:
            name = changed.get(d, d)
            if name not in destinations:
                destinations.append(name)
        return request.model_copy(update={
            'fixed_times': fixed_times,
            'destinations': destinations,
            'start_location': changed.get(request.start_location, request.start_location),
        })

    async def parse(self, query: str, reference: Optional[datetime] = None) -> StructuredRequest:
        if not query or not query.strip():
            raise ValueError("Query cannot be empty")

        request = None
        if self.interpreter is not None:
            result = await self.interpreter.interpret(query, reference or datetime.now())
            if result is not None:
                request = self.from_model_result(query, result, reference)
                if not any(e.category.is_venue for e in request.fixed_times):
                    self.logger.warning("Model interpretation has no venue stops, using deterministic parser")
                    request = None

        if request is None:
            request = self.deterministic.parse(query, reference)

        if self.geocoder is not None:
            request = await self._validate_locations(request)
        return request
