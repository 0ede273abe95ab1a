"""
Time phrase normalization.

Every time value in the planner goes through normalize_time() and is carried as
a 24-hour "HH:MM" string until the itinerary assembler anchors it to a date.
"""

import re
import logging
from typing import List, NamedTuple, Optional, Tuple

from .exceptions import InvalidTimeFormat

logger = logging.getLogger(__name__)

DEFAULT_TIME = "12:00"
MINUTES_PER_DAY = 24 * 60
EARLY_HOURS_END = 6  # hour before which a late stop rolls into the next day

_MERIDIEM = r"(a\.?m\.?|p\.?m\.?)"
HHMM_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{1,2})\s*$")
AROUND_PATTERN = re.compile(rf"\baround\s+(\d{{1,2}})(?::(\d{{2}}))?\s*{_MERIDIEM}?(?![\w:])", re.IGNORECASE)
MERIDIEM_PATTERN = re.compile(rf"\b(\d{{1,2}})(?::(\d{{2}}))?\s*{_MERIDIEM}(?!\w)", re.IGNORECASE)
BARE_HOUR_PATTERN = re.compile(r"(?:\b(?:at|around|by|from|until|till)\s+|^\s*)(\d{1,2})(?::(\d{2}))?(?![\w:])", re.IGNORECASE)

# Checked in order, so "early evening" is an evening and "afternoon tea" an afternoon.
PERIOD_KEYWORDS = [
    (("midnight",), "00:00"),
    (("noon", "midday", "lunch", "lunchtime"), "12:00"),
    (("afternoon", "tea"), "15:00"),
    (("evening", "dinner", "sunset", "supper"), "18:00"),
    (("night", "late", "drinks", "pub", "bar", "club"), "21:00"),
    (("morning", "breakfast", "brunch", "dawn", "early"), "09:00"),
]

EVENING_CONTEXT = ("dinner", "steak", "evening", "supper", "drinks", "cocktails", "night", "pub", "bar", "show")
MORNING_CONTEXT = ("breakfast", "coffee", "morning", "brunch", "pastries")
AFTERNOON_CONTEXT = ("lunch", "afternoon")

DURATION_EXPRESSIONS = [
    (re.compile(r"\bhalf an hour\b"), 30),
    (re.compile(r"\b(?:quick|brief|short)\b"), 30),
    (re.compile(r"\bcouple (?:of )?hours\b"), 120),
    (re.compile(r"\bfew hours\b"), 180),
    (re.compile(r"\ball (?:day|afternoon)\b"), 240),
    (re.compile(r"\b(?:an|one) hour\b"), 60),
]
NUMERIC_DURATION = re.compile(r"\b(?:for\s+)?(\d+(?:\.\d+)?)\s*(hours?|hrs?|minutes?|mins?)\b")

class TimeParseResult(NamedTuple):
    time: str
    warning: Optional[str] = None

def _has_word(text: str, words) -> bool:
    return any(re.search(rf"\b{re.escape(word)}\b", text) for word in words)

def _format(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"

def _apply_meridiem(hour: int, meridiem: str) -> int:
    meridiem = meridiem.lower().replace(".", "")
    if meridiem == "am":
        return 0 if hour == 12 else hour
    return hour if hour == 12 else hour + 12

def _infer_meridiem(hour: int, context: str) -> int:
    """Guess AM/PM for a bare hour from the words around it."""
    if hour < 1 or hour > 11:
        return hour
    if _has_word(context, EVENING_CONTEXT):
        return hour + 12
    if _has_word(context, MORNING_CONTEXT):
        return hour
    if _has_word(context, AFTERNOON_CONTEXT):
        return hour + 12 if hour <= 5 else hour
    return hour + 12

def _validate(hour: int, minute: int, phrase: str) -> str:
    if hour > 23 or minute > 59:
        raise InvalidTimeFormat(phrase)
    return _format(hour, minute)

def _match_cascade(phrase: str, context: str) -> str:
    text = phrase.strip().lower()

    match = HHMM_PATTERN.match(text)
    if match:
        hour = min(max(int(match.group(1)), 0), 23)
        minute = min(max(int(match.group(2)), 0), 59)
        return _format(hour, minute)

    if not re.search(r"\d", text):
        for keywords, value in PERIOD_KEYWORDS:
            if _has_word(text, keywords):
                return value
        raise InvalidTimeFormat(phrase)

    match = AROUND_PATTERN.search(text)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2) or 0)
        if match.group(3):
            if not 1 <= hour <= 12:
                raise InvalidTimeFormat(phrase)
            hour = _apply_meridiem(hour, match.group(3))
        elif 1 <= hour <= 11:
            hour += 12
        return _validate(hour, minute, phrase)

    match = MERIDIEM_PATTERN.search(text)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2) or 0)
        if not 1 <= hour <= 12:
            raise InvalidTimeFormat(phrase)
        return _validate(_apply_meridiem(hour, match.group(3)), minute, phrase)

    match = BARE_HOUR_PATTERN.search(text)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2) or 0)
        return _validate(_infer_meridiem(hour, f"{context} {text}"), minute, phrase)

    raise InvalidTimeFormat(phrase)

def normalize_time(phrase: Optional[str], context: Optional[str] = None) -> TimeParseResult:
    """Convert a free-text time phrase to "HH:MM".

    Args:
        phrase: the time mention, e.g. "8", "around 7:30", "1pm", "lunch".
        context: the surrounding clause, used to guess AM/PM for bare hours.

    Never raises. Unparseable input yields 12:00 with a warning.
    """
    try:
        if not phrase or not phrase.strip():
            raise InvalidTimeFormat(phrase or "")
        return TimeParseResult(_match_cascade(phrase, (context or "").lower()))
    except InvalidTimeFormat as e:
        logger.warning(f"⚠️ {e}, defaulting to {DEFAULT_TIME}")
        return TimeParseResult(DEFAULT_TIME, str(e))

def extract_time_phrase(text: str) -> Optional[Tuple[str, bool]]:
    """Find the first time mention in a clause.

    Returns (phrase, is_explicit) where is_explicit is False for period words
    like "lunch" or "evening", or None if the clause mentions no time at all.
    """
    for pattern in (AROUND_PATTERN, MERIDIEM_PATTERN):
        match = pattern.search(text)
        if match:
            return match.group(0).strip(), True
    match = re.search(r"\b(?:at|by|from)\s+\d{1,2}(?::\d{2})?(?![\w:])", text, re.IGNORECASE)
    if match:
        return match.group(0).strip(), True
    match = re.search(r"\b\d{1,2}:\d{2}\b", text)
    if match:
        return match.group(0), True
    lowered = text.lower()
    if _has_word(lowered, ("noon", "midday", "midnight")):
        return ("midnight" if "midnight" in lowered else "noon"), True
    for keywords, _ in PERIOD_KEYWORDS:
        for keyword in keywords:
            if _has_word(lowered, (keyword,)):
                return keyword, False
    return None

def to_minutes(time_str: str) -> int:
    hours, minutes = time_str.split(":")
    return int(hours) * 60 + int(minutes)

def from_minutes(total: int) -> str:
    total %= MINUTES_PER_DAY
    return _format(total // 60, total % 60)

def add_minutes(time_str: str, minutes: int) -> str:
    return from_minutes(to_minutes(time_str) + minutes)

def minutes_between(start: str, end: str) -> int:
    """Minutes from start to end, rolling end into the next day when it is earlier."""
    diff = to_minutes(end) - to_minutes(start)
    if diff < 0:
        diff += MINUTES_PER_DAY
    return diff

def day_offsets(times: List[str]) -> List[int]:
    """Day offset for each "HH:MM" in the order the user gave them.

    An early-hours time that comes after a later one, as in "dinner at 9pm
    then drinks at 1am", belongs to the next day, and so does everything after it.
    """
    offsets = []
    offset = 0
    previous = None
    for time_str in times:
        if offset == 0 and previous is not None and to_minutes(time_str) < EARLY_HOURS_END * 60:
            if to_minutes(previous) + minutes_between(previous, time_str) >= MINUTES_PER_DAY:
                offset = 1
        offsets.append(offset)
        previous = time_str
    return offsets

def time_bucket(hour: int) -> str:
    if hour < 12:
        return "morning"
    if hour < 14:
        return "midday"
    if hour < 17:
        return "afternoon"
    return "evening"

def crowd_bucket(hour: int, is_weekend: bool = False) -> str:
    """Bucket used for gazetteer crowd levels. Weekends override the time of day."""
    if is_weekend:
        return "weekend"
    if hour < 12:
        return "morning"
    if hour < 17:
        return "afternoon"
    return "evening"

def parse_duration(text: Optional[str]) -> Optional[int]:
    """Minutes implied by phrases like "quick coffee" or "for 2 hours"."""
    if not text:
        return None
    lowered = text.lower()
    match = NUMERIC_DURATION.search(lowered)
    if match:
        value = float(match.group(1))
        if match.group(2).startswith(("hour", "hr")):
            value *= 60
        return int(round(value))
    for pattern, minutes in DURATION_EXPRESSIONS:
        if pattern.search(lowered):
            return minutes
    return None
