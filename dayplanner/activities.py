"""
Activity categories and the keyword lookup used to classify free-text activities.

Each category carries the Google Places venue type it searches for. Categories
without a venue type (meeting, walk, travel...) are never sent to the resolver.
"""

import re
from enum import Enum
from typing import Optional, List, Tuple

class ActivityCategory(str, Enum):
    RESTAURANT = "restaurant"
    CAFE = "cafe"
    BAKERY = "bakery"
    BAR = "bar"
    NIGHTLIFE = "nightlife"
    MUSEUM = "museum"
    ART_GALLERY = "art_gallery"
    PARK = "park"
    SHOPPING = "shopping"
    ENTERTAINMENT = "entertainment"
    SPA = "spa"
    ATTRACTION = "attraction"
    ACTIVITY = "activity"  # generic, nothing more specific known
    # Non-venue activities
    MEETING = "meeting"
    EXPLORE = "explore"
    WALK = "walk"
    TRAVEL = "travel"
    REST = "rest"

    @property
    def venue_type(self) -> Optional[str]:
        return _VENUE_TYPES.get(self)

    @property
    def is_venue(self) -> bool:
        return self.venue_type is not None

    @property
    def is_generic(self) -> bool:
        return self in (ActivityCategory.ACTIVITY, ActivityCategory.ATTRACTION)

    @property
    def specificity(self) -> int:
        return 0 if self.is_generic else 1

    @property
    def key_group(self) -> str:
        """Coarse grouping used when merging duplicate entries for one location."""
        return _KEY_GROUPS.get(self, "attraction")

    @property
    def is_food(self) -> bool:
        return self in (ActivityCategory.RESTAURANT, ActivityCategory.CAFE,
                        ActivityCategory.BAKERY, ActivityCategory.BAR)

    @classmethod
    def from_venue_type(cls, venue_type: Optional[str]) -> Optional["ActivityCategory"]:
        if not venue_type:
            return None
        venue_type = venue_type.strip().lower()
        for category, mapped in _VENUE_TYPES.items():
            if mapped == venue_type:
                return category
        try:
            return cls(venue_type)
        except ValueError:
            return None

_VENUE_TYPES = {
    ActivityCategory.RESTAURANT: "restaurant",
    ActivityCategory.CAFE: "cafe",
    ActivityCategory.BAKERY: "bakery",
    ActivityCategory.BAR: "bar",
    ActivityCategory.NIGHTLIFE: "night_club",
    ActivityCategory.MUSEUM: "museum",
    ActivityCategory.ART_GALLERY: "art_gallery",
    ActivityCategory.PARK: "park",
    ActivityCategory.SHOPPING: "shopping_mall",
    ActivityCategory.ENTERTAINMENT: "movie_theater",
    ActivityCategory.SPA: "spa",
    ActivityCategory.ATTRACTION: "tourist_attraction",
    ActivityCategory.ACTIVITY: "tourist_attraction",
}

_KEY_GROUPS = {
    ActivityCategory.RESTAURANT: "restaurant",
    ActivityCategory.BAKERY: "restaurant",
    ActivityCategory.CAFE: "cafe",
    ActivityCategory.BAR: "nightlife",
    ActivityCategory.NIGHTLIFE: "nightlife",
    ActivityCategory.MUSEUM: "museum",
    ActivityCategory.ART_GALLERY: "museum",
    ActivityCategory.PARK: "park",
    ActivityCategory.SHOPPING: "shopping",
}

# First match wins. Meetings and travel are checked before venue words so
# "meeting over lunch" stays a meeting; walks and wandering only after them.
ACTIVITY_KEYWORDS: List[Tuple[ActivityCategory, Tuple[str, ...]]] = [
    (ActivityCategory.MEETING, ("meeting", "meet up", "appointment", "call with")),
    (ActivityCategory.TRAVEL, ("arrive", "arrival", "depart", "departure", "travel", "commute", "flight", "train to")),
    (ActivityCategory.MUSEUM, ("museum", "exhibition", "history", "culture")),
    (ActivityCategory.ART_GALLERY, ("gallery", "art")),
    (ActivityCategory.CAFE, ("coffee", "cafe", "café", "espresso", "latte")),
    (ActivityCategory.BAKERY, ("dessert", "cake", "pastry", "pastries", "bakery", "ice cream")),
    (ActivityCategory.RESTAURANT, ("breakfast", "brunch", "lunch", "dinner", "supper", "meal", "eat",
                                   "food", "restaurant", "steak", "sushi", "pizza", "curry", "tea")),
    (ActivityCategory.BAR, ("drinks", "drink", "cocktail", "cocktails", "bar", "pub", "wine", "beer", "pint")),
    (ActivityCategory.NIGHTLIFE, ("club", "clubbing", "dancing", "nightclub")),
    (ActivityCategory.PARK, ("park", "garden", "gardens", "picnic", "outdoors")),
    (ActivityCategory.SHOPPING, ("shopping", "shop", "shops", "boutique", "market", "mall")),
    (ActivityCategory.ENTERTAINMENT, ("cinema", "movie", "film", "theatre", "theater", "show", "gig", "concert")),
    (ActivityCategory.SPA, ("spa", "massage")),
    (ActivityCategory.REST, ("rest", "relax", "break", "nap", "hotel")),
    (ActivityCategory.WALK, ("walk", "stroll", "wander")),
    (ActivityCategory.EXPLORE, ("explore", "look around", "sightsee")),
    (ActivityCategory.ATTRACTION, ("sights", "landmark", "tour", "attraction", "visit")),
]

# Words that say what kind of stop it is without narrowing the search
GENERIC_ACTIVITY_WORDS = {
    "breakfast", "brunch", "lunch", "dinner", "supper", "meal", "eat", "food", "restaurant",
    "coffee", "cafe", "café", "drinks", "drink", "bar", "visit", "sights", "attraction",
}

def match_activity(text: Optional[str]) -> Tuple[ActivityCategory, Optional[str]]:
    """Return the category for a phrase and the keyword that decided it."""
    if not text:
        return ActivityCategory.ACTIVITY, None
    lowered = text.lower()
    for category, keywords in ACTIVITY_KEYWORDS:
        for keyword in keywords:
            if re.search(rf"\b{re.escape(keyword)}\b", lowered):
                return category, keyword
    return ActivityCategory.ACTIVITY, None

def classify_activity(text: Optional[str]) -> ActivityCategory:
    """Classify an activity phrase by keyword lookup. Unknown text is a generic activity."""
    return match_activity(text)[0]
