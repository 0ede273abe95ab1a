from typing import Dict, List, Optional

class PlannerError(Exception):
    """Base class for errors raised while building an itinerary."""
    kind = "planner_error"

    def to_detail(self) -> Dict:
        return {"error": self.kind, "message": str(self), "suggestions": {}}

class UnresolvedLocation(PlannerError):
    """No venue could be found for a location. Carries ranked suggestions."""
    kind = "unresolved_location"

    def __init__(self, location: str, suggestions: Optional[List[str]] = None):
        self.location = location
        self.suggestions = suggestions or []
        message = f"Could not find {location}"
        if self.suggestions:
            message += f". Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_detail(self) -> Dict:
        return {"error": self.kind, "message": str(self), "suggestions": {self.location: self.suggestions}}

class InsufficientStops(PlannerError):
    """Fewer than two venues resolved, so there is no itinerary worth returning."""
    kind = "insufficient_stops"

    def __init__(self, found: int, unresolved: Optional[List[UnresolvedLocation]] = None):
        self.found = found
        self.unresolved = unresolved or []
        message = f"Not enough valid locations found (resolved {found}, need at least 2)"
        if self.unresolved:
            message += ". " + "; ".join(str(u) for u in self.unresolved)
        super().__init__(message)

    @property
    def suggestions(self) -> Dict[str, List[str]]:
        return {u.location: u.suggestions for u in self.unresolved}

    def to_detail(self) -> Dict:
        return {"error": self.kind, "message": str(self), "suggestions": self.suggestions}

class InvalidTimeFormat(PlannerError):
    kind = "invalid_time_format"

    def __init__(self, phrase: str):
        self.phrase = phrase
        super().__init__(f"Could not parse time expression '{phrase}'")

class ModelOutputInvalid(PlannerError):
    kind = "model_output_invalid"

class ExternalServiceUnavailable(PlannerError):
    kind = "external_service_unavailable"

    def __init__(self, service: str, reason: str = ""):
        self.service = service
        super().__init__(f"{service} unavailable{': ' + reason if reason else ''}")
