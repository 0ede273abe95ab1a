import os
from typing import List, Optional
from dotenv import load_dotenv
from pydantic import BaseModel

# Load environment variables first
load_dotenv()

def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")

class Settings(BaseModel):
    """Runtime configuration read from the environment (and .env)."""
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_base_url: Optional[str] = None
    google_places_api_key: Optional[str] = None
    openweather_api_key: Optional[str] = None
    redis_url: Optional[str] = None
    city: str = "london"
    enable_weather_substitution: bool = True
    enable_geocoder_validation: bool = True
    allowed_origins: List[str] = []

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("ALLOWED_ORIGINS", "http://localhost:5173,http://localhost:3000")
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
            google_places_api_key=os.getenv("GOOGLE_PLACES_API_KEY") or None,
            openweather_api_key=os.getenv("OPENWEATHER_API_KEY") or None,
            redis_url=os.getenv("REDIS_URL") or None,
            city=os.getenv("PLANNER_CITY", "london"),
            enable_weather_substitution=_flag("ENABLE_WEATHER_SUBSTITUTION", True),
            enable_geocoder_validation=_flag("ENABLE_GEOCODER_VALIDATION", True),
            allowed_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )

    @property
    def ai_enabled(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def places_enabled(self) -> bool:
        return bool(self.google_places_api_key)

    @property
    def weather_enabled(self) -> bool:
        return self.enable_weather_substitution and bool(self.openweather_api_key)

    def feature_status(self) -> dict:
        """Which optional integrations are on. Never includes secrets."""
        return {
            "city": self.city,
            "aiProcessing": self.ai_enabled,
            "model": self.openai_model if self.ai_enabled else None,
            "placesApi": self.places_enabled,
            "weatherSubstitution": self.weather_enabled,
            "geocoderValidation": self.enable_geocoder_validation and self.places_enabled,
            "redisCache": bool(self.redis_url),
        }
