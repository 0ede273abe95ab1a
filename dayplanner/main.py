import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Any, Optional
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, field_validator
from dateutil import parser as date_parser
import aiohttp

from .cache import create_cache
from .cities import get_city_config
from .config import Settings
from .exceptions import PlannerError
from .gazetteer import Gazetteer
from .geocoding_client import GoogleGeocodingClient
from .itinerary import ItineraryBuilder
from .llm_parser import ChatModelClient, ModelRequestInterpreter
from .location_normalizer import LocationNormalizer
from .places_client import GooglePlacesClient, PLACES_CACHE_TTL
from .request_parser import RequestParser
from .scheduler import GapFillingScheduler
from .schema import Itinerary, PlanResponse, PlannedStop, PlannedTravel
from .weather import FORECAST_CACHE_TTL, WeatherAwareSubstitution, WeatherClient
from decorators.rate_limit import limiter, rate_limit

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Shared resources
app_state: Dict[str, Any] = {}

def create_builder(settings: Settings, session: aiohttp.ClientSession) -> Dict[str, Any]:
    """Wire the planning pipeline for the configured city."""
    city = get_city_config(settings.city)
    gazetteer = Gazetteer(city.areas)
    normalizer = LocationNormalizer(city, gazetteer)

    places_client = GooglePlacesClient(
        session=session,
        api_key=settings.google_places_api_key,
        city=city,
        cache=create_cache(PLACES_CACHE_TTL, settings.redis_url, prefix="places"),
    )

    model_client = None
    if settings.ai_enabled:
        model_client = ChatModelClient(settings.openai_api_key, settings.openai_model, settings.openai_base_url)
    interpreter = ModelRequestInterpreter(model_client, city)

    geocoder = None
    if settings.enable_geocoder_validation and settings.places_enabled:
        geocoder = GoogleGeocodingClient(session, settings.google_places_api_key, city)

    weather_client = None
    if settings.weather_enabled:
        weather_client = WeatherClient(
            session,
            settings.openweather_api_key,
            cache=create_cache(FORECAST_CACHE_TTL, settings.redis_url, prefix="weather"),
        )

    builder = ItineraryBuilder(
        city=city,
        parser=RequestParser(city, normalizer, interpreter=interpreter, geocoder=geocoder),
        resolver=places_client,
        scheduler=GapFillingScheduler(places_client, gazetteer),
        normalizer=normalizer,
        weather=WeatherAwareSubstitution(weather_client, enabled=settings.weather_enabled),
    )
    return {
        "builder": builder,
        "places_client": places_client,
        "weather_client": weather_client,
    }

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage startup and shutdown events for the application."""
    logging.info("Application lifespan: Startup sequence starting...")
    client_session = None
    try:
        settings = Settings.from_env()
        client_session = aiohttp.ClientSession()
        app_state["settings"] = settings
        app_state["client_session"] = client_session
        app_state.update(create_builder(settings, client_session))
        limiter.configure(settings.redis_url)
        logging.info(f"Application lifespan: Startup sequence completed. Features: {settings.feature_status()}")
        yield
    except Exception:
        logging.exception("Application lifespan: CRITICAL_ERROR during startup sequence.")
        raise
    finally:
        logging.info("Application lifespan: Shutdown sequence starting...")
        for name in ("places_client", "weather_client"):
            client = app_state.get(name)
            if client:
                try:
                    await client.close()
                    logging.info(f"Application lifespan: {name} closed.")
                except Exception:
                    logging.exception(f"Application lifespan: Error closing {name}.")
        try:
            await limiter.close()
        except Exception:
            logging.exception("Application lifespan: Error closing rate limiter.")
        if client_session and not client_session.closed:
            try:
                await client_session.close()
                logging.info("Application lifespan: Main aiohttp.ClientSession closed.")
            except Exception:
                logging.exception("Application lifespan: Error closing main aiohttp.ClientSession.")
        logging.info("Application lifespan: Shutdown sequence completed.")

app = FastAPI(
    title="Day Planner Backend",
    description="Turns a free-text description of a day into a timed itinerary of real venues",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Settings.from_env().allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600
)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies return 400. 422 is used for planning failures."""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

class PlanRequest(BaseModel):
    query: str
    date: Optional[str] = None       # YYYY-MM-DD format
    startTime: Optional[str] = None  # HH:MM format

    @field_validator('query')
    @classmethod
    def validate_query(cls, v):
        if not v or not v.strip():
            raise ValueError('Query cannot be empty')
        return v.strip()

    @field_validator('date')
    @classmethod
    def validate_date_format(cls, v):
        if v is not None:
            try:
                return date_parser.parse(v).date().isoformat()
            except (ValueError, OverflowError):
                raise ValueError('Date must be in YYYY-MM-DD format')
        return v

    @field_validator('startTime')
    @classmethod
    def validate_start_time(cls, v):
        if v is not None:
            parts = v.split(':')
            if len(parts) != 2 or not all(p.isdigit() for p in parts):
                raise ValueError('startTime must be in HH:MM format')
            if int(parts[0]) > 23 or int(parts[1]) > 59:
                raise ValueError('startTime must be a valid 24-hour time')
        return v

def to_plan_response(itinerary: Itinerary) -> PlanResponse:
    places = []
    for stop in itinerary.places:
        venue = stop.venue
        places.append(PlannedStop(
            name=venue.name,
            placeId=venue.place_id,
            address=venue.address,
            location=venue.location,
            types=venue.types,
            rating=venue.rating,
            time=stop.time.isoformat(),
            isFixed=stop.is_fixed,
            activity=stop.activity,
            category=stop.category.value,
            durationMinutes=stop.duration_minutes,
            area=stop.area,
            weatherSuitable=stop.weather_suitable,
            indoorAlternatives=[{"name": p.name, "placeId": p.place_id, "address": p.address}
                                for p in stop.indoor_alternatives],
        ))
    travel = [
        PlannedTravel(
            from_name=segment.from_name,
            to=segment.to,
            duration=segment.duration_minutes,
            arrivalTime=segment.arrival_time.isoformat(),
        )
        for segment in itinerary.travel_times
    ]
    return PlanResponse(
        query=itinerary.query,
        city=itinerary.city,
        startLocation=itinerary.start_location,
        places=places,
        travelTimes=travel,
        created=itinerary.created.isoformat(),
        warnings=itinerary.warnings,
    )

@app.post("/plan", response_model=PlanResponse, response_model_by_alias=True)
@rate_limit(endpoint="plan", limit=200)
async def plan(request: PlanRequest):
    builder: Optional[ItineraryBuilder] = app_state.get("builder")
    if builder is None:
        raise HTTPException(status_code=503, detail="Planner is not available")
    plan_date = date_parser.parse(request.date).date() if request.date else None
    try:
        logging.info(f"🎯 Plan endpoint called: '{request.query}'")
        itinerary = await builder.build(request.query, plan_date=plan_date, start_time=request.startTime)
        return to_plan_response(itinerary)
    except PlannerError as e:
        logging.warning(f"Plan failed: {e}")
        raise HTTPException(status_code=422, detail=e.to_detail())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logging.exception("Error during /plan")
        raise HTTPException(status_code=500, detail=f"Failed to build itinerary: {str(e)}")

@app.get("/config/status")
async def config_status():
    """Which optional integrations are enabled. No secrets."""
    settings: Settings = app_state.get("settings") or Settings.from_env()
    return settings.feature_status()

@app.get("/_ah/health")
async def health_check():
    """Health check endpoint for GCP"""
    return {"status": "healthy"}

@app.get("/")
async def home():
    return {
        "message": "🗺️ Welcome to the Day Planner API!",
        "docs_url": "/docs",
        "openapi_url": "/openapi.json"
    }
