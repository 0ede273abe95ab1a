"""
Tests for environment-driven settings, the geocoding validator and AI interaction logging.
"""

import json
import logging
import asyncio
import pytest
from unittest.mock import MagicMock

from dayplanner.ai_logging import generate_session_id, log_ai_interaction
from dayplanner.config import Settings
from dayplanner.geocoding_client import GoogleGeocodingClient

from conftest import mock_session

class TestSettings:

    def test_defaults(self):
        settings = Settings.from_env()
        assert settings.city == "london"
        assert settings.openai_model == "gpt-4o-mini"
        assert not settings.ai_enabled
        assert not settings.weather_enabled, "No forecast key means no substitution"
        assert settings.places_enabled

    def test_flags(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("OPENWEATHER_API_KEY", "ow-test")
        monkeypatch.setenv("ENABLE_WEATHER_SUBSTITUTION", "false")
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
        settings = Settings.from_env()
        assert settings.ai_enabled
        assert not settings.weather_enabled
        assert settings.allowed_origins == ["https://a.example", "https://b.example"]

    def test_feature_status_hides_keys(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-secret")
        status = Settings.from_env().feature_status()
        assert status["aiProcessing"] is True
        assert "sk-secret" not in json.dumps(status)

def geocode_payload(*components):
    return {"status": "OK", "results": [{"address_components": list(components)}]}

class TestGeocodingClient:

    @pytest.mark.asyncio
    async def test_prefers_neighborhood(self, london):
        session = mock_session(geocode_payload(
            {"long_name": "London", "types": ["locality", "political"]},
            {"long_name": "Bloomsbury", "types": ["neighborhood", "political"]},
        ))
        client = GoogleGeocodingClient(session, "k", london)
        assert await client.normalize_location("Russell Square") == "Bloomsbury"
        assert session.get.call_args.kwargs["params"]["address"] == "Russell Square, London"

    @pytest.mark.asyncio
    async def test_bare_city_name_ignored(self, london):
        session = mock_session(geocode_payload({"long_name": "London", "types": ["locality", "political"]}))
        client = GoogleGeocodingClient(session, "k", london)
        assert await client.normalize_location("Somewhere Odd") == "Somewhere Odd"

    @pytest.mark.asyncio
    async def test_failure_returns_input(self, london):
        session = MagicMock()
        session.get = MagicMock(side_effect=asyncio.TimeoutError())
        client = GoogleGeocodingClient(session, "k", london)
        assert await client.normalize_location("Russell Square") == "Russell Square"

    @pytest.mark.asyncio
    async def test_zero_results_returns_input(self, london):
        client = GoogleGeocodingClient(mock_session({"status": "ZERO_RESULTS", "results": []}), "k", london)
        assert await client.normalize_location("Atlantis") == "Atlantis"

class TestAiLogging:

    def test_session_ids_are_unique(self):
        assert generate_session_id() != generate_session_id()

    def test_record_is_one_json_line(self, caplog):
        with caplog.at_level(logging.INFO, logger="dayplanner.ai"):
            log_ai_interaction("abc123", "lunch in Soho", "gpt-4o-mini", "invalid_output",
                               temperature=0.4, processing_ms=812, error="No JSON object")
        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        payload = json.loads(record.getMessage())
        assert payload["sessionId"] == "abc123"
        assert payload["status"] == "invalid_output"
        assert payload["temperature"] == 0.4
        assert payload["error"] == "No JSON object"
