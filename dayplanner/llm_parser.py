"""
Generative-model assist for request parsing.

The model is asked once per attempt for a JSON interpretation of the query.
Attempts run in order with increasing temperature and stop at the first
response that validates. Anything else (no credentials, timeouts, API errors,
malformed JSON) returns None so the caller can use the deterministic parser.
"""

import re
import json
import time
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Literal, Optional, Sequence
from langchain_openai import ChatOpenAI
from langchain_core.prompts import PromptTemplate
from langchain_core.output_parsers import PydanticOutputParser
from pydantic import BaseModel, Field, ValidationError, field_validator

from .ai_logging import generate_session_id, log_ai_interaction
from .cities import CityConfig
from .exceptions import ModelOutputInvalid

logger = logging.getLogger(__name__)

class ModelSearchParameters(BaseModel):
    searchTerm: Optional[str] = None
    type: Optional[str] = None
    keywords: List[str] = []
    minRating: Optional[float] = Field(default=None, ge=0, le=5)
    requireOpenNow: bool = False

class ModelActivity(BaseModel):
    description: str = Field(min_length=1)
    location: str
    time: str
    timeKind: Literal["fixed", "flexible"] = "fixed"
    searchParameters: ModelSearchParameters = ModelSearchParameters()
    requirements: List[str] = []
    confidence: float = Field(ge=0, le=1)

class ModelParseResult(BaseModel):
    activities: List[ModelActivity]
    startLocation: Optional[str] = None
    budget: Optional[Literal["budget", "moderate", "upscale"]] = None
    interpretationNotes: List[str] = []

    @field_validator('interpretationNotes', mode='before')
    @classmethod
    def wrap_single_note(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

@dataclass(frozen=True)
class ModelAttempt:
    temperature: float
    timeout: float  # seconds

DEFAULT_ATTEMPTS = (
    ModelAttempt(temperature=0.2, timeout=20),
    ModelAttempt(temperature=0.4, timeout=20),
    ModelAttempt(temperature=0.7, timeout=25),
)

output_parser = PydanticOutputParser(pydantic_object=ModelParseResult)

def create_parse_prompt() -> PromptTemplate:
    """Prompt asking the model to break a day-plan request into activities."""
    return PromptTemplate(
        template="""You turn a request for a day out in {city} into structured activities.

DATE: {date}
KNOWN AREAS: {areas}

REQUEST: "{query}"

RULES:
• One activity per thing the user wants to do, in the order they happen
• time: 24h "HH:MM" when the user gives a clock time ("at 8" for dinner means 20:00),
  otherwise a period word (morning, lunch, afternoon, evening, night) with timeKind "flexible"
• location: the area, street or venue in {city} the user named; use a KNOWN AREA name when one fits
• searchParameters.type: a Google Places type (restaurant, cafe, bar, museum, park, ...);
  leave it empty for meetings, walks, travel and rest
• requirements: short tags such as "non-crowded", "outdoor", "upscale", "budget"
• confidence: 0-1, how sure you are about this activity
• startLocation: where the day starts if the user says so
• Do not invent activities the user did not ask for

{format_instructions}
""",
        input_variables=["query", "city", "date", "areas"],
        partial_variables={"format_instructions": output_parser.get_format_instructions()},
    )

JSON_PATTERNS = [
    r'```json\s*(\{.*\})\s*```',
    r'```\s*(\{.*\})\s*```',
    r'(\{.*\})',
]

def extract_json(response_text: str) -> Optional[str]:
    """Pull the first parseable JSON object out of a model response."""
    for pattern in JSON_PATTERNS:
        for match in re.findall(pattern, response_text, re.DOTALL):
            cleaned = re.sub(r',\s*([}\]])', r'\1', match)
            try:
                json.loads(cleaned)
                return cleaned
            except json.JSONDecodeError:
                continue
    return None

def validate_model_output(response_text: str) -> ModelParseResult:
    """Validate a raw response against ModelParseResult. Raises ModelOutputInvalid."""
    payload = extract_json(response_text or "")
    if payload is None:
        raise ModelOutputInvalid("No JSON object in model response")
    try:
        result = ModelParseResult.model_validate(json.loads(payload))
    except ValidationError as e:
        raise ModelOutputInvalid(f"Schema validation failed: {e.error_count()} errors") from e
    if not result.activities:
        raise ModelOutputInvalid("Model returned no activities")
    return result

class ChatModelClient:
    """Calls an OpenAI-compatible chat model, one ChatOpenAI per attempt setting."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", base_url: Optional[str] = None,
                 max_tokens: int = 1500):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.max_tokens = max_tokens
        self._llms: Dict[ModelAttempt, ChatOpenAI] = {}

    def _llm(self, attempt: ModelAttempt) -> ChatOpenAI:
        if attempt not in self._llms:
            self._llms[attempt] = ChatOpenAI(
                api_key=self.api_key,
                model_name=self.model,
                temperature=attempt.temperature,
                max_tokens=self.max_tokens,
                request_timeout=attempt.timeout,
                max_retries=0,
                **({"base_url": self.base_url} if self.base_url else {})
            )
        return self._llms[attempt]

    async def generate(self, prompt: str, attempt: ModelAttempt) -> str:
        result = await asyncio.wait_for(self._llm(attempt).ainvoke(prompt), timeout=attempt.timeout)
        return result.content if isinstance(result.content, str) else str(result.content)

class ModelRequestInterpreter:
    def __init__(self, client: Optional[ChatModelClient], city: CityConfig,
                 attempts: Sequence[ModelAttempt] = DEFAULT_ATTEMPTS):
        self.client = client
        self.city = city
        self.attempts = list(attempts)
        self.prompt = create_parse_prompt()
        self.logger = logging.getLogger(__name__)

    async def interpret(self, query: str, reference: datetime) -> Optional[ModelParseResult]:
        session_id = generate_session_id()
        model_name = getattr(self.client, "model", None)
        if self.client is None:
            log_ai_interaction(session_id, query, None, "skipped", error="no model credentials")
            return None

        prompt = self.prompt.format(
            query=query,
            city=self.city.name,
            date=reference.strftime("%A %Y-%m-%d"),
            areas=", ".join(a.name for a in self.city.areas),
        )
        for number, attempt in enumerate(self.attempts, start=1):
            start = time.time()
            try:
                raw = await self.client.generate(prompt, attempt)
                result = validate_model_output(raw)
                elapsed = int((time.time() - start) * 1000)
                log_ai_interaction(session_id, query, model_name, "success", attempt.temperature,
                                   elapsed, activities=len(result.activities))
                self.logger.info(f"🤖 Model parsed query on attempt {number} "
                                 f"(temperature {attempt.temperature}) in {elapsed}ms")
                return result
            except ModelOutputInvalid as e:
                log_ai_interaction(session_id, query, model_name, "invalid_output", attempt.temperature,
                                   int((time.time() - start) * 1000), error=str(e))
            except asyncio.TimeoutError:
                log_ai_interaction(session_id, query, model_name, "error", attempt.temperature,
                                   int((time.time() - start) * 1000), error="timeout")
            except Exception as e:
                log_ai_interaction(session_id, query, model_name, "error", attempt.temperature,
                                   int((time.time() - start) * 1000), error=str(e))
            self.logger.warning(f"⚠️ Model attempt {number}/{len(self.attempts)} failed")
        self.logger.warning("All model attempts failed, using deterministic parser")
        return None
