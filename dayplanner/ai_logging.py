import json
import uuid
import logging
from datetime import datetime, timezone
from typing import Optional

ai_logger = logging.getLogger("dayplanner.ai")

def generate_session_id() -> str:
    return uuid.uuid4().hex[:12]

def log_ai_interaction(
    session_id: str,
    query: str,
    model: Optional[str],
    status: str,
    temperature: Optional[float] = None,
    processing_ms: Optional[int] = None,
    error: Optional[str] = None,
    activities: Optional[int] = None,
) -> None:
    """Record one model attempt as a single JSON line.

    status is one of "success", "invalid_output", "error" or "skipped".
    """
    record = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "sessionId": session_id,
        "model": model,
        "status": status,
        "temperature": temperature,
        "processingMs": processing_ms,
        "queryLength": len(query or ""),
        "query": (query or "")[:200],
    }
    if activities is not None:
        record["activities"] = activities
    if error:
        record["error"] = error[:500]
    level = logging.INFO if status in ("success", "skipped") else logging.WARNING
    ai_logger.log(level, json.dumps(record))
