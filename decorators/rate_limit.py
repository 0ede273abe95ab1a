# decorators/rate_limit.py
import asyncio
import datetime
import functools
import logging
from typing import Optional
import redis.asyncio as aioredis
from fastapi import HTTPException

class DailyRequestLimiter:
    """Global per-endpoint daily request counter kept in Redis.

    Until configure() is called with a Redis URL, every request is allowed.
    """

    def __init__(self):
        self.client: Optional[aioredis.Redis] = None
        self.logger = logging.getLogger(__name__)

    def configure(self, redis_url: Optional[str]):
        if redis_url:
            self.client = aioredis.from_url(redis_url, decode_responses=True,
                                            socket_timeout=2, socket_connect_timeout=2)
            self.logger.info("Rate limiter connected to Redis")

    @staticmethod
    def seconds_until_midnight() -> int:
        now = datetime.datetime.now()
        tomorrow = now + datetime.timedelta(days=1)
        midnight = datetime.datetime.combine(tomorrow.date(), datetime.time.min)
        return max(1, int((midnight - now).total_seconds()))

    async def consume(self, endpoint: str, limit: int) -> bool:
        """Count one request. False once today's limit is used up."""
        if self.client is None:
            return True
        redis_key = f"rate_limit:api:{endpoint}:{datetime.date.today().isoformat()}"
        try:
            count = await asyncio.wait_for(self.client.incr(redis_key), timeout=2)
            if count == 1:
                await asyncio.wait_for(self.client.expire(redis_key, self.seconds_until_midnight()), timeout=2)
        except asyncio.TimeoutError:
            self.logger.warning(f"Rate limit check timed out for {endpoint}, allowing request")
            return True
        except Exception as e:
            self.logger.error(f"Rate limit check failed for {endpoint}: {str(e)}, allowing request")
            return True
        return count <= limit

    async def close(self):
        if self.client is not None:
            await self.client.aclose()
            self.client = None

limiter = DailyRequestLimiter()

def rate_limit(endpoint: str, limit: int):
    """
    Decorator to globally limit an API endpoint's requests per day.

    Each planning request costs several paid API calls (place search, model,
    forecast), so the daily count is shared across all users.

    Args:
        endpoint (str): Redis key identifier for the specific endpoint.
        limit (int): Maximum allowed requests per day.

    Raises:
        HTTPException: When daily limit is exceeded (HTTP 429 - Too Many Requests).
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            if not await limiter.consume(endpoint, limit):
                raise HTTPException(
                    status_code=429,
                    detail=f"Daily limit of {limit} requests exceeded for this endpoint. Try again tomorrow."
                )
            return await func(*args, **kwargs)
        return wrapper
    return decorator
