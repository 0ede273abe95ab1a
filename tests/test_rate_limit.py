"""
Tests for the global daily request limiter.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi import HTTPException

from decorators.rate_limit import DailyRequestLimiter, limiter, rate_limit

@pytest.fixture
def redis_limiter():
    instance = DailyRequestLimiter()
    instance.client = MagicMock()
    instance.client.incr = AsyncMock(return_value=1)
    instance.client.expire = AsyncMock(return_value=True)
    return instance

class TestDailyRequestLimiter:

    @pytest.mark.asyncio
    async def test_unconfigured_allows_everything(self):
        assert await DailyRequestLimiter().consume("plan", 1)

    @pytest.mark.asyncio
    async def test_first_request_sets_expiry(self, redis_limiter):
        assert await redis_limiter.consume("plan", 5)
        key = redis_limiter.client.incr.await_args.args[0]
        assert key.startswith("rate_limit:api:plan:")
        redis_limiter.client.expire.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_over_limit(self, redis_limiter):
        redis_limiter.client.incr.return_value = 6
        assert not await redis_limiter.consume("plan", 5)
        redis_limiter.client.expire.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_redis_failure_fails_open(self, redis_limiter):
        redis_limiter.client.incr.side_effect = ConnectionError("down")
        assert await redis_limiter.consume("plan", 5)

    def test_seconds_until_midnight(self):
        assert 1 <= DailyRequestLimiter.seconds_until_midnight() <= 24 * 60 * 60

@pytest.mark.asyncio
async def test_decorator_raises_429(monkeypatch):
    monkeypatch.setattr(limiter, "consume", AsyncMock(return_value=False))

    @rate_limit(endpoint="plan", limit=3)
    async def handler():
        return "ok"

    with pytest.raises(HTTPException) as excinfo:
        await handler()
    assert excinfo.value.status_code == 429

@pytest.mark.asyncio
async def test_decorator_passes_through(monkeypatch):
    monkeypatch.setattr(limiter, "consume", AsyncMock(return_value=True))

    @rate_limit(endpoint="plan", limit=3)
    async def handler(value):
        return value

    assert await handler("ok") == "ok"
