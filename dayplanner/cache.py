import json
import time
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
import redis.asyncio as aioredis

@dataclass
class CacheEntry:
    value: Any
    timestamp: float

def coordinate_key(prefix: str, lat: float, lng: float) -> str:
    """Cache key for a coordinate pair rounded to 2 decimals (~1 km) to raise hit rates."""
    return f"{prefix}:{round(lat, 2):.2f},{round(lng, 2):.2f}"

class TTLCache:
    """In-process cache. Entries older than the TTL are evicted when read."""

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self.logger = logging.getLogger(__name__)

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp > self.ttl_seconds:
            self._entries.pop(key, None)
            self.logger.debug(f"Cache entry expired: {key}")
            return None
        return entry.value

    async def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(value=value, timestamp=self._clock())

    async def close(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

class RedisTTLCache:
    """Redis-backed cache with the same interface as TTLCache.

    Values are stored as JSON {"value", "timestamp"} so the age check on read
    works the same way; Redis expiry removes entries nobody reads again.
    Redis errors are logged and treated as a cache miss.
    """

    def __init__(self, redis_url: str, ttl_seconds: int, prefix: str = "dayplanner",
                 clock: Callable[[], float] = time.time, timeout: float = 2.0):
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.prefix = prefix
        self.timeout = timeout
        self._clock = clock
        self.client: Optional[aioredis.Redis] = None
        self._connection_lock = asyncio.Lock()
        self.logger = logging.getLogger(__name__)

    async def get_client(self) -> aioredis.Redis:
        if self.client is None:
            async with self._connection_lock:
                if self.client is None:
                    self.client = aioredis.from_url(
                        self.redis_url,
                        encoding="utf-8",
                        decode_responses=True,
                        socket_timeout=self.timeout,
                        socket_connect_timeout=self.timeout,
                        health_check_interval=30,
                    )
                    self.logger.info("Redis cache connection created")
        return self.client

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    async def get(self, key: str) -> Optional[Any]:
        try:
            client = await self.get_client()
            data = await asyncio.wait_for(client.get(self._key(key)), timeout=self.timeout)
            if data is None:
                return None
            entry = CacheEntry(**json.loads(data))
            if self._clock() - entry.timestamp > self.ttl_seconds:
                await asyncio.wait_for(client.delete(self._key(key)), timeout=self.timeout)
                return None
            return entry.value
        except asyncio.TimeoutError:
            self.logger.warning(f"Redis get timeout for key {key}")
            return None
        except Exception as e:
            self.logger.error(f"Redis get error for key {key}: {str(e)}")
            return None

    async def set(self, key: str, value: Any) -> None:
        payload = json.dumps({"value": value, "timestamp": self._clock()})
        try:
            client = await self.get_client()
            await asyncio.wait_for(
                client.set(self._key(key), payload, ex=self.ttl_seconds),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            self.logger.warning(f"Redis set timeout for key {key}")
        except Exception as e:
            self.logger.error(f"Redis set error for key {key}: {str(e)}")

    async def close(self) -> None:
        if self.client is not None:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis cache connection closed")

def create_cache(ttl_seconds: int, redis_url: Optional[str] = None, prefix: str = "dayplanner"):
    """Redis-backed cache when a URL is configured, in-process otherwise."""
    if redis_url:
        return RedisTTLCache(redis_url, ttl_seconds, prefix=prefix)
    return TTLCache(ttl_seconds)
