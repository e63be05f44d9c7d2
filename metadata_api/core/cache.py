from typing import Any
from cachetools import TTLCache
import redis
from .config import settings

class Cache:
    """
    Thin abstraction over Redis/in-memory so swapping is one flag away.
    ttl_seconds=None keeps entries forever (used for NameRecords).
    """
    def __init__(self, ttl_seconds: int | None = None, maxsize: int = 4096, use_redis: bool | None = None):
        self.ttl_seconds = ttl_seconds
        self.backend = None
        if settings.USE_REDIS if use_redis is None else use_redis:
            self.backend = redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)
        # In-process store for single-worker and test runs.
        self._local: Any = TTLCache(maxsize=maxsize, ttl=ttl_seconds) if ttl_seconds else {}

    def get(self, key: str) -> Any | None:
        if self.backend:
            return self.backend.get(key)
        return self._local.get(key)

    def add(self, key: str, value: str) -> bool:
        """Set only if absent. Returns True when this call wrote the value."""
        if self.backend:
            return bool(self.backend.set(key, value, nx=True, ex=self.ttl_seconds))
        if key in self._local:
            return False
        self._local[key] = value
        return True

    def incr(self, key: str, ttl_seconds: int) -> int:
        """Counter used for rate-limit buckets. Redis INCR+EXPIRE is atomic; in-memory is best-effort."""
        if self.backend:
            pipe = self.backend.pipeline()
            pipe.incr(key)
            pipe.expire(key, ttl_seconds)
            count, _ = pipe.execute()
            return int(count)
        count = int(self._local.get(key) or 0) + 1
        self._local[key] = str(count)
        return count

# Short-lived buckets (rate limiting)
cache = Cache(ttl_seconds=settings.CACHE_TTL_SECONDS)
