"""
Sliding-window request limiters.

Each client key owns a counter that resets once its window has elapsed.
Limiters are plain objects built once per scope (read/write/auth) at app
creation and looked up by the ``rate_limit`` decorator, so the backing store
can be swapped without touching the views.
"""
import time
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


class RateLimiter:
    """Interface: ``check(key)`` admits or rejects one request for ``key``"""

    limit: int
    window_seconds: float

    def check(self, key: str) -> bool:
        raise NotImplementedError

    def reset(self, key: Optional[str] = None) -> None:
        raise NotImplementedError


@dataclass
class WindowRecord:
    count: int
    reset_at: float


class InMemoryRateLimiter(RateLimiter):
    """Process-local limiter; counts are lost on restart and not shared"""

    # prune expired records every N checks so the map cannot grow unbounded
    PRUNE_EVERY = 1000

    def __init__(
        self,
        limit: int,
        window_seconds: float = 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._records: Dict[str, WindowRecord] = {}
        self._lock = threading.Lock()
        self._checks = 0

    def check(self, key: str) -> bool:
        now = self._clock()
        with self._lock:
            self._checks += 1
            if self._checks % self.PRUNE_EVERY == 0:
                self._prune(now)

            record = self._records.get(key)
            if record is None or now >= record.reset_at:
                self._records[key] = WindowRecord(
                    count=1, reset_at=now + self.window_seconds
                )
                return True

            record.count += 1
            return record.count <= self.limit

    def reset(self, key: Optional[str] = None) -> None:
        with self._lock:
            if key is None:
                self._records.clear()
            else:
                self._records.pop(key, None)

    def get_record(self, key: str) -> Optional[WindowRecord]:
        return self._records.get(key)

    def _prune(self, now: float) -> None:
        expired = [k for k, r in self._records.items() if now >= r.reset_at]
        for k in expired:
            del self._records[k]
        if expired:
            logger.debug(f"Pruned {len(expired)} expired rate limit records")


class RedisRateLimiter(RateLimiter):
    """Limiter shared across processes through Redis INCR/EXPIRE"""

    def __init__(
        self, redis_client, limit: int, window_seconds: int = 60, prefix="rate_limit"
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.redis = redis_client
        self.limit = limit
        self.window_seconds = int(window_seconds)
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    def check(self, key: str) -> bool:
        redis_key = self._key(key)
        pipe = self.redis.pipeline()
        pipe.incr(redis_key)
        pipe.ttl(redis_key)
        count, ttl = pipe.execute()

        # first hit of a window, or a key that lost its expiry
        if count == 1 or ttl is None or ttl < 0:
            self.redis.expire(redis_key, self.window_seconds)

        return count <= self.limit

    def reset(self, key: Optional[str] = None) -> None:
        if key is None:
            raise ValueError("RedisRateLimiter.reset requires a key")
        self.redis.delete(self._key(key))


def build_rate_limiters(config, redis_client=None) -> Dict[str, RateLimiter]:
    """Create the read/write/auth limiters described by the app config"""
    window = config.get("RATE_LIMIT_WINDOW_SECONDS", 60)
    limits = {
        "read": config.get("RATE_LIMIT_READ", 200),
        "write": config.get("RATE_LIMIT_WRITE", 30),
        "auth": config.get("RATE_LIMIT_AUTH", 10),
    }
    backend = config.get("RATE_LIMIT_BACKEND", "memory")

    if backend == "redis":
        if redis_client is None:
            from external.redis import RedisClient

            redis_client = RedisClient.from_config(config)
        limiters = {
            scope: RedisRateLimiter(
                redis_client, limit, window, prefix=f"rate_limit:{scope}"
            )
            for scope, limit in limits.items()
        }
    elif backend == "memory":
        limiters = {
            scope: InMemoryRateLimiter(limit, window) for scope, limit in limits.items()
        }
    else:
        raise ValueError(f"Unknown rate limit backend: {backend}")

    logger.info(f"Rate limiters configured ({backend}): {limits}")
    return limiters
