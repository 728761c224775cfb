import fakeredis
import pytest

from app.libs.rate_limit import (
    InMemoryRateLimiter,
    RedisRateLimiter,
    build_rate_limiters,
)
from external.redis import RedisClient


class ManualClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class TestInMemoryRateLimiter:
    def test_rejects_after_limit_within_window(self):
        limiter = InMemoryRateLimiter(limit=3, window_seconds=60, clock=ManualClock())

        assert [limiter.check("1.2.3.4") for _ in range(4)] == [True, True, True, False]

    def test_window_expiry_starts_fresh_count(self):
        clock = ManualClock()
        limiter = InMemoryRateLimiter(limit=3, window_seconds=60, clock=clock)
        for _ in range(4):
            limiter.check("1.2.3.4")

        clock.advance(60)

        assert limiter.check("1.2.3.4") is True
        record = limiter.get_record("1.2.3.4")
        assert record.count == 1
        assert record.reset_at == clock.now + 60

    def test_keys_are_independent(self):
        limiter = InMemoryRateLimiter(limit=1, window_seconds=60, clock=ManualClock())

        assert limiter.check("a") is True
        assert limiter.check("a") is False
        assert limiter.check("b") is True

    def test_reset_clears_key(self):
        limiter = InMemoryRateLimiter(limit=1, window_seconds=60, clock=ManualClock())
        limiter.check("a")
        limiter.reset("a")

        assert limiter.check("a") is True

    def test_prunes_expired_records(self):
        clock = ManualClock()
        limiter = InMemoryRateLimiter(limit=5, window_seconds=1, clock=clock)
        limiter.PRUNE_EVERY = 3
        limiter.check("old")
        clock.advance(2)
        limiter.check("new")
        limiter.check("new")

        assert limiter.get_record("old") is None

    def test_limit_must_be_positive(self):
        with pytest.raises(ValueError):
            InMemoryRateLimiter(limit=0)


class TestRedisRateLimiter:
    @pytest.fixture
    def redis_client(self):
        return RedisClient(client=fakeredis.FakeRedis(decode_responses=True))

    def test_rejects_after_limit(self, redis_client):
        limiter = RedisRateLimiter(redis_client, limit=3, window_seconds=60)

        assert [limiter.check("1.2.3.4") for _ in range(4)] == [True, True, True, False]

    def test_first_hit_sets_expiry(self, redis_client):
        limiter = RedisRateLimiter(redis_client, limit=3, window_seconds=60, prefix="rl")
        limiter.check("k")

        assert 0 < redis_client.ttl("rl:k") <= 60

    def test_window_expiry_starts_fresh_count(self, redis_client):
        limiter = RedisRateLimiter(redis_client, limit=1, window_seconds=60, prefix="rl")
        limiter.check("k")
        assert limiter.check("k") is False

        # simulate the window elapsing
        redis_client.delete("rl:k")

        assert limiter.check("k") is True
        assert redis_client.get("rl:k") == "1"

    def test_reset_requires_key(self, redis_client):
        limiter = RedisRateLimiter(redis_client, limit=1)

        with pytest.raises(ValueError):
            limiter.reset()


def test_build_rate_limiters_memory():
    limiters = build_rate_limiters(
        {"RATE_LIMIT_READ": 5, "RATE_LIMIT_WRITE": 2, "RATE_LIMIT_AUTH": 1}
    )

    assert set(limiters) == {"read", "write", "auth"}
    assert isinstance(limiters["read"], InMemoryRateLimiter)
    assert limiters["read"].limit == 5
    assert limiters["write"].limit == 2
    assert limiters["auth"].limit == 1


def test_build_rate_limiters_redis_uses_scoped_prefixes():
    client = RedisClient(client=fakeredis.FakeRedis(decode_responses=True))
    limiters = build_rate_limiters({"RATE_LIMIT_BACKEND": "redis"}, redis_client=client)

    assert isinstance(limiters["write"], RedisRateLimiter)
    assert limiters["write"].prefix == "rate_limit:write"
    assert limiters["read"].limit == 200


def test_build_rate_limiters_unknown_backend():
    with pytest.raises(ValueError):
        build_rate_limiters({"RATE_LIMIT_BACKEND": "memcached"})
