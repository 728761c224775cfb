import redis
from main.config import settings
import logging

logger = logging.getLogger(__name__)


class RedisClient:
    """Thin wrapper over the commands the rate limiter relies on"""

    def __init__(self, client=None, host=None, port=None):
        self.client = client or redis.Redis(
            host=host or settings.REDIS_HOST,
            port=port or settings.REDIS_PORT,
            decode_responses=True,
        )
        logger.info("Redis client initialized")

    @classmethod
    def from_config(cls, config):
        return cls(host=config.get("REDIS_HOST"), port=config.get("REDIS_PORT"))

    # Counter operations
    def incr(self, name, amount=1):
        return self.client.incr(name, amount)

    def expire(self, name, time):
        return self.client.expire(name, time)

    def ttl(self, name):
        return self.client.ttl(name)

    # Key operations
    def get(self, name):
        return self.client.get(name)

    def delete(self, *names):
        return self.client.delete(*names)

    def pipeline(self):
        """Get Redis pipeline for batch operations"""
        return self.client.pipeline()
