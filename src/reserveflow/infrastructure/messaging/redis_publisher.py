from __future__ import annotations

from reserveflow.application.ports.publisher import EventPublisher
from reserveflow.infrastructure.cache.redis_client import RedisBacked, prefixed


class RedisEventPublisher(RedisBacked, EventPublisher):
    """Fire-and-forget pub/sub; channels are namespaced like cache keys."""

    def publish(self, channel: str, message: str) -> None:
        self.client.publish(prefixed(channel), message)
