from __future__ import annotations

from reserveflow.application.ports.cache import CacheStore
from reserveflow.infrastructure.cache.redis_client import RedisBacked, prefixed


class RedisCacheStore(RedisBacked, CacheStore):
    def get(self, key: str) -> str | None:
        # the client decodes responses, so hits come back as str
        return self.client.get(prefixed(key))

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        if ttl_seconds > 0:
            self.client.setex(prefixed(key), ttl_seconds, value)
