from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import redis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RedisSettings:
    url: str
    timeout_seconds: float = 1.0

    @classmethod
    def from_env(cls, timeout_seconds: float = 1.0) -> RedisSettings:
        url = os.getenv("REDIS_URL")
        if not url:
            raise RuntimeError("REDIS_URL is not set")
        return cls(url=url, timeout_seconds=timeout_seconds)


def key_prefix() -> str:
    return os.getenv("REDIS_KEY_PREFIX", "reserveflow").strip(":")


def prefixed(key: str) -> str:
    """Namespace a cache key or pub/sub channel under ``REDIS_KEY_PREFIX``."""
    prefix = key_prefix()
    return f"{prefix}:{key}" if prefix else key


@lru_cache(maxsize=8)
def client_for(settings: RedisSettings) -> redis.Redis:
    return redis.Redis.from_url(
        settings.url,
        socket_connect_timeout=settings.timeout_seconds,
        socket_timeout=settings.timeout_seconds,
        decode_responses=True,
    )


def get_redis_client(timeout_seconds: float = 1.0) -> redis.Redis:
    return client_for(RedisSettings.from_env(timeout_seconds))


def ping_redis(timeout_seconds: float = 1.0) -> bool:
    try:
        return bool(get_redis_client(timeout_seconds).ping())
    except (RuntimeError, redis.RedisError):
        logger.warning("redis_ping_failed", exc_info=True)
        return False


class RedisBacked:
    """Base for adapters that talk to the shared client under the key prefix."""

    def __init__(self, timeout_seconds: float = 1.0) -> None:
        self._timeout_seconds = timeout_seconds

    @property
    def client(self) -> redis.Redis:
        return get_redis_client(timeout_seconds=self._timeout_seconds)
