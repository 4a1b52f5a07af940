from __future__ import annotations

import os

from reserveflow.application.use_cases.config import ConfigLoader
from reserveflow.infrastructure.cache.cache_store import RedisCacheStore
from reserveflow.infrastructure.db.repositories.config_repo import SqlAlchemyConfigRepository


def _config_cache_ttl_seconds() -> int:
    return max(0, int(os.getenv("CONFIG_CACHE_TTL_SECONDS", "300")))


def config_loader() -> ConfigLoader:
    return ConfigLoader(
        repository=SqlAlchemyConfigRepository(),
        cache=RedisCacheStore(),
        ttl_seconds=_config_cache_ttl_seconds(),
    )
