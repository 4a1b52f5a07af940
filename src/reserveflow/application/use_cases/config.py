from __future__ import annotations

import logging

from pydantic import ValidationError

from reserveflow.application.dto.requests import SaveConfigRequest
from reserveflow.application.dto.responses import ConfigResponse
from reserveflow.application.mappers.config_mapper import (
    config_from_response,
    to_config,
    to_config_response,
)
from reserveflow.application.mappers.event_envelope import serialize_config_saved_event
from reserveflow.application.ports.cache import CacheStore
from reserveflow.application.ports.publisher import EventPublisher
from reserveflow.application.ports.repositories import ConfigRepository
from reserveflow.application.use_cases.clock import Clock, restaurant_zone, utc_now
from reserveflow.application.use_cases.context import TraceContext
from reserveflow.application.use_cases.events import publish_event
from reserveflow.domain.common.errors import ConfigurationIncompleteError, InvalidInputError
from reserveflow.domain.config.entities import RestaurantConfig

logger = logging.getLogger(__name__)

CONFIG_CACHE_KEY = "config:default"


class ConfigNotFoundError(Exception):
    pass


class InvalidConfigError(Exception):
    pass


class ConfigLoader:
    """Reads the restaurant configuration through the cache."""

    def __init__(
        self,
        repository: ConfigRepository,
        cache: CacheStore,
        ttl_seconds: int = 300,
    ) -> None:
        self._repository = repository
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def _cache_get(self) -> str | None:
        try:
            return self._cache.get(CONFIG_CACHE_KEY)
        except Exception:
            logger.warning("config_cache_read_failed", exc_info=True)
            return None

    def store(self, config: RestaurantConfig) -> None:
        try:
            self._cache.set(
                CONFIG_CACHE_KEY,
                to_config_response(config).model_dump_json(),
                ttl_seconds=self._ttl_seconds,
            )
        except Exception:
            logger.warning("config_cache_write_failed", exc_info=True)

    def load(self) -> RestaurantConfig:
        payload = self._cache_get()
        if payload:
            try:
                return config_from_response(ConfigResponse.model_validate_json(payload))
            except (ValidationError, InvalidInputError, ConfigurationIncompleteError):
                logger.warning("config_cache_payload_invalid")

        config = self._repository.get()
        if config is None:
            raise ConfigNotFoundError("restaurant configuration has not been saved")
        self.store(config)
        return config


class GetConfig:
    def __init__(self, loader: ConfigLoader) -> None:
        self._loader = loader

    def execute(self) -> ConfigResponse:
        return to_config_response(self._loader.load())


class SaveConfig:
    def __init__(
        self,
        repository: ConfigRepository,
        loader: ConfigLoader,
        publisher: EventPublisher,
        clock: Clock = utc_now,
    ) -> None:
        self._repository = repository
        self._loader = loader
        self._publisher = publisher
        self._clock = clock

    def execute(self, request_dto: SaveConfigRequest, trace_ctx: TraceContext) -> ConfigResponse:
        now = self._clock()
        try:
            config = to_config(request_dto, now)
            restaurant_zone(config.timezone)
        except (ConfigurationIncompleteError, InvalidInputError) as exc:
            raise InvalidConfigError(str(exc)) from exc

        self._repository.replace(config)
        self._loader.store(config)
        logger.info("config_saved", extra={"config_id": str(config.config_id)})

        publish_event(
            self._publisher,
            serialize_config_saved_event(str(config.config_id), now, trace_ctx),
        )
        return to_config_response(config)
