from __future__ import annotations

import json
import logging

import pytest
from fakes import (
    NOW,
    DictCache,
    InMemoryConfigRepository,
    RecordingPublisher,
    fixed_clock,
    make_config,
)

from reserveflow.application.dto.requests import SaveConfigRequest
from reserveflow.application.use_cases.config import (
    CONFIG_CACHE_KEY,
    ConfigLoader,
    ConfigNotFoundError,
    GetConfig,
    InvalidConfigError,
    SaveConfig,
)

DAYS = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]


def _request(**overrides) -> SaveConfigRequest:
    payload = {
        "name": "Harbour Grill",
        "workingHours": {
            day: {"isOpen": day != "monday", "openTime": "11:00", "closeTime": "23:00"}
            for day in DAYS
        },
        "timeSlotDuration": 15,
        "reservationDuration": 90,
        "advanceBookingDays": 30,
        "timezone": "Europe/Berlin",
    }
    payload.update(overrides)
    return SaveConfigRequest.model_validate(payload)


def test_loader_caches_config_after_first_read(config_repository, cache, loader) -> None:
    first = loader.load()
    second = loader.load()

    assert config_repository.reads == 1
    assert CONFIG_CACHE_KEY in cache.values
    assert second == first


def test_loader_falls_back_to_repository_when_cache_is_down() -> None:
    repository = InMemoryConfigRepository(make_config())
    loader = ConfigLoader(repository=repository, cache=DictCache(broken=True))

    assert loader.load().name == "Test Bistro"
    assert loader.load().name == "Test Bistro"
    assert repository.reads == 2


def test_loader_ignores_corrupt_cache_entry(config_repository, cache, loader, caplog) -> None:
    cache.values[CONFIG_CACHE_KEY] = json.dumps({"name": "half a config"})

    with caplog.at_level(logging.WARNING):
        config = loader.load()

    assert config.name == "Test Bistro"
    assert config_repository.reads == 1
    assert "config_cache_payload_invalid" in caplog.text


def test_missing_config_raises() -> None:
    loader = ConfigLoader(repository=InMemoryConfigRepository(None), cache=DictCache())
    with pytest.raises(ConfigNotFoundError):
        GetConfig(loader).execute()


def test_get_config_maps_every_weekday(loader) -> None:
    payload = GetConfig(loader).execute()

    assert set(payload.workingHours) == set(DAYS)
    assert payload.workingHours["tuesday"].isOpen is False
    assert payload.timeSlotDuration == 30
    assert payload.advanceBookingDays == 90


def test_save_config_replaces_caches_and_publishes(
    config_repository, cache, loader, publisher, trace_ctx
) -> None:
    use_case = SaveConfig(config_repository, loader, publisher, clock=fixed_clock)

    payload = use_case.execute(_request(), trace_ctx)

    assert payload.name == "Harbour Grill"
    assert payload.updatedAt == NOW
    assert config_repository.config.timezone == "Europe/Berlin"
    assert loader.load().reservation_duration == 90
    assert config_repository.reads == 0

    channel, message = publisher.messages[0]
    event = json.loads(message)
    assert channel == "events:reservations"
    assert event["event_type"] == "config.saved"
    assert event["request_id"] == "req-1"
    assert event["trace_id"] == "trace-1"


def test_save_config_rejects_incomplete_week(config_repository, loader, publisher, trace_ctx):
    request = _request(
        workingHours={"monday": {"isOpen": True, "openTime": "09:00", "closeTime": "17:00"}}
    )
    with pytest.raises(InvalidConfigError, match="working hours missing"):
        SaveConfig(config_repository, loader, publisher).execute(request, trace_ctx)
    assert publisher.messages == []


@pytest.mark.parametrize(
    "overrides",
    [
        {"timezone": "Mars/Olympus_Mons"},
        {"timeSlotDuration": 0},
        {"reservationDuration": -5},
    ],
)
def test_save_config_rejects_invalid_values(
    overrides, config_repository, loader, publisher, trace_ctx
) -> None:
    with pytest.raises(InvalidConfigError):
        SaveConfig(config_repository, loader, publisher).execute(_request(**overrides), trace_ctx)
    assert config_repository.config.name == "Test Bistro"


def test_save_config_rejects_inverted_hours(config_repository, loader, publisher, trace_ctx):
    hours = {day: {"isOpen": True, "openTime": "22:00", "closeTime": "10:00"} for day in DAYS}
    with pytest.raises(InvalidConfigError):
        SaveConfig(config_repository, loader, publisher).execute(
            _request(workingHours=hours), trace_ctx
        )


def test_save_config_survives_publisher_outage(config_repository, loader, trace_ctx) -> None:
    use_case = SaveConfig(config_repository, loader, RecordingPublisher(broken=True))
    assert use_case.execute(_request(), trace_ctx).name == "Harbour Grill"
