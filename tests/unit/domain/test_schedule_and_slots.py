from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from reserveflow.domain.availability.schedule import (
    is_date_available,
    last_bookable_date,
    resolve_schedule,
    weekday_of,
)
from reserveflow.domain.availability.slots import generate_slots, reservation_end_time
from reserveflow.domain.common.errors import ConfigurationIncompleteError, InvalidInputError
from reserveflow.domain.config.entities import RestaurantConfig, Weekday, WorkingHours

SUNDAY = date(2026, 10, 18)
MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)


def _config(**overrides) -> RestaurantConfig:
    hours = {day: WorkingHours(True, "09:00", "22:00") for day in Weekday}
    hours[Weekday.TUESDAY] = WorkingHours(False, "09:00", "22:00")
    values = {
        "name": "Test Bistro",
        "working_hours": hours,
        "time_slot_duration": 30,
        "reservation_duration": 120,
    }
    values.update(overrides)
    return RestaurantConfig(**values)


def test_weekday_of_is_sunday_first() -> None:
    assert weekday_of(SUNDAY) == Weekday.SUNDAY
    assert weekday_of(MONDAY) == Weekday.MONDAY
    assert Weekday.SUNDAY.index == 0
    assert Weekday.from_index(6) == Weekday.SATURDAY


def test_resolve_schedule_returns_hours_for_weekday() -> None:
    assert resolve_schedule(_config(), TUESDAY).is_open is False
    assert resolve_schedule(_config(), MONDAY).open_time == "09:00"


def test_config_requires_every_weekday() -> None:
    hours = {day: WorkingHours(True, "09:00", "22:00") for day in Weekday}
    del hours[Weekday.FRIDAY]
    with pytest.raises(ConfigurationIncompleteError, match="friday"):
        _config(working_hours=hours)


def test_generate_slots_stops_at_last_full_reservation() -> None:
    slots = list(generate_slots(_config(), MONDAY))

    assert slots[0] == "09:00"
    assert slots[-1] == "20:00"
    assert len(slots) == 23
    assert slots == sorted(slots)


def test_generate_slots_is_empty_on_closed_day() -> None:
    assert list(generate_slots(_config(), TUESDAY)) == []


def test_generate_slots_is_empty_when_window_shorter_than_duration() -> None:
    hours = {day: WorkingHours(True, "12:00", "13:00") for day in Weekday}
    assert list(generate_slots(_config(working_hours=hours), MONDAY)) == []


def test_generate_slots_returns_fresh_iterator_each_call() -> None:
    config = _config()
    first = generate_slots(config, MONDAY)
    next(first)
    assert next(generate_slots(config, MONDAY)) == "09:00"


def test_generate_slots_with_uneven_step_never_exceeds_last_start() -> None:
    config = _config(time_slot_duration=45, reservation_duration=90)
    slots = list(generate_slots(config, MONDAY))
    assert slots[-1] == "20:15"
    assert "20:30" not in slots


def test_reservation_end_time_adds_duration() -> None:
    assert reservation_end_time(_config(), "19:00") == "21:00"
    assert reservation_end_time(_config(), "22:00") == "24:00"


def test_reservation_end_time_rejects_crossing_midnight() -> None:
    with pytest.raises(InvalidInputError):
        reservation_end_time(_config(), "23:00")


def test_date_availability_window() -> None:
    config = _config(advance_booking_days=2)
    today = SUNDAY

    assert is_date_available(config, SUNDAY, today) is True
    assert is_date_available(config, MONDAY, today) is True
    assert is_date_available(config, TUESDAY, today) is False
    assert is_date_available(config, date(2026, 10, 21), today) is False
    assert is_date_available(config, date(2026, 10, 17), today) is False
    assert last_bookable_date(config, today) == TUESDAY
