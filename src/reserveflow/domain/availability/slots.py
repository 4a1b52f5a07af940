from __future__ import annotations

from collections.abc import Iterator
from datetime import date

from reserveflow.domain.availability.schedule import resolve_schedule
from reserveflow.domain.common.errors import InvalidInputError
from reserveflow.domain.common.wallclock import MINUTES_PER_DAY, format_time, parse_time
from reserveflow.domain.config.entities import RestaurantConfig


def generate_slots(config: RestaurantConfig, day: date) -> Iterator[str]:
    """Yield every offerable start time for ``day`` in ascending order.

    The last slot is the latest start that still lets a full reservation end
    by closing time. Each call returns a fresh iterator.
    """
    hours = resolve_schedule(config, day)
    if not hours.is_open:
        return

    last_slot = hours.close_minutes - config.reservation_duration
    current = hours.open_minutes
    while current <= last_slot:
        yield format_time(current)
        current += config.time_slot_duration


def reservation_end_time(config: RestaurantConfig, start_time: str) -> str:
    end_minutes = parse_time(start_time) + config.reservation_duration
    if end_minutes > MINUTES_PER_DAY:
        raise InvalidInputError(
            f"reservation starting at {start_time} would end after midnight"
        )
    return format_time(end_minutes)
