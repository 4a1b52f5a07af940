from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from reserveflow.domain.common.errors import InvalidInputError
from reserveflow.domain.config.entities import RestaurantConfig

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def restaurant_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidInputError(f"unknown time zone: {name}") from exc


def restaurant_today(config: RestaurantConfig, now: datetime) -> date:
    """The calendar day at the restaurant, which decides what counts as past."""
    return now.astimezone(restaurant_zone(config.timezone)).date()
