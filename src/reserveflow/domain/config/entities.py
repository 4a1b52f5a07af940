from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType

from reserveflow.domain.common.errors import ConfigurationIncompleteError, InvalidInputError
from reserveflow.domain.common.ids import ConfigId
from reserveflow.domain.common.wallclock import parse_time

DEFAULT_CONFIG_ID = ConfigId("default")
DEFAULT_ADVANCE_BOOKING_DAYS = 90


class Weekday(str, Enum):
    """Weekday names in Sunday-first order; ``index`` 0 is Sunday."""

    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"

    @property
    def index(self) -> int:
        return list(Weekday).index(self)

    @classmethod
    def from_index(cls, index: int) -> Weekday:
        return list(cls)[index]


@dataclass(frozen=True)
class WorkingHours:
    is_open: bool
    open_time: str
    close_time: str
    open_minutes: int = field(init=False, repr=False, compare=False)
    close_minutes: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        open_minutes = parse_time(self.open_time)
        close_minutes = parse_time(self.close_time)
        if self.is_open and open_minutes >= close_minutes:
            raise InvalidInputError(
                f"open_time ({self.open_time}) must be before close_time ({self.close_time})"
            )
        object.__setattr__(self, "open_minutes", open_minutes)
        object.__setattr__(self, "close_minutes", close_minutes)


@dataclass(frozen=True)
class RestaurantConfig:
    name: str
    working_hours: Mapping[Weekday, WorkingHours]
    time_slot_duration: int
    reservation_duration: int
    advance_booking_days: int = DEFAULT_ADVANCE_BOOKING_DAYS
    timezone: str = "UTC"
    config_id: ConfigId = DEFAULT_CONFIG_ID
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        missing = [day.value for day in Weekday if day not in self.working_hours]
        if missing:
            raise ConfigurationIncompleteError(
                f"working hours missing for: {', '.join(missing)}"
            )
        if self.time_slot_duration < 1:
            raise InvalidInputError("time_slot_duration must be >= 1 minute")
        if self.reservation_duration < 1:
            raise InvalidInputError("reservation_duration must be >= 1 minute")
        if self.advance_booking_days < 0:
            raise InvalidInputError("advance_booking_days must be >= 0")
        object.__setattr__(self, "working_hours", MappingProxyType(dict(self.working_hours)))
