from __future__ import annotations

from datetime import date, timedelta

from reserveflow.domain.common.errors import ConfigurationIncompleteError
from reserveflow.domain.config.entities import RestaurantConfig, Weekday, WorkingHours


def weekday_of(day: date) -> Weekday:
    # isoweekday: Monday=1 .. Sunday=7, folded onto Sunday=0.
    return Weekday.from_index(day.isoweekday() % 7)


def resolve_schedule(config: RestaurantConfig, day: date) -> WorkingHours:
    weekday = weekday_of(day)
    try:
        return config.working_hours[weekday]
    except KeyError as exc:
        raise ConfigurationIncompleteError(
            f"working hours missing for {weekday.value}"
        ) from exc


def last_bookable_date(config: RestaurantConfig, today: date) -> date:
    return today + timedelta(days=config.advance_booking_days)


def is_date_available(config: RestaurantConfig, day: date, today: date) -> bool:
    """A date is bookable when the restaurant opens that weekday and the date
    falls between ``today`` and the advance-booking horizon, both inclusive."""
    if day < today or day > last_bookable_date(config, today):
        return False
    return resolve_schedule(config, day).is_open
