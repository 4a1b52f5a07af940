from __future__ import annotations

from datetime import datetime

from reserveflow.application.dto.requests import SaveConfigRequest
from reserveflow.application.dto.responses import ConfigResponse, WorkingHoursResponse
from reserveflow.domain.common.errors import ConfigurationIncompleteError
from reserveflow.domain.common.ids import ConfigId
from reserveflow.domain.config.entities import RestaurantConfig, Weekday, WorkingHours


def to_working_hours_response(hours: WorkingHours) -> WorkingHoursResponse:
    return WorkingHoursResponse(
        isOpen=hours.is_open,
        openTime=hours.open_time,
        closeTime=hours.close_time,
    )


def to_config_response(config: RestaurantConfig) -> ConfigResponse:
    return ConfigResponse(
        id=str(config.config_id),
        name=config.name,
        workingHours={
            day.value: to_working_hours_response(config.working_hours[day]) for day in Weekday
        },
        timeSlotDuration=config.time_slot_duration,
        reservationDuration=config.reservation_duration,
        advanceBookingDays=config.advance_booking_days,
        timezone=config.timezone,
        updatedAt=config.updated_at,
    )


def _weekday(name: str) -> Weekday:
    try:
        return Weekday(name.lower())
    except ValueError as exc:
        raise ConfigurationIncompleteError(f"unknown weekday: {name}") from exc


def to_config(request: SaveConfigRequest, now: datetime) -> RestaurantConfig:
    return RestaurantConfig(
        name=request.name,
        working_hours={
            _weekday(name): WorkingHours(
                is_open=hours.is_open,
                open_time=hours.open_time,
                close_time=hours.close_time,
            )
            for name, hours in request.working_hours.items()
        },
        time_slot_duration=request.time_slot_duration,
        reservation_duration=request.reservation_duration,
        advance_booking_days=request.advance_booking_days,
        timezone=request.timezone,
        updated_at=now,
    )


def config_from_response(payload: ConfigResponse) -> RestaurantConfig:
    return RestaurantConfig(
        name=payload.name,
        working_hours={
            Weekday(name): WorkingHours(
                is_open=hours.isOpen,
                open_time=hours.openTime,
                close_time=hours.closeTime,
            )
            for name, hours in payload.workingHours.items()
        },
        time_slot_duration=payload.timeSlotDuration,
        reservation_duration=payload.reservationDuration,
        advance_booking_days=payload.advanceBookingDays,
        timezone=payload.timezone,
        config_id=ConfigId(payload.id),
        updated_at=payload.updatedAt,
    )
