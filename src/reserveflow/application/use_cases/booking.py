from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date

from reserveflow.application.metrics.reservation_lifecycle import record_conflict
from reserveflow.domain.availability.conflicts import AssignmentConflict, validate_assignment
from reserveflow.domain.availability.schedule import (
    is_date_available,
    last_bookable_date,
    resolve_schedule,
    weekday_of,
)
from reserveflow.domain.availability.slots import generate_slots
from reserveflow.domain.common.ids import ReservationId
from reserveflow.domain.common.wallclock import format_time, parse_time
from reserveflow.domain.config.entities import RestaurantConfig
from reserveflow.domain.reservation.entities import Reservation
from reserveflow.domain.table.entities import Table


class DateNotBookableError(Exception):
    pass


class SlotNotOfferedError(Exception):
    pass


class TableAssignmentConflictError(Exception):
    def __init__(self, conflict: AssignmentConflict) -> None:
        super().__init__(f"tables unavailable for this reservation: {conflict.describe()}")
        self.conflict = conflict
        self.details = {
            "tableIds": sorted(str(table_id) for table_id in conflict.table_ids),
            "reasons": {
                str(table_id): reason.value for table_id, reason in conflict.conflicts.items()
            },
        }


def ensure_bookable(config: RestaurantConfig, day: date, start_time: str, today: date) -> str:
    """Reject dates and start times a customer could not have been offered.

    Returns the start time normalised to ``HH:MM``.
    """
    start = format_time(parse_time(start_time))
    if not is_date_available(config, day, today):
        if not resolve_schedule(config, day).is_open:
            raise DateNotBookableError(f"restaurant is closed on {weekday_of(day).value}")
        if day < today:
            raise DateNotBookableError(f"date {day.isoformat()} is in the past")
        raise DateNotBookableError(
            f"date {day.isoformat()} is beyond the booking horizon "
            f"({last_bookable_date(config, today).isoformat()})"
        )
    if start not in generate_slots(config, day):
        raise SlotNotOfferedError(
            f"start time {start} is not an offered slot on {day.isoformat()}"
        )
    return start


def ensure_assignable(
    candidate: Reservation,
    tables: Sequence[Table],
    reservations: Iterable[Reservation],
    exclude_reservation_id: ReservationId | None = None,
) -> None:
    result = validate_assignment(
        candidate,
        tables,
        reservations,
        exclude_reservation_id=exclude_reservation_id,
    )
    if isinstance(result, AssignmentConflict):
        record_conflict(result)
        raise TableAssignmentConflictError(result)
