from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import date

from reserveflow.domain.common.errors import InvalidInputError
from reserveflow.domain.common.ids import ReservationId
from reserveflow.domain.common.wallclock import parse_time
from reserveflow.domain.reservation.entities import Reservation


def _interval(start: str, end: str) -> tuple[int, int]:
    start_minutes = parse_time(start)
    end_minutes = parse_time(end)
    if start_minutes >= end_minutes:
        raise InvalidInputError(f"interval start {start} must be before end {end}")
    return start_minutes, end_minutes


def overlaps(a_start: str, a_end: str, b_start: str, b_end: str) -> bool:
    """Half-open ``[start, end)`` intersection on the same day.

    Touching intervals (``a_end == b_start``) do not overlap.
    """
    a_from, a_to = _interval(a_start, a_end)
    b_from, b_to = _interval(b_start, b_end)
    return not (a_to <= b_from or a_from >= b_to)


def blocking_reservations(
    reservations: Iterable[Reservation],
    day: date,
    start_time: str,
    end_time: str,
    exclude_reservation_id: ReservationId | None = None,
) -> Iterator[Reservation]:
    """Non-cancelled reservations on ``day`` whose window overlaps the candidate."""
    for reservation in reservations:
        if reservation.date != day or reservation.is_cancelled:
            continue
        if exclude_reservation_id is not None and (
            reservation.reservation_id == exclude_reservation_id
        ):
            continue
        if overlaps(start_time, end_time, reservation.start_time, reservation.end_time):
            yield reservation
