from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from enum import Enum

from reserveflow.domain.common.ids import TableId
from reserveflow.domain.common.wallclock import parse_time
from reserveflow.domain.reservation.entities import Reservation, ReservationStatus


class TableStatus(str, Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    OCCUPIED = "occupied"


_STATUS_BY_RESERVATION: dict[ReservationStatus, TableStatus] = {
    ReservationStatus.CONFIRMED: TableStatus.RESERVED,
    ReservationStatus.SEATED: TableStatus.OCCUPIED,
}


def status_of(
    table_id: TableId,
    day: date,
    instant: str,
    reservations: Iterable[Reservation],
) -> TableStatus:
    at = parse_time(instant)
    for reservation in reservations:
        if reservation.date != day or reservation.is_cancelled:
            continue
        if not reservation.claims(table_id):
            continue
        if parse_time(reservation.start_time) <= at < parse_time(reservation.end_time):
            # completed and no-show engagements leave the table free again
            return _STATUS_BY_RESERVATION.get(reservation.status, TableStatus.AVAILABLE)
    return TableStatus.AVAILABLE
