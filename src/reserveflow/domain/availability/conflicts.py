from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from reserveflow.domain.availability.overlap import blocking_reservations
from reserveflow.domain.common.ids import ReservationId, TableId
from reserveflow.domain.reservation.entities import Reservation
from reserveflow.domain.table.entities import Table


class ConflictReason(str, Enum):
    UNKNOWN_TABLE = "UNKNOWN_TABLE"
    INACTIVE_TABLE = "INACTIVE_TABLE"
    OVERLAPPING_RESERVATION = "OVERLAPPING_RESERVATION"


@dataclass(frozen=True)
class AssignmentOk:
    table_ids: frozenset[TableId]


@dataclass(frozen=True)
class AssignmentConflict:
    conflicts: dict[TableId, ConflictReason]

    @property
    def table_ids(self) -> frozenset[TableId]:
        return frozenset(self.conflicts)

    def describe(self) -> str:
        parts = [
            f"{table_id}={reason.value}" for table_id, reason in sorted(self.conflicts.items())
        ]
        return ", ".join(parts)


AssignmentResult = AssignmentOk | AssignmentConflict


def validate_assignment(
    candidate: Reservation,
    tables: Sequence[Table],
    reservations: Iterable[Reservation],
    exclude_reservation_id: ReservationId | None = None,
) -> AssignmentResult:
    """Check every table the candidate claims; report each failing table id.

    ``exclude_reservation_id`` is the reservation being updated, so it never
    conflicts with its own previous version.
    """
    tables_by_id = {table.table_id: table for table in tables}
    conflicts: dict[TableId, ConflictReason] = {}

    for table_id in candidate.table_ids:
        table = tables_by_id.get(table_id)
        if table is None:
            conflicts[table_id] = ConflictReason.UNKNOWN_TABLE
        elif not table.is_active:
            conflicts[table_id] = ConflictReason.INACTIVE_TABLE

    for other in blocking_reservations(
        reservations,
        candidate.date,
        candidate.start_time,
        candidate.end_time,
        exclude_reservation_id=exclude_reservation_id,
    ):
        for table_id in candidate.table_ids & other.table_ids:
            conflicts.setdefault(table_id, ConflictReason.OVERLAPPING_RESERVATION)

    if conflicts:
        return AssignmentConflict(conflicts=conflicts)
    return AssignmentOk(table_ids=candidate.table_ids)
