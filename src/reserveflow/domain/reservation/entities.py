from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum

from reserveflow.domain.common.errors import InvalidInputError
from reserveflow.domain.common.ids import CustomerId, ReservationId, TableId
from reserveflow.domain.common.wallclock import parse_time


class ReservationStatus(str, Enum):
    CONFIRMED = "confirmed"
    SEATED = "seated"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


_TRANSITIONS: dict[ReservationStatus, frozenset[ReservationStatus]] = {
    ReservationStatus.CONFIRMED: frozenset(
        {ReservationStatus.SEATED, ReservationStatus.CANCELLED, ReservationStatus.NO_SHOW}
    ),
    ReservationStatus.SEATED: frozenset({ReservationStatus.COMPLETED}),
    ReservationStatus.COMPLETED: frozenset(),
    ReservationStatus.CANCELLED: frozenset(),
    ReservationStatus.NO_SHOW: frozenset(),
}


@dataclass(frozen=True)
class Customer:
    customer_id: CustomerId
    name: str
    phone: str
    email: str | None = None
    notes: str | None = None
    vip_status: bool = False

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise InvalidInputError("customer name must be non-empty")
        if not self.phone.strip():
            raise InvalidInputError("customer phone must be non-empty")


@dataclass(frozen=True)
class Reservation:
    reservation_id: ReservationId
    customer: Customer
    party_size: int
    date: date
    start_time: str
    end_time: str
    table_ids: frozenset[TableId]
    status: ReservationStatus
    created_at: datetime
    updated_at: datetime
    special_requests: str | None = None

    def __post_init__(self) -> None:
        if self.party_size < 1:
            raise InvalidInputError("party_size must be >= 1")
        if not self.table_ids:
            raise InvalidInputError("reservation must claim at least one table")
        if parse_time(self.start_time) >= parse_time(self.end_time):
            raise InvalidInputError(
                f"start_time ({self.start_time}) must be before end_time ({self.end_time})"
            )

    @property
    def is_cancelled(self) -> bool:
        return self.status == ReservationStatus.CANCELLED

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self.status]

    def claims(self, table_id: TableId) -> bool:
        return table_id in self.table_ids

    def transition_to(self, status: ReservationStatus, now: datetime) -> Reservation:
        if status == self.status:
            return self
        if status not in _TRANSITIONS[self.status]:
            raise ReservationTransitionError(
                f"cannot move reservation from status={self.status.value} to {status.value}"
            )
        return replace(self, status=status, updated_at=now)


class ReservationTransitionError(Exception):
    pass
