from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Protocol

from reserveflow.domain.availability.conflicts import AssignmentConflict
from reserveflow.domain.common.ids import ReservationId, TableId
from reserveflow.domain.config.entities import RestaurantConfig
from reserveflow.domain.reservation.entities import Reservation, ReservationStatus
from reserveflow.domain.table.entities import Table, TableArea


class TableRepository(Protocol):
    def list_tables(
        self,
        include_inactive: bool = False,
        area: TableArea | None = None,
    ) -> list[Table]: ...

    def get(self, table_id: TableId) -> Table | None: ...

    def upsert(self, table: Table) -> None: ...

    def replace_layout(self, tables: Sequence[Table]) -> list[Table]: ...

    def is_referenced(self, table_id: TableId) -> bool: ...

    def purge(self, table_id: TableId) -> bool: ...


class ReservationRepository(Protocol):
    def get(self, reservation_id: ReservationId) -> Reservation | None: ...

    def list_reservations(
        self,
        day: date | None = None,
        status: ReservationStatus | None = None,
    ) -> list[Reservation]: ...

    def list_for_date(self, day: date) -> list[Reservation]: ...

    def add(self, reservation: Reservation) -> None: ...

    def replace(
        self, reservation: Reservation, expected_status: ReservationStatus
    ) -> None: ...

    def update_status(
        self, reservation: Reservation, expected_status: ReservationStatus
    ) -> None: ...

    def delete(self, reservation_id: ReservationId) -> bool: ...


class ConfigRepository(Protocol):
    def get(self) -> RestaurantConfig | None: ...

    def replace(self, config: RestaurantConfig) -> None: ...


class StaleReservationError(Exception):
    """The stored reservation is gone or no longer has the expected status."""


class ReservationConflictError(Exception):
    """Raised by the write path when the atomic re-check finds a conflict."""

    def __init__(self, conflict: AssignmentConflict) -> None:
        super().__init__(f"table assignment conflict: {conflict.describe()}")
        self.conflict = conflict
