from __future__ import annotations

import sys
from datetime import date, datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from reserveflow.domain.availability.status import TableStatus, status_of
from reserveflow.domain.common.ids import CustomerId, ReservationId, TableId
from reserveflow.domain.reservation.entities import Customer, Reservation, ReservationStatus

DAY = date(2026, 10, 19)
NOW = datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)
T1 = TableId("T1")


def _reservation(status: ReservationStatus, start: str = "19:00", end: str = "21:00"):
    return Reservation(
        reservation_id=ReservationId(f"rsv_{status.value}"),
        customer=Customer(CustomerId("cus_1"), "Ada", "555-0100"),
        party_size=2,
        date=DAY,
        start_time=start,
        end_time=end,
        table_ids=frozenset({T1}),
        status=status,
        created_at=NOW,
        updated_at=NOW,
    )


def test_confirmed_reservation_marks_table_reserved() -> None:
    reservations = [_reservation(ReservationStatus.CONFIRMED)]
    assert status_of(T1, DAY, "19:00", reservations) == TableStatus.RESERVED
    assert status_of(T1, DAY, "20:59", reservations) == TableStatus.RESERVED


def test_seated_reservation_marks_table_occupied() -> None:
    assert status_of(T1, DAY, "20:00", [_reservation(ReservationStatus.SEATED)]) == (
        TableStatus.OCCUPIED
    )


def test_end_instant_is_outside_the_window() -> None:
    assert status_of(T1, DAY, "21:00", [_reservation(ReservationStatus.CONFIRMED)]) == (
        TableStatus.AVAILABLE
    )


def test_cancelled_completed_and_no_show_leave_table_available() -> None:
    for status in (
        ReservationStatus.CANCELLED,
        ReservationStatus.COMPLETED,
        ReservationStatus.NO_SHOW,
    ):
        assert status_of(T1, DAY, "20:00", [_reservation(status)]) == TableStatus.AVAILABLE


def test_other_dates_and_tables_are_ignored() -> None:
    reservations = [_reservation(ReservationStatus.SEATED)]
    assert status_of(T1, date(2026, 10, 20), "20:00", reservations) == TableStatus.AVAILABLE
    assert status_of(TableId("T2"), DAY, "20:00", reservations) == TableStatus.AVAILABLE


def test_seated_window_before_during_and_at_end() -> None:
    reservations = [_reservation(ReservationStatus.SEATED)]

    assert status_of(T1, DAY, "18:59", reservations) == TableStatus.AVAILABLE
    assert status_of(T1, DAY, "20:00", reservations) == TableStatus.OCCUPIED
    assert status_of(T1, DAY, "21:00", reservations) == TableStatus.AVAILABLE
