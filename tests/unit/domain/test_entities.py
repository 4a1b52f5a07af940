from __future__ import annotations

import sys
from dataclasses import FrozenInstanceError
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from reserveflow.domain.common.errors import InvalidInputError
from reserveflow.domain.common.ids import CustomerId, ReservationId, TableId
from reserveflow.domain.config.entities import RestaurantConfig, Weekday, WorkingHours
from reserveflow.domain.reservation.entities import (
    Customer,
    Reservation,
    ReservationStatus,
    ReservationTransitionError,
)
from reserveflow.domain.table.entities import Capacity, Position, Table, TableArea

NOW = datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)


def _reservation(**overrides) -> Reservation:
    values = {
        "reservation_id": ReservationId("rsv_001"),
        "customer": Customer(CustomerId("cus_1"), "Ada", "555-0100"),
        "party_size": 2,
        "date": date(2026, 10, 19),
        "start_time": "19:00",
        "end_time": "21:00",
        "table_ids": frozenset({TableId("T1")}),
        "status": ReservationStatus.CONFIRMED,
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(overrides)
    return Reservation(**values)


def test_capacity_bounds() -> None:
    assert Capacity(min=2, max=4).fits(2)
    assert Capacity(min=2, max=4).fits(4)
    assert not Capacity(min=2, max=4).fits(5)
    with pytest.raises(InvalidInputError):
        Capacity(min=0, max=2)
    with pytest.raises(InvalidInputError):
        Capacity(min=5, max=4)


def test_table_deactivate_is_idempotent() -> None:
    table = Table(
        table_id=TableId("T1"),
        name="Table 1",
        area=TableArea.BAR,
        capacity=Capacity(min=1, max=2),
        is_adjustable=True,
        position=Position(x=10, y=20),
    )
    inactive = table.deactivate()
    assert inactive.is_active is False
    assert inactive.deactivate() is inactive


@pytest.mark.parametrize(
    "overrides",
    [
        {"party_size": 0},
        {"table_ids": frozenset()},
        {"start_time": "21:00", "end_time": "21:00"},
        {"start_time": "22:00", "end_time": "21:00"},
    ],
)
def test_reservation_invariants(overrides: dict) -> None:
    with pytest.raises(InvalidInputError):
        _reservation(**overrides)


def test_customer_requires_name_and_phone() -> None:
    with pytest.raises(InvalidInputError):
        Customer(CustomerId("cus_1"), " ", "555-0100")
    with pytest.raises(InvalidInputError):
        Customer(CustomerId("cus_1"), "Ada", "")


def test_allowed_transitions() -> None:
    later = NOW + timedelta(hours=1)
    seated = _reservation().transition_to(ReservationStatus.SEATED, later)
    completed = seated.transition_to(ReservationStatus.COMPLETED, later)

    assert seated.status == ReservationStatus.SEATED
    assert seated.updated_at == later
    assert completed.is_terminal


def test_same_status_transition_is_a_no_op() -> None:
    reservation = _reservation()
    assert reservation.transition_to(ReservationStatus.CONFIRMED, NOW) is reservation


@pytest.mark.parametrize(
    ("current", "target"),
    [
        (ReservationStatus.CONFIRMED, ReservationStatus.COMPLETED),
        (ReservationStatus.SEATED, ReservationStatus.CANCELLED),
        (ReservationStatus.CANCELLED, ReservationStatus.CONFIRMED),
        (ReservationStatus.NO_SHOW, ReservationStatus.SEATED),
    ],
)
def test_illegal_transitions_raise(current: ReservationStatus, target: ReservationStatus) -> None:
    with pytest.raises(ReservationTransitionError):
        _reservation(status=current).transition_to(target, NOW)


def test_working_hours_must_open_before_close() -> None:
    with pytest.raises(InvalidInputError):
        WorkingHours(is_open=True, open_time="22:00", close_time="09:00")
    assert WorkingHours(is_open=False, open_time="22:00", close_time="09:00").is_open is False


def test_config_rejects_non_positive_durations() -> None:
    hours = {day: WorkingHours(True, "09:00", "22:00") for day in Weekday}
    with pytest.raises(InvalidInputError):
        RestaurantConfig(
            name="Test", working_hours=hours, time_slot_duration=0, reservation_duration=120
        )
    with pytest.raises(InvalidInputError):
        RestaurantConfig(
            name="Test", working_hours=hours, time_slot_duration=30, reservation_duration=0
        )


def test_working_hours_keep_parsed_minutes() -> None:
    hours = WorkingHours(True, "09:30", "22:00")
    assert (hours.open_minutes, hours.close_minutes) == (570, 1320)
    assert hours == WorkingHours(True, "09:30", "22:00")
    with pytest.raises(FrozenInstanceError):
        hours.open_minutes = 0


def test_config_working_hours_cannot_be_changed_after_construction() -> None:
    hours = {day: WorkingHours(True, "09:00", "22:00") for day in Weekday}
    config = RestaurantConfig(
        name="Test", working_hours=hours, time_slot_duration=30, reservation_duration=120
    )

    hours[Weekday.MONDAY] = WorkingHours(False, "09:00", "22:00")
    assert config.working_hours[Weekday.MONDAY].is_open is True
    with pytest.raises(TypeError):
        config.working_hours[Weekday.MONDAY] = WorkingHours(False, "09:00", "22:00")
