from __future__ import annotations

import json

import pytest
from fakes import fixed_clock, make_reservation, seed, with_status

from reserveflow.application.dto.requests import ChangeReservationStatusRequest
from reserveflow.application.use_cases.manage_reservations import (
    ReservationChangedError,
    ReservationNotFoundError,
)
from reserveflow.application.use_cases.reservation_status import ChangeReservationStatus
from reserveflow.domain.common.ids import ReservationId
from reserveflow.domain.reservation.entities import ReservationStatus, ReservationTransitionError

RSV = ReservationId("rsv_1")


def _status(value: str) -> ChangeReservationStatusRequest:
    return ChangeReservationStatusRequest(status=value)


@pytest.fixture
def use_case(reservation_repository, publisher) -> ChangeReservationStatus:
    seed(reservation_repository, make_reservation("rsv_1", {"T1"}))
    return ChangeReservationStatus(reservation_repository, publisher, clock=fixed_clock)


def test_seat_then_complete(use_case, reservation_repository, publisher, trace_ctx) -> None:
    assert use_case.execute(RSV, _status("seated"), trace_ctx).status == "seated"
    assert use_case.execute(RSV, _status("completed"), trace_ctx).status == "completed"

    assert reservation_repository.reservations[RSV].status == ReservationStatus.COMPLETED
    events = [json.loads(message) for _, message in publisher.messages]
    assert [e["payload"]["status"] for e in events] == ["seated", "completed"]
    assert {e["event_type"] for e in events} == {"reservation.status_changed"}


def test_no_show_is_terminal(use_case, trace_ctx) -> None:
    use_case.execute(RSV, _status("no-show"), trace_ctx)
    with pytest.raises(ReservationTransitionError):
        use_case.execute(RSV, _status("seated"), trace_ctx)


def test_repeating_current_status_is_a_no_op(use_case, publisher, trace_ctx) -> None:
    assert use_case.execute(RSV, _status("confirmed"), trace_ctx).status == "confirmed"
    assert publisher.messages == []


def test_illegal_transition_leaves_reservation_untouched(
    use_case, reservation_repository, trace_ctx
) -> None:
    with pytest.raises(ReservationTransitionError):
        use_case.execute(RSV, _status("completed"), trace_ctx)
    assert reservation_repository.reservations[RSV].status == ReservationStatus.CONFIRMED


def test_unknown_reservation(use_case, trace_ctx) -> None:
    with pytest.raises(ReservationNotFoundError):
        use_case.execute(ReservationId("rsv_missing"), _status("seated"), trace_ctx)


def test_status_change_racing_a_cancel_is_rejected(
    use_case, reservation_repository, publisher, trace_ctx
) -> None:
    stored = reservation_repository.reservations[RSV]

    def cancel_elsewhere() -> None:
        reservation_repository.reservations[RSV] = with_status(stored, ReservationStatus.CANCELLED)

    reservation_repository.interleave = cancel_elsewhere
    with pytest.raises(ReservationChangedError):
        use_case.execute(RSV, _status("seated"), trace_ctx)

    assert reservation_repository.reservations[RSV].status == ReservationStatus.CANCELLED
    assert publisher.messages == []


def test_status_change_on_reservation_deleted_meanwhile(
    use_case, reservation_repository, trace_ctx
) -> None:
    reservation_repository.interleave = lambda: reservation_repository.reservations.pop(RSV)
    with pytest.raises(ReservationChangedError):
        use_case.execute(RSV, _status("seated"), trace_ctx)
    assert RSV not in reservation_repository.reservations
