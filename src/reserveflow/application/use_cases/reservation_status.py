from __future__ import annotations

import logging

from reserveflow.application.dto.requests import ChangeReservationStatusRequest
from reserveflow.application.dto.responses import ReservationResponse
from reserveflow.application.mappers.event_envelope import serialize_reservation_event
from reserveflow.application.mappers.reservation_mapper import to_reservation_response
from reserveflow.application.metrics.reservation_lifecycle import record_transition
from reserveflow.application.ports.publisher import EventPublisher
from reserveflow.application.ports.repositories import (
    ReservationRepository,
    StaleReservationError,
)
from reserveflow.application.use_cases.clock import Clock, utc_now
from reserveflow.application.use_cases.context import TraceContext
from reserveflow.application.use_cases.events import publish_event
from reserveflow.application.use_cases.manage_reservations import (
    ReservationChangedError,
    ReservationNotFoundError,
)
from reserveflow.domain.common.ids import ReservationId
from reserveflow.domain.reservation.entities import ReservationStatus

logger = logging.getLogger(__name__)


class ChangeReservationStatus:
    def __init__(
        self,
        reservation_repository: ReservationRepository,
        publisher: EventPublisher,
        clock: Clock = utc_now,
    ) -> None:
        self._reservation_repository = reservation_repository
        self._publisher = publisher
        self._clock = clock

    def execute(
        self,
        reservation_id: ReservationId,
        request_dto: ChangeReservationStatusRequest,
        trace_ctx: TraceContext,
    ) -> ReservationResponse:
        reservation = self._reservation_repository.get(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError(f"reservation not found: {reservation_id}")

        now = self._clock()
        target = ReservationStatus(request_dto.status)
        updated = reservation.transition_to(target, now)
        if updated is reservation:
            return to_reservation_response(reservation)

        try:
            self._reservation_repository.update_status(updated, expected_status=reservation.status)
        except StaleReservationError as exc:
            raise ReservationChangedError(
                f"reservation {reservation_id} changed while moving it to {target.value}; "
                "reload and retry"
            ) from exc
        record_transition(reservation.status, updated.status)
        logger.info(
            "reservation_status_changed",
            extra={
                "reservation_id": str(reservation_id),
                "from_status": reservation.status.value,
                "status": updated.status.value,
            },
        )
        publish_event(
            self._publisher,
            serialize_reservation_event("reservation.status_changed", updated, now, trace_ctx),
        )
        return to_reservation_response(updated)
