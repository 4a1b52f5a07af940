from __future__ import annotations

import logging
from uuid import uuid4

from reserveflow.application.dto.requests import CreateReservationRequest
from reserveflow.application.dto.responses import ReservationResponse
from reserveflow.application.mappers.event_envelope import serialize_reservation_event
from reserveflow.application.mappers.reservation_mapper import (
    to_customer,
    to_reservation_response,
)
from reserveflow.application.metrics.reservation_lifecycle import (
    record_conflict,
    record_reservation_written,
)
from reserveflow.application.ports.publisher import EventPublisher
from reserveflow.application.ports.repositories import (
    ReservationConflictError,
    ReservationRepository,
    TableRepository,
)
from reserveflow.application.use_cases.booking import (
    TableAssignmentConflictError,
    ensure_assignable,
    ensure_bookable,
)
from reserveflow.application.use_cases.clock import Clock, restaurant_today, utc_now
from reserveflow.application.use_cases.config import ConfigLoader
from reserveflow.application.use_cases.context import TraceContext
from reserveflow.application.use_cases.events import publish_event
from reserveflow.domain.availability.slots import reservation_end_time
from reserveflow.domain.common.ids import ReservationId, TableId
from reserveflow.domain.common.wallclock import parse_date
from reserveflow.domain.reservation.entities import Reservation, ReservationStatus

logger = logging.getLogger(__name__)


class CreateReservation:
    def __init__(
        self,
        loader: ConfigLoader,
        table_repository: TableRepository,
        reservation_repository: ReservationRepository,
        publisher: EventPublisher,
        clock: Clock = utc_now,
    ) -> None:
        self._loader = loader
        self._table_repository = table_repository
        self._reservation_repository = reservation_repository
        self._publisher = publisher
        self._clock = clock

    def execute(
        self,
        request_dto: CreateReservationRequest,
        trace_ctx: TraceContext,
    ) -> ReservationResponse:
        config = self._loader.load()
        now = self._clock()
        day = parse_date(request_dto.date)
        start = ensure_bookable(config, day, request_dto.start_time, restaurant_today(config, now))

        reservation = Reservation(
            reservation_id=ReservationId(f"rsv_{uuid4().hex[:12]}"),
            customer=to_customer(request_dto.customer),
            party_size=request_dto.party_size,
            date=day,
            start_time=start,
            end_time=reservation_end_time(config, start),
            table_ids=frozenset(TableId(table_id) for table_id in request_dto.table_ids),
            status=ReservationStatus(request_dto.status),
            created_at=now,
            updated_at=now,
            special_requests=request_dto.special_requests,
        )

        ensure_assignable(
            reservation,
            self._table_repository.list_tables(include_inactive=True),
            self._reservation_repository.list_for_date(day),
        )
        try:
            self._reservation_repository.add(reservation)
        except ReservationConflictError as exc:
            record_conflict(exc.conflict)
            raise TableAssignmentConflictError(exc.conflict) from exc

        record_reservation_written(reservation.status)
        logger.info(
            "reservation_created",
            extra={
                "reservation_id": str(reservation.reservation_id),
                "date": day.isoformat(),
                "table_ids": sorted(str(table_id) for table_id in reservation.table_ids),
            },
        )
        publish_event(
            self._publisher,
            serialize_reservation_event("reservation.created", reservation, now, trace_ctx),
        )
        return to_reservation_response(reservation)
