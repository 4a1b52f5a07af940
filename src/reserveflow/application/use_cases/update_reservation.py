from __future__ import annotations

import logging
from dataclasses import replace

from reserveflow.application.dto.requests import UpdateReservationRequest
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
    StaleReservationError,
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
from reserveflow.application.use_cases.manage_reservations import (
    ReservationChangedError,
    ReservationNotFoundError,
)
from reserveflow.domain.availability.slots import reservation_end_time
from reserveflow.domain.common.ids import ReservationId, TableId
from reserveflow.domain.common.wallclock import format_time, parse_date, parse_time

logger = logging.getLogger(__name__)


class ReservationNotEditableError(Exception):
    pass


class UpdateReservation:
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
        reservation_id: ReservationId,
        request_dto: UpdateReservationRequest,
        trace_ctx: TraceContext,
    ) -> ReservationResponse:
        existing = self._reservation_repository.get(reservation_id)
        if existing is None:
            raise ReservationNotFoundError(f"reservation not found: {reservation_id}")
        if existing.is_terminal:
            raise ReservationNotEditableError(
                f"reservation {reservation_id} is {existing.status.value} and can no longer change"
            )

        config = self._loader.load()
        now = self._clock()
        day = parse_date(request_dto.date)
        start = format_time(parse_time(request_dto.start_time))
        end = existing.end_time
        # A reservation keeps its window unless it is moved.
        if (day, start) != (existing.date, existing.start_time):
            start = ensure_bookable(config, day, start, restaurant_today(config, now))
            end = reservation_end_time(config, start)

        customer = to_customer(request_dto.customer)
        if request_dto.customer.customer_id is None:
            customer = replace(customer, customer_id=existing.customer.customer_id)

        updated = replace(
            existing,
            customer=customer,
            party_size=request_dto.party_size,
            date=day,
            start_time=start,
            end_time=end,
            table_ids=frozenset(TableId(table_id) for table_id in request_dto.table_ids),
            special_requests=request_dto.special_requests,
            updated_at=now,
        )

        ensure_assignable(
            updated,
            self._table_repository.list_tables(include_inactive=True),
            self._reservation_repository.list_for_date(day),
            exclude_reservation_id=reservation_id,
        )
        try:
            self._reservation_repository.replace(updated, expected_status=existing.status)
        except ReservationConflictError as exc:
            record_conflict(exc.conflict)
            raise TableAssignmentConflictError(exc.conflict) from exc
        except StaleReservationError as exc:
            raise ReservationChangedError(
                f"reservation {reservation_id} changed while it was being edited; reload and retry"
            ) from exc

        record_reservation_written(updated.status)
        logger.info(
            "reservation_updated",
            extra={
                "reservation_id": str(reservation_id),
                "date": day.isoformat(),
                "table_ids": sorted(str(table_id) for table_id in updated.table_ids),
            },
        )
        publish_event(
            self._publisher,
            serialize_reservation_event("reservation.updated", updated, now, trace_ctx),
        )
        return to_reservation_response(updated)
