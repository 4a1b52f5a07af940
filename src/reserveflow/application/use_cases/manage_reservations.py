from __future__ import annotations

import logging

from reserveflow.application.dto.responses import (
    DailySummaryResponse,
    ReservationListResponse,
    ReservationResponse,
)
from reserveflow.application.mappers.event_envelope import serialize_reservation_deleted_event
from reserveflow.application.mappers.reservation_mapper import to_reservation_response
from reserveflow.application.ports.publisher import EventPublisher
from reserveflow.application.ports.repositories import ReservationRepository
from reserveflow.application.use_cases.clock import Clock, restaurant_today, utc_now
from reserveflow.application.use_cases.config import ConfigLoader
from reserveflow.application.use_cases.context import TraceContext
from reserveflow.application.use_cases.events import publish_event
from reserveflow.domain.common.errors import InvalidInputError
from reserveflow.domain.common.ids import ReservationId
from reserveflow.domain.common.wallclock import parse_date
from reserveflow.domain.reservation.entities import Reservation, ReservationStatus

logger = logging.getLogger(__name__)

UPCOMING_LIMIT = 5


class ReservationNotFoundError(Exception):
    pass


class ReservationChangedError(Exception):
    pass


def _parse_status(status: str | None) -> ReservationStatus | None:
    if status is None or status.lower() == "all":
        return None
    try:
        return ReservationStatus(status.lower())
    except ValueError as exc:
        raise InvalidInputError(f"invalid reservation status: {status}") from exc


def _matches(reservation: Reservation, query: str) -> bool:
    customer = reservation.customer
    return (
        query.lower() in customer.name.lower()
        or query in customer.phone
        or query in str(reservation.reservation_id)
    )


def _chronological(reservations: list[Reservation]) -> list[Reservation]:
    return sorted(reservations, key=lambda r: (r.date, r.start_time, str(r.reservation_id)))


class GetReservation:
    def __init__(self, reservation_repository: ReservationRepository) -> None:
        self._reservation_repository = reservation_repository

    def execute(self, reservation_id: ReservationId) -> ReservationResponse:
        reservation = self._reservation_repository.get(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError(f"reservation not found: {reservation_id}")
        return to_reservation_response(reservation)


class ListReservations:
    def __init__(self, reservation_repository: ReservationRepository) -> None:
        self._reservation_repository = reservation_repository

    def execute(
        self,
        *,
        day: str | None = None,
        status: str | None = None,
        query: str | None = None,
    ) -> ReservationListResponse:
        reservations = self._reservation_repository.list_reservations(
            day=parse_date(day) if day else None,
            status=_parse_status(status),
        )
        if query and query.strip():
            reservations = [r for r in reservations if _matches(r, query.strip())]
        return ReservationListResponse(
            reservations=[to_reservation_response(r) for r in _chronological(reservations)]
        )


class DeleteReservation:
    def __init__(
        self,
        reservation_repository: ReservationRepository,
        publisher: EventPublisher,
        clock: Clock = utc_now,
    ) -> None:
        self._reservation_repository = reservation_repository
        self._publisher = publisher
        self._clock = clock

    def execute(self, reservation_id: ReservationId, trace_ctx: TraceContext) -> None:
        if not self._reservation_repository.delete(reservation_id):
            raise ReservationNotFoundError(f"reservation not found: {reservation_id}")

        logger.info("reservation_deleted", extra={"reservation_id": str(reservation_id)})
        publish_event(
            self._publisher,
            serialize_reservation_deleted_event(str(reservation_id), self._clock(), trace_ctx),
        )


class GetDailySummary:
    """Front-of-house numbers for one day; defaults to today at the restaurant."""

    def __init__(
        self,
        loader: ConfigLoader,
        reservation_repository: ReservationRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._loader = loader
        self._reservation_repository = reservation_repository
        self._clock = clock

    def execute(self, day: str | None = None) -> DailySummaryResponse:
        if day:
            parsed_day = parse_date(day)
        else:
            parsed_day = restaurant_today(self._loader.load(), self._clock())

        reservations = self._reservation_repository.list_for_date(parsed_day)
        confirmed = _chronological(
            [r for r in reservations if r.status == ReservationStatus.CONFIRMED]
        )
        return DailySummaryResponse(
            date=parsed_day.isoformat(),
            totalReservations=len(reservations),
            totalGuests=sum(r.party_size for r in reservations),
            confirmedReservations=len(confirmed),
            occupiedTables=sum(
                len(r.table_ids) for r in reservations if r.status == ReservationStatus.SEATED
            ),
            upcoming=[to_reservation_response(r) for r in confirmed[:UPCOMING_LIMIT]],
        )
