from __future__ import annotations

from fastapi import APIRouter, Query, Response, status

from reserveflow.api.tracing import current_trace_context
from reserveflow.api.wiring import config_loader
from reserveflow.application.dto.requests import (
    ChangeReservationStatusRequest,
    CreateReservationRequest,
    UpdateReservationRequest,
)
from reserveflow.application.dto.responses import (
    DailySummaryResponse,
    ReservationListResponse,
    ReservationResponse,
)
from reserveflow.application.use_cases.create_reservation import CreateReservation
from reserveflow.application.use_cases.manage_reservations import (
    DeleteReservation,
    GetDailySummary,
    GetReservation,
    ListReservations,
)
from reserveflow.application.use_cases.reservation_status import ChangeReservationStatus
from reserveflow.application.use_cases.update_reservation import UpdateReservation
from reserveflow.domain.common.ids import ReservationId
from reserveflow.infrastructure.db.repositories.reservation_repo import (
    SqlAlchemyReservationRepository,
)
from reserveflow.infrastructure.db.repositories.table_repo import SqlAlchemyTableRepository
from reserveflow.infrastructure.messaging.redis_publisher import RedisEventPublisher

router = APIRouter(tags=["reservations"])


def _create_reservation_use_case() -> CreateReservation:
    return CreateReservation(
        loader=config_loader(),
        table_repository=SqlAlchemyTableRepository(),
        reservation_repository=SqlAlchemyReservationRepository(),
        publisher=RedisEventPublisher(),
    )


def _update_reservation_use_case() -> UpdateReservation:
    return UpdateReservation(
        loader=config_loader(),
        table_repository=SqlAlchemyTableRepository(),
        reservation_repository=SqlAlchemyReservationRepository(),
        publisher=RedisEventPublisher(),
    )


def _change_status_use_case() -> ChangeReservationStatus:
    return ChangeReservationStatus(
        reservation_repository=SqlAlchemyReservationRepository(),
        publisher=RedisEventPublisher(),
    )


def _get_reservation_use_case() -> GetReservation:
    return GetReservation(reservation_repository=SqlAlchemyReservationRepository())


def _list_reservations_use_case() -> ListReservations:
    return ListReservations(reservation_repository=SqlAlchemyReservationRepository())


def _delete_reservation_use_case() -> DeleteReservation:
    return DeleteReservation(
        reservation_repository=SqlAlchemyReservationRepository(),
        publisher=RedisEventPublisher(),
    )


def _daily_summary_use_case() -> GetDailySummary:
    return GetDailySummary(
        loader=config_loader(),
        reservation_repository=SqlAlchemyReservationRepository(),
    )


@router.get("/v1/reservations", response_model=ReservationListResponse)
def list_reservations(
    date: str | None = Query(default=None),
    status_filter: str | None = Query(default=None, alias="status"),
    query: str | None = Query(default=None, alias="q"),
) -> ReservationListResponse:
    return _list_reservations_use_case().execute(day=date, status=status_filter, query=query)


@router.get("/v1/reservations/summary", response_model=DailySummaryResponse)
def get_daily_summary(date: str | None = Query(default=None)) -> DailySummaryResponse:
    return _daily_summary_use_case().execute(day=date)


@router.get("/v1/reservations/{reservation_id}", response_model=ReservationResponse)
def get_reservation(reservation_id: str) -> ReservationResponse:
    return _get_reservation_use_case().execute(ReservationId(reservation_id))


@router.post(
    "/v1/reservations",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_reservation(request: CreateReservationRequest) -> ReservationResponse:
    return _create_reservation_use_case().execute(
        request_dto=request,
        trace_ctx=current_trace_context(),
    )


@router.put("/v1/reservations/{reservation_id}", response_model=ReservationResponse)
def update_reservation(
    reservation_id: str,
    request: UpdateReservationRequest,
) -> ReservationResponse:
    return _update_reservation_use_case().execute(
        reservation_id=ReservationId(reservation_id),
        request_dto=request,
        trace_ctx=current_trace_context(),
    )


@router.post("/v1/reservations/{reservation_id}/status", response_model=ReservationResponse)
def change_reservation_status(
    reservation_id: str,
    request: ChangeReservationStatusRequest,
) -> ReservationResponse:
    return _change_status_use_case().execute(
        reservation_id=ReservationId(reservation_id),
        request_dto=request,
        trace_ctx=current_trace_context(),
    )


@router.delete("/v1/reservations/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reservation(reservation_id: str) -> Response:
    _delete_reservation_use_case().execute(
        reservation_id=ReservationId(reservation_id),
        trace_ctx=current_trace_context(),
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
