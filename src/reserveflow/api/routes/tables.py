from __future__ import annotations

from fastapi import APIRouter, Query, Response, status

from reserveflow.api.tracing import current_trace_context
from reserveflow.application.dto.requests import SaveTableLayoutRequest
from reserveflow.application.dto.responses import (
    FloorStatusResponse,
    TableListResponse,
    TableResponse,
)
from reserveflow.application.use_cases.availability import GetFloorStatus
from reserveflow.application.use_cases.tables import (
    DeactivateTable,
    ListTables,
    PurgeTable,
    SaveTableLayout,
)
from reserveflow.domain.common.ids import TableId
from reserveflow.infrastructure.db.repositories.reservation_repo import (
    SqlAlchemyReservationRepository,
)
from reserveflow.infrastructure.db.repositories.table_repo import SqlAlchemyTableRepository
from reserveflow.infrastructure.messaging.redis_publisher import RedisEventPublisher

router = APIRouter(tags=["tables"])


def _list_tables_use_case() -> ListTables:
    return ListTables(table_repository=SqlAlchemyTableRepository())


def _save_table_layout_use_case() -> SaveTableLayout:
    return SaveTableLayout(
        table_repository=SqlAlchemyTableRepository(),
        publisher=RedisEventPublisher(),
    )


def _get_floor_status_use_case() -> GetFloorStatus:
    return GetFloorStatus(
        table_repository=SqlAlchemyTableRepository(),
        reservation_repository=SqlAlchemyReservationRepository(),
    )


def _deactivate_table_use_case() -> DeactivateTable:
    return DeactivateTable(table_repository=SqlAlchemyTableRepository())


def _purge_table_use_case() -> PurgeTable:
    return PurgeTable(table_repository=SqlAlchemyTableRepository())


@router.get("/v1/tables", response_model=TableListResponse)
def list_tables(
    area: str | None = Query(default=None),
    include_inactive: bool = Query(default=False, alias="includeInactive"),
) -> TableListResponse:
    return _list_tables_use_case().execute(include_inactive=include_inactive, area=area)


@router.put("/v1/tables", response_model=TableListResponse)
def save_table_layout(request: SaveTableLayoutRequest) -> TableListResponse:
    return _save_table_layout_use_case().execute(
        request_dto=request,
        trace_ctx=current_trace_context(),
    )


@router.get("/v1/tables/status", response_model=FloorStatusResponse)
def get_floor_status(
    date: str = Query(),
    time: str = Query(),
) -> FloorStatusResponse:
    return _get_floor_status_use_case().execute(day=date, time=time)


@router.post("/v1/tables/{table_id}/deactivate", response_model=TableResponse)
def deactivate_table(table_id: str) -> TableResponse:
    return _deactivate_table_use_case().execute(TableId(table_id))


@router.delete("/v1/tables/{table_id}", status_code=status.HTTP_204_NO_CONTENT)
def purge_table(table_id: str) -> Response:
    _purge_table_use_case().execute(TableId(table_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
