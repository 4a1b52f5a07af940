from __future__ import annotations

from reserveflow.application.dto.requests import TableRequest
from reserveflow.application.dto.responses import (
    CapacityResponse,
    PositionResponse,
    TableResponse,
)
from reserveflow.domain.common.ids import TableId
from reserveflow.domain.table.entities import Capacity, Position, Table, TableArea


def to_table_response(table: Table) -> TableResponse:
    return TableResponse(
        id=str(table.table_id),
        name=table.name,
        area=table.area.value,
        capacity=CapacityResponse(min=table.capacity.min, max=table.capacity.max),
        isAdjustable=table.is_adjustable,
        position=PositionResponse(x=table.position.x, y=table.position.y),
        isActive=table.is_active,
    )


def to_table(request: TableRequest) -> Table:
    return Table(
        table_id=TableId(request.table_id),
        name=request.name,
        area=TableArea(request.area),
        capacity=Capacity(min=request.capacity.min, max=request.capacity.max),
        is_adjustable=request.is_adjustable,
        position=Position(x=request.position.x, y=request.position.y),
        is_active=request.is_active,
    )
