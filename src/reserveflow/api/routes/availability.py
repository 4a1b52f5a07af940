from __future__ import annotations

from fastapi import APIRouter, Query

from reserveflow.api.wiring import config_loader
from reserveflow.application.dto.responses import AvailableTablesResponse, TimeSlotsResponse
from reserveflow.application.use_cases.availability import FindAvailableTables, GetTimeSlots
from reserveflow.infrastructure.db.repositories.reservation_repo import (
    SqlAlchemyReservationRepository,
)
from reserveflow.infrastructure.db.repositories.table_repo import SqlAlchemyTableRepository

router = APIRouter(tags=["availability"])


def _get_time_slots_use_case() -> GetTimeSlots:
    return GetTimeSlots(loader=config_loader())


def _find_available_tables_use_case() -> FindAvailableTables:
    return FindAvailableTables(
        loader=config_loader(),
        table_repository=SqlAlchemyTableRepository(),
        reservation_repository=SqlAlchemyReservationRepository(),
    )


@router.get("/v1/availability/slots", response_model=TimeSlotsResponse)
def get_time_slots(date: str = Query()) -> TimeSlotsResponse:
    return _get_time_slots_use_case().execute(day=date)


@router.get("/v1/availability/tables", response_model=AvailableTablesResponse)
def find_available_tables(
    date: str = Query(),
    start_time: str = Query(alias="startTime"),
    party_size: int = Query(alias="partySize"),
    area: str | None = Query(default=None),
) -> AvailableTablesResponse:
    return _find_available_tables_use_case().execute(
        date,
        start_time,
        party_size,
        area=area,
    )
