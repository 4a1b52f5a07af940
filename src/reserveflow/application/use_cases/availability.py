from __future__ import annotations

from reserveflow.application.dto.responses import (
    AvailableTablesResponse,
    FloorStatusResponse,
    TableStatusItemResponse,
    TimeSlotsResponse,
)
from reserveflow.application.mappers.config_mapper import to_working_hours_response
from reserveflow.application.mappers.table_mapper import to_table_response
from reserveflow.application.metrics.reservation_lifecycle import record_availability_query
from reserveflow.application.ports.repositories import ReservationRepository, TableRepository
from reserveflow.application.use_cases.clock import Clock, restaurant_today, utc_now
from reserveflow.application.use_cases.config import ConfigLoader
from reserveflow.application.use_cases.tables import parse_area
from reserveflow.domain.availability.schedule import (
    is_date_available,
    resolve_schedule,
    weekday_of,
)
from reserveflow.domain.availability.slots import generate_slots, reservation_end_time
from reserveflow.domain.availability.status import status_of
from reserveflow.domain.availability.tables import available_tables
from reserveflow.domain.common.wallclock import format_time, parse_date, parse_time


class GetTimeSlots:
    def __init__(self, loader: ConfigLoader, clock: Clock = utc_now) -> None:
        self._loader = loader
        self._clock = clock

    def execute(self, day: str) -> TimeSlotsResponse:
        config = self._loader.load()
        parsed_day = parse_date(day)
        today = restaurant_today(config, self._clock())
        bookable = is_date_available(config, parsed_day, today)
        return TimeSlotsResponse(
            date=parsed_day.isoformat(),
            weekday=weekday_of(parsed_day).value,
            isBookable=bookable,
            workingHours=to_working_hours_response(resolve_schedule(config, parsed_day)),
            slots=list(generate_slots(config, parsed_day)),
        )


class FindAvailableTables:
    def __init__(
        self,
        loader: ConfigLoader,
        table_repository: TableRepository,
        reservation_repository: ReservationRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._loader = loader
        self._table_repository = table_repository
        self._reservation_repository = reservation_repository
        self._clock = clock

    def execute(
        self,
        day: str,
        start_time: str,
        party_size: int,
        *,
        area: str | None = None,
    ) -> AvailableTablesResponse:
        config = self._loader.load()
        parsed_day = parse_date(day)
        start = format_time(parse_time(start_time))
        end = reservation_end_time(config, start)

        tables = available_tables(
            parsed_day,
            start,
            end,
            party_size,
            self._table_repository.list_tables(area=parse_area(area)),
            self._reservation_repository.list_for_date(parsed_day),
            config=config,
            today=restaurant_today(config, self._clock()),
        )
        record_availability_query(found=len(tables))
        return AvailableTablesResponse(
            date=parsed_day.isoformat(),
            startTime=start,
            endTime=end,
            partySize=party_size,
            tables=[to_table_response(table) for table in tables],
        )


class GetFloorStatus:
    def __init__(
        self,
        table_repository: TableRepository,
        reservation_repository: ReservationRepository,
    ) -> None:
        self._table_repository = table_repository
        self._reservation_repository = reservation_repository

    def execute(self, day: str, time: str) -> FloorStatusResponse:
        parsed_day = parse_date(day)
        instant = format_time(parse_time(time))
        reservations = self._reservation_repository.list_for_date(parsed_day)
        return FloorStatusResponse(
            date=parsed_day.isoformat(),
            time=instant,
            tables=[
                TableStatusItemResponse(
                    tableId=str(table.table_id),
                    name=table.name,
                    area=table.area.value,
                    status=status_of(table.table_id, parsed_day, instant, reservations).value,
                )
                for table in self._table_repository.list_tables()
            ],
        )
