from __future__ import annotations

import logging
from collections import Counter

from reserveflow.application.dto.requests import SaveTableLayoutRequest
from reserveflow.application.dto.responses import TableListResponse, TableResponse
from reserveflow.application.mappers.event_envelope import serialize_layout_saved_event
from reserveflow.application.mappers.table_mapper import to_table, to_table_response
from reserveflow.application.ports.publisher import EventPublisher
from reserveflow.application.ports.repositories import TableRepository
from reserveflow.application.use_cases.clock import Clock, utc_now
from reserveflow.application.use_cases.context import TraceContext
from reserveflow.application.use_cases.events import publish_event
from reserveflow.domain.common.errors import InvalidInputError
from reserveflow.domain.common.ids import TableId
from reserveflow.domain.table.entities import TableArea

logger = logging.getLogger(__name__)


class TableNotFoundError(Exception):
    pass


class TableInUseError(Exception):
    pass


def parse_area(area: str | None) -> TableArea | None:
    if area is None or area.lower() == "all":
        return None
    try:
        return TableArea(area.lower())
    except ValueError as exc:
        raise InvalidInputError(f"invalid table area: {area}") from exc


class ListTables:
    def __init__(self, table_repository: TableRepository) -> None:
        self._table_repository = table_repository

    def execute(
        self,
        *,
        include_inactive: bool = False,
        area: str | None = None,
    ) -> TableListResponse:
        tables = self._table_repository.list_tables(
            include_inactive=include_inactive,
            area=parse_area(area),
        )
        return TableListResponse(tables=[to_table_response(table) for table in tables])


class SaveTableLayout:
    """Replaces the floor plan.

    Tables left out of the new layout are deactivated, never deleted, so
    existing reservations keep resolving their table references.
    """

    def __init__(
        self,
        table_repository: TableRepository,
        publisher: EventPublisher,
        clock: Clock = utc_now,
    ) -> None:
        self._table_repository = table_repository
        self._publisher = publisher
        self._clock = clock

    def execute(
        self,
        request_dto: SaveTableLayoutRequest,
        trace_ctx: TraceContext,
    ) -> TableListResponse:
        duplicates = [
            table_id
            for table_id, count in Counter(t.table_id for t in request_dto.tables).items()
            if count > 1
        ]
        if duplicates:
            raise InvalidInputError(
                f"duplicate table ids in layout: {', '.join(sorted(duplicates))}"
            )

        tables = [to_table(item) for item in request_dto.tables]
        stored = self._table_repository.replace_layout(tables)
        logger.info("table_layout_saved", extra={"table_ids": [str(t.table_id) for t in tables]})

        publish_event(
            self._publisher,
            serialize_layout_saved_event(
                [str(table.table_id) for table in tables], self._clock(), trace_ctx
            ),
        )
        return TableListResponse(tables=[to_table_response(table) for table in stored])


class DeactivateTable:
    def __init__(self, table_repository: TableRepository) -> None:
        self._table_repository = table_repository

    def execute(self, table_id: TableId) -> TableResponse:
        table = self._table_repository.get(table_id)
        if table is None:
            raise TableNotFoundError(f"table not found: {table_id}")
        deactivated = table.deactivate()
        if deactivated is not table:
            self._table_repository.upsert(deactivated)
        return to_table_response(deactivated)


class PurgeTable:
    """Administrative hard delete; availability code never takes this path."""

    def __init__(self, table_repository: TableRepository) -> None:
        self._table_repository = table_repository

    def execute(self, table_id: TableId) -> None:
        if self._table_repository.get(table_id) is None:
            raise TableNotFoundError(f"table not found: {table_id}")
        if self._table_repository.is_referenced(table_id):
            raise TableInUseError(
                f"table {table_id} is referenced by reservations; deactivate it instead"
            )
        self._table_repository.purge(table_id)
        logger.info("table_purged", extra={"table_ids": [str(table_id)]})
