from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field

from reserveflow.application.use_cases.context import TraceContext
from reserveflow.domain.reservation.entities import Reservation

RESERVATION_EVENTS_CHANNEL = "events:reservations"


class EventEnvelope(BaseModel):
    event_id: str = Field(default_factory=lambda: str(uuid4()))
    event_type: str
    occurred_at: datetime
    request_id: str | None = None
    trace_id: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)


def _envelope(
    event_type: str,
    occurred_at: datetime,
    trace_ctx: TraceContext,
    payload: dict[str, Any],
) -> str:
    return EventEnvelope(
        event_type=event_type,
        occurred_at=occurred_at,
        request_id=trace_ctx.request_id,
        trace_id=trace_ctx.trace_id,
        payload=payload,
    ).model_dump_json()


def reservation_payload(reservation: Reservation) -> dict[str, Any]:
    return {
        "reservationId": str(reservation.reservation_id),
        "date": reservation.date.isoformat(),
        "startTime": reservation.start_time,
        "endTime": reservation.end_time,
        "partySize": reservation.party_size,
        "tableIds": sorted(str(table_id) for table_id in reservation.table_ids),
        "status": reservation.status.value,
    }


def serialize_reservation_event(
    event_type: str,
    reservation: Reservation,
    occurred_at: datetime,
    trace_ctx: TraceContext,
) -> str:
    return _envelope(event_type, occurred_at, trace_ctx, reservation_payload(reservation))


def serialize_reservation_deleted_event(
    reservation_id: str,
    occurred_at: datetime,
    trace_ctx: TraceContext,
) -> str:
    return _envelope(
        "reservation.deleted", occurred_at, trace_ctx, {"reservationId": reservation_id}
    )


def serialize_layout_saved_event(
    table_ids: list[str],
    occurred_at: datetime,
    trace_ctx: TraceContext,
) -> str:
    return _envelope("tables.layout_saved", occurred_at, trace_ctx, {"tableIds": table_ids})


def serialize_config_saved_event(
    config_id: str,
    occurred_at: datetime,
    trace_ctx: TraceContext,
) -> str:
    return _envelope("config.saved", occurred_at, trace_ctx, {"configId": config_id})
