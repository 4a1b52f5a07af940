from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class WorkingHoursRequest(CamelBaseModel):
    is_open: bool
    open_time: str
    close_time: str


class SaveConfigRequest(CamelBaseModel):
    name: str = Field(min_length=1)
    working_hours: dict[str, WorkingHoursRequest]
    time_slot_duration: int
    reservation_duration: int
    advance_booking_days: int = 90
    timezone: str = "UTC"


class CapacityRequest(CamelBaseModel):
    min: int
    max: int


class PositionRequest(CamelBaseModel):
    x: float = 0
    y: float = 0


class TableRequest(CamelBaseModel):
    table_id: str = Field(alias="id", min_length=1)
    name: str
    area: Literal["bar", "inside", "outside"]
    capacity: CapacityRequest
    is_adjustable: bool = False
    position: PositionRequest = Field(default_factory=PositionRequest)
    is_active: bool = True


class SaveTableLayoutRequest(CamelBaseModel):
    tables: list[TableRequest]


class CustomerRequest(CamelBaseModel):
    customer_id: str | None = Field(default=None, alias="id")
    name: str
    phone: str
    email: str | None = None
    notes: str | None = None
    vip_status: bool = False


class CreateReservationRequest(CamelBaseModel):
    customer: CustomerRequest
    party_size: int
    date: str
    start_time: str
    table_ids: list[str] = Field(min_length=1)
    status: Literal["confirmed", "seated"] = "confirmed"
    special_requests: str | None = None


class UpdateReservationRequest(CamelBaseModel):
    customer: CustomerRequest
    party_size: int
    date: str
    start_time: str
    table_ids: list[str] = Field(min_length=1)
    special_requests: str | None = None


class ChangeReservationStatusRequest(CamelBaseModel):
    status: Literal["confirmed", "seated", "completed", "cancelled", "no-show"]
