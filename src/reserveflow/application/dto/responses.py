from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class WorkingHoursResponse(BaseModel):
    isOpen: bool
    openTime: str
    closeTime: str


class ConfigResponse(BaseModel):
    id: str
    name: str
    workingHours: dict[str, WorkingHoursResponse]
    timeSlotDuration: int
    reservationDuration: int
    advanceBookingDays: int
    timezone: str
    updatedAt: datetime


class CapacityResponse(BaseModel):
    min: int
    max: int


class PositionResponse(BaseModel):
    x: float
    y: float


class TableResponse(BaseModel):
    id: str
    name: str
    area: str
    capacity: CapacityResponse
    isAdjustable: bool
    position: PositionResponse
    isActive: bool


class TableListResponse(BaseModel):
    tables: list[TableResponse] = Field(default_factory=list)


class TimeSlotsResponse(BaseModel):
    date: str
    weekday: str
    isBookable: bool
    workingHours: WorkingHoursResponse
    slots: list[str] = Field(default_factory=list)


class AvailableTablesResponse(BaseModel):
    date: str
    startTime: str
    endTime: str
    partySize: int
    tables: list[TableResponse] = Field(default_factory=list)


class TableStatusItemResponse(BaseModel):
    tableId: str
    name: str
    area: str
    status: str


class FloorStatusResponse(BaseModel):
    date: str
    time: str
    tables: list[TableStatusItemResponse] = Field(default_factory=list)


class CustomerResponse(BaseModel):
    id: str
    name: str
    phone: str
    email: str | None = None
    notes: str | None = None
    vipStatus: bool = False


class ReservationResponse(BaseModel):
    id: str
    customer: CustomerResponse
    partySize: int
    date: str
    startTime: str
    endTime: str
    tableIds: list[str] = Field(default_factory=list)
    status: str
    specialRequests: str | None = None
    createdAt: datetime
    updatedAt: datetime


class ReservationListResponse(BaseModel):
    reservations: list[ReservationResponse] = Field(default_factory=list)


class DailySummaryResponse(BaseModel):
    date: str
    totalReservations: int
    totalGuests: int
    confirmedReservations: int
    occupiedTables: int
    upcoming: list[ReservationResponse] = Field(default_factory=list)
