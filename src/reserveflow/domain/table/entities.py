from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from reserveflow.domain.common.errors import InvalidInputError
from reserveflow.domain.common.ids import TableId


class TableArea(str, Enum):
    BAR = "bar"
    INSIDE = "inside"
    OUTSIDE = "outside"


@dataclass(frozen=True)
class Capacity:
    min: int
    max: int

    def __post_init__(self) -> None:
        if self.min < 1:
            raise InvalidInputError("capacity.min must be >= 1")
        if self.min > self.max:
            raise InvalidInputError(
                f"capacity.min ({self.min}) must be <= capacity.max ({self.max})"
            )

    def fits(self, party_size: int) -> bool:
        return self.min <= party_size <= self.max


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class Table:
    table_id: TableId
    name: str
    area: TableArea
    capacity: Capacity
    is_adjustable: bool
    position: Position
    is_active: bool = True

    def __post_init__(self) -> None:
        if not str(self.table_id).strip():
            raise InvalidInputError("table_id must be non-empty")
        if not self.name.strip():
            raise InvalidInputError("table name must be non-empty")

    def deactivate(self) -> Table:
        if not self.is_active:
            return self
        return replace(self, is_active=False)
