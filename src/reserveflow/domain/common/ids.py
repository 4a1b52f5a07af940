from __future__ import annotations

from typing import NewType

TableId = NewType("TableId", str)
ReservationId = NewType("ReservationId", str)
CustomerId = NewType("CustomerId", str)
ConfigId = NewType("ConfigId", str)
