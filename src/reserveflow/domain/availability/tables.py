from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date

from reserveflow.domain.availability.overlap import blocking_reservations
from reserveflow.domain.availability.schedule import is_date_available
from reserveflow.domain.common.errors import InvalidInputError
from reserveflow.domain.common.ids import TableId
from reserveflow.domain.common.wallclock import parse_time
from reserveflow.domain.config.entities import RestaurantConfig
from reserveflow.domain.reservation.entities import Reservation
from reserveflow.domain.table.entities import Table


def available_tables(
    day: date,
    start_time: str,
    end_time: str,
    party_size: int,
    tables: Sequence[Table],
    reservations: Iterable[Reservation],
    *,
    config: RestaurantConfig,
    today: date,
) -> list[Table]:
    """Active tables that fit ``party_size`` and are free for the window.

    An empty list means nothing fits; it is not an error. Input order of
    ``tables`` is preserved.
    """
    if parse_time(start_time) >= parse_time(end_time):
        raise InvalidInputError(f"window start {start_time} must be before end {end_time}")
    if party_size < 1:
        raise InvalidInputError("party_size must be >= 1")

    if not is_date_available(config, day, today):
        return []

    excluded: set[TableId] = set()
    for reservation in blocking_reservations(reservations, day, start_time, end_time):
        excluded.update(reservation.table_ids)

    return [
        table
        for table in tables
        if table.is_active
        and table.table_id not in excluded
        and table.capacity.fits(party_size)
    ]
