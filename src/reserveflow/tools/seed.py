from __future__ import annotations

import logging

from reserveflow.domain.common.ids import TableId
from reserveflow.domain.config.entities import RestaurantConfig, Weekday, WorkingHours
from reserveflow.domain.table.entities import Capacity, Position, Table, TableArea
from reserveflow.infrastructure.db.models import config as config_models  # noqa: F401
from reserveflow.infrastructure.db.models import reservation as reservation_models  # noqa: F401
from reserveflow.infrastructure.db.models import table as table_models  # noqa: F401
from reserveflow.infrastructure.db.models.base import Base
from reserveflow.infrastructure.db.repositories.config_repo import SqlAlchemyConfigRepository
from reserveflow.infrastructure.db.repositories.table_repo import SqlAlchemyTableRepository
from reserveflow.infrastructure.db.session import get_engine
from reserveflow.infrastructure.observability.logging_config import configure_logging

logger = logging.getLogger(__name__)

_WEEKDAY_HOURS = WorkingHours(is_open=True, open_time="09:00", close_time="22:00")
_WEEKEND_HOURS = WorkingHours(is_open=True, open_time="09:00", close_time="23:00")


def default_config() -> RestaurantConfig:
    return RestaurantConfig(
        name="ReserveFlow Bistro",
        working_hours={
            Weekday.SUNDAY: WorkingHours(is_open=True, open_time="10:00", close_time="21:00"),
            Weekday.MONDAY: _WEEKDAY_HOURS,
            Weekday.TUESDAY: _WEEKDAY_HOURS,
            Weekday.WEDNESDAY: _WEEKDAY_HOURS,
            Weekday.THURSDAY: _WEEKDAY_HOURS,
            Weekday.FRIDAY: _WEEKEND_HOURS,
            Weekday.SATURDAY: _WEEKEND_HOURS,
        },
        time_slot_duration=30,
        reservation_duration=120,
    )


def _table(
    table_id: str,
    name: str,
    area: TableArea,
    capacity: tuple[int, int],
    position: tuple[int, int],
    is_adjustable: bool = True,
) -> Table:
    return Table(
        table_id=TableId(table_id),
        name=name,
        area=area,
        capacity=Capacity(min=capacity[0], max=capacity[1]),
        is_adjustable=is_adjustable,
        position=Position(x=position[0], y=position[1]),
    )


def starter_floor_plan() -> list[Table]:
    bar = [
        _table(f"bar-{n}", f"Bar {2 * n - 1}-{2 * n}", TableArea.BAR, (1, 2), (20 + 80 * n, 20))
        for n in range(1, 5)
    ]
    inside = [
        _table("in-1", "Table 1", TableArea.INSIDE, (2, 4), (80, 80)),
        _table("in-2", "Table 2", TableArea.INSIDE, (2, 4), (200, 80)),
        _table("in-3", "Table 3", TableArea.INSIDE, (4, 6), (320, 80)),
        _table("in-4", "Table 4", TableArea.INSIDE, (2, 4), (80, 160)),
        _table("in-5", "Table 5", TableArea.INSIDE, (4, 8), (200, 160)),
        _table("in-6", "Table 6", TableArea.INSIDE, (2, 4), (320, 160)),
    ]
    outside = [
        _table("out-1", "Patio 1", TableArea.OUTSIDE, (2, 2), (60, 60), is_adjustable=False),
        _table("out-2", "Patio 2", TableArea.OUTSIDE, (4, 4), (180, 60), is_adjustable=False),
        _table("out-3", "Patio 3", TableArea.OUTSIDE, (2, 2), (300, 60), is_adjustable=False),
        _table("out-4", "Patio 4", TableArea.OUTSIDE, (6, 6), (120, 140), is_adjustable=False),
        _table("out-5", "Patio 5", TableArea.OUTSIDE, (4, 4), (240, 140), is_adjustable=False),
    ]
    return bar + inside + outside


def main() -> None:
    configure_logging()
    engine = get_engine(timeout_seconds=2.0)
    Base.metadata.create_all(engine)

    config_repository = SqlAlchemyConfigRepository(engine)
    if config_repository.get() is None:
        config_repository.replace(default_config())
        logger.info("seed_config_created")

    table_repository = SqlAlchemyTableRepository(engine)
    if not table_repository.list_tables(include_inactive=True):
        for table in starter_floor_plan():
            table_repository.upsert(table)
        logger.info("seed_tables_created")

    logger.info("seed_complete")


if __name__ == "__main__":
    main()
