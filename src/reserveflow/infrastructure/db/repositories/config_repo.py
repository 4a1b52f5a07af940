from __future__ import annotations

from datetime import timezone

from sqlalchemy import Engine, delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session, selectinload

from reserveflow.application.ports.repositories import ConfigRepository
from reserveflow.domain.common.ids import ConfigId
from reserveflow.domain.config.entities import (
    DEFAULT_CONFIG_ID,
    RestaurantConfig,
    Weekday,
    WorkingHours,
)
from reserveflow.infrastructure.db.models.config import RestaurantConfigModel, WorkingHoursModel
from reserveflow.infrastructure.db.session import get_engine


class SqlAlchemyConfigRepository(ConfigRepository):
    """Single-row store: the active configuration is always ``default``."""

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self) -> RestaurantConfig | None:
        statement = (
            select(RestaurantConfigModel)
            .options(selectinload(RestaurantConfigModel.working_hours))
            .where(RestaurantConfigModel.id == str(DEFAULT_CONFIG_ID))
        )
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return self._to_domain(model)

    def replace(self, config: RestaurantConfig) -> None:
        values = {
            "name": config.name,
            "time_slot_duration": config.time_slot_duration,
            "reservation_duration": config.reservation_duration,
            "advance_booking_days": config.advance_booking_days,
            "timezone": config.timezone,
            "updated_at": config.updated_at,
        }
        config_id = str(config.config_id)
        with Session(self._engine) as session, session.begin():
            session.execute(
                insert(RestaurantConfigModel)
                .values(id=config_id, **values)
                .on_conflict_do_update(index_elements=[RestaurantConfigModel.id], set_=values)
            )
            session.execute(
                delete(WorkingHoursModel).where(WorkingHoursModel.config_id == config_id)
            )
            session.add_all(
                WorkingHoursModel(
                    config_id=config_id,
                    weekday=day.value,
                    is_open=hours.is_open,
                    open_time=hours.open_time,
                    close_time=hours.close_time,
                )
                for day, hours in config.working_hours.items()
            )

    def _to_domain(self, model: RestaurantConfigModel) -> RestaurantConfig:
        updated_at = model.updated_at
        if updated_at.tzinfo is None:
            updated_at = updated_at.replace(tzinfo=timezone.utc)
        return RestaurantConfig(
            name=model.name,
            working_hours={
                Weekday(row.weekday): WorkingHours(
                    is_open=row.is_open,
                    open_time=row.open_time,
                    close_time=row.close_time,
                )
                for row in model.working_hours
            },
            time_slot_duration=model.time_slot_duration,
            reservation_duration=model.reservation_duration,
            advance_booking_days=model.advance_booking_days,
            timezone=model.timezone,
            config_id=ConfigId(model.id),
            updated_at=updated_at,
        )
