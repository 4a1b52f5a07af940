from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from reserveflow.infrastructure.db.models.base import Base


class RestaurantConfigModel(Base):
    __tablename__ = "restaurant_config"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    time_slot_duration: Mapped[int] = mapped_column(Integer, nullable=False)
    reservation_duration: Mapped[int] = mapped_column(Integer, nullable=False)
    advance_booking_days: Mapped[int] = mapped_column(Integer, nullable=False)
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, server_default="UTC")
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    working_hours: Mapped[list["WorkingHoursModel"]] = relationship(
        back_populates="config",
        cascade="all, delete-orphan",
    )


class WorkingHoursModel(Base):
    __tablename__ = "working_hours"

    config_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("restaurant_config.id", ondelete="CASCADE"),
        primary_key=True,
    )
    weekday: Mapped[str] = mapped_column(String(10), primary_key=True)
    is_open: Mapped[bool] = mapped_column(Boolean, nullable=False)
    open_time: Mapped[str] = mapped_column(String(5), nullable=False)
    close_time: Mapped[str] = mapped_column(String(5), nullable=False)

    config: Mapped[RestaurantConfigModel] = relationship(back_populates="working_hours")
