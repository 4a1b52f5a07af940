from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from reserveflow.infrastructure.db.models.base import Base


class TableModel(Base):
    __tablename__ = "tables"
    __table_args__ = (
        CheckConstraint("area IN ('bar', 'inside', 'outside')", name="ck_tables_area"),
        CheckConstraint("min_capacity <= max_capacity", name="ck_tables_capacity_range"),
    )

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    area: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    min_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    max_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    is_adjustable: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    position_x: Mapped[float] = mapped_column(Float, nullable=False, server_default="0")
    position_y: Mapped[float] = mapped_column(Float, nullable=False, server_default="0")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="true")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
