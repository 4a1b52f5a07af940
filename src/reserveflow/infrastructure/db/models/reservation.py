from __future__ import annotations

import datetime as dt

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from reserveflow.infrastructure.db.models.base import Base


class ReservationModel(Base):
    __tablename__ = "reservations"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    customer_id: Mapped[str] = mapped_column(String(50), nullable=False)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_phone: Mapped[str] = mapped_column(String(50), nullable=False)
    customer_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    customer_vip: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    party_size: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    special_requests: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    tables: Mapped[list["ReservationTableModel"]] = relationship(
        back_populates="reservation",
        cascade="all, delete-orphan",
        order_by="ReservationTableModel.table_id",
    )

    __table_args__ = (Index("ix_reservations_date_start_time", "date", "start_time"),)


class ReservationTableModel(Base):
    __tablename__ = "reservation_tables"

    reservation_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("reservations.id", ondelete="CASCADE"),
        primary_key=True,
    )
    table_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("tables.id", ondelete="RESTRICT"),
        primary_key=True,
        index=True,
    )

    reservation: Mapped[ReservationModel] = relationship(back_populates="tables")
