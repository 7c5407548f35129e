"""ORM tables backing the Device and Consumption records."""

from __future__ import annotations

import datetime as dt
from typing import Optional
from uuid import uuid4

from sqlalchemy import Date, DateTime, Float, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


def _new_id() -> str:
    return str(uuid4())


class Base(DeclarativeBase):
    pass


class Device(Base):
    """A registered appliance and its declared daily usage window."""

    __tablename__ = "devices"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    wattage: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    start_time: Mapped[Optional[str]] = mapped_column(String, nullable=True)  # HH:MM
    end_time: Mapped[Optional[str]] = mapped_column(String, nullable=True)  # HH:MM
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<Device(id={self.id}, name='{self.name}', wattage={self.wattage})>"


class Consumption(Base):
    """Energy, cost and carbon snapshot derived for one device."""

    __tablename__ = "consumptions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    # Loose reference to devices.id, no ForeignKey.
    device_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    kwh: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    carbon_footprint: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<Consumption(id={self.id}, device_id={self.device_id}, kwh={self.kwh})>"
