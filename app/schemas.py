"""Pydantic schemas for the HTTP API layer.

Wire names are camelCase (``startTime``, ``deviceId``, ``kWh`` ...) while
Python attributes stay snake_case; every model accepts either form.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DeviceCreate(BaseModel):
    """Body of ``POST /devices``."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    name: Optional[str] = None
    wattage: Optional[float] = Field(default=None, description="Rated power in watts.")
    start_time: Optional[str] = Field(
        default=None, alias="startTime", description="Usage start, HH:MM."
    )
    end_time: Optional[str] = Field(
        default=None, alias="endTime", description="Usage end, HH:MM."
    )


class DeviceRecord(DeviceCreate):
    """Persisted device as returned by the API."""

    model_config = ConfigDict(
        populate_by_name=True, coerce_numbers_to_str=True, from_attributes=True
    )

    id: str
    created_at: Optional[dt.datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[dt.datetime] = Field(default=None, alias="updatedAt")


class ConsumptionCreate(BaseModel):
    """Body of ``POST /consumptions``."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    device_id: Optional[str] = Field(default=None, alias="deviceId")
    kwh: Optional[float] = Field(default=None, alias="kWh")
    cost: Optional[float] = None
    carbon_footprint: Optional[float] = Field(
        default=None, alias="carbonFootprint", description="kg CO2."
    )
    date: Optional[dt.date] = Field(default=None, description="Calendar day, YYYY-MM-DD.")


class ConsumptionRecord(ConsumptionCreate):
    """Persisted consumption snapshot as returned by the API."""

    model_config = ConfigDict(
        populate_by_name=True, coerce_numbers_to_str=True, from_attributes=True
    )

    id: str
    created_at: Optional[dt.datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[dt.datetime] = Field(default=None, alias="updatedAt")
