"""Consumption derivation: wattage and a daily usage window to kWh, cost and CO2."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Optional

RATE_PER_KWH = 0.12
CARBON_FACTOR = 0.4  # kg CO2 per kWh

_REFERENCE_DAY = "1970-01-01"
_DAY = timedelta(hours=24)
_CLOCK_PATTERN = re.compile(r"[0-9]{2}:[0-9]{2}")


@dataclass(frozen=True)
class ConsumptionEstimate:
    """Derived snapshot for one device, ready to be persisted."""

    hours: float
    kwh: float
    cost: float
    carbon_footprint: float
    date: str

    def to_payload(self, device_id: str) -> Dict[str, Any]:
        """Build the ``POST /consumptions`` body; NaN/inf travel as null."""
        return {
            "deviceId": device_id,
            "kWh": _json_number(self.kwh),
            "cost": _json_number(self.cost),
            "carbonFootprint": _json_number(self.carbon_footprint),
            "date": self.date,
        }


def _json_number(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def _parse_clock(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not _CLOCK_PATTERN.fullmatch(value):
        return None
    try:
        return datetime.strptime(f"{_REFERENCE_DAY}T{value}", "%Y-%m-%dT%H:%M")
    except ValueError:
        return None


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def calculate_hours(start_time: Any, end_time: Any) -> float:
    """Hours between two HH:MM times, wrapping past midnight when end < start.

    Equal times give 0. Unparseable input gives NaN rather than an error.
    """
    start = _parse_clock(start_time)
    end = _parse_clock(end_time)
    if start is None or end is None:
        return math.nan
    diff = end - start
    if diff < timedelta(0):
        diff += _DAY
    return diff / timedelta(hours=1)


def calculate_consumption(
    wattage: Any,
    start_time: Any,
    end_time: Any,
    today: Optional[date] = None,
) -> ConsumptionEstimate:
    hours = calculate_hours(start_time, end_time)
    kwh = _as_float(wattage) * hours / 1000
    day = today if today is not None else datetime.now(timezone.utc).date()
    return ConsumptionEstimate(
        hours=hours,
        kwh=kwh,
        cost=kwh * RATE_PER_KWH,
        carbon_footprint=kwh * CARBON_FACTOR,
        date=day.isoformat(),
    )
