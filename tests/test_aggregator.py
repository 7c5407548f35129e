"""Unit tests for the per-device aggregation logic."""

from __future__ import annotations

import pytest

from app.schemas import ConsumptionRecord, DeviceRecord
from services.aggregator import CHART_LABEL, Aggregator


def _device(device_id: str, name: str) -> DeviceRecord:
    """Helper to build deterministic device records."""

    return DeviceRecord(id=device_id, name=name, wattage=100.0, startTime="08:00", endTime="10:00")


def _consumption(
    consumption_id: str, device_id: str | None, kwh: float | None, cost: float | None = None
) -> ConsumptionRecord:
    return ConsumptionRecord(
        id=consumption_id,
        deviceId=device_id,
        kWh=kwh,
        cost=cost,
        carbonFootprint=None if kwh is None else kwh * 0.4,
        date="2024-01-01",
    )


def test_summarize_without_consumptions_returns_zero_totals() -> None:
    summaries = Aggregator().summarize([_device("d1", "Fridge")], [])

    assert len(summaries) == 1
    assert summaries[0].total_kwh == 0.0
    assert summaries[0].total_cost == 0.0
    assert summaries[0].total_carbon_footprint == 0.0
    assert summaries[0].consumption_count == 0


def test_summarize_sums_matching_consumptions_only() -> None:
    devices = [_device("d1", "Fridge"), _device("d2", "Heater")]
    consumptions = [
        _consumption("c1", "d1", 1.0, 0.12),
        _consumption("c2", "d1", 2.0, 0.24),
        _consumption("c3", "d2", 5.0, 0.6),
        _consumption("c4", "unknown", 9.0, 1.08),
        _consumption("c5", None, 3.0, 0.36),
    ]

    fridge, heater = Aggregator().summarize(devices, consumptions)

    assert fridge.device.id == "d1"
    assert fridge.consumption_count == 2
    assert fridge.total_kwh == pytest.approx(3.0)
    assert fridge.total_cost == pytest.approx(0.36)
    assert fridge.total_carbon_footprint == pytest.approx(1.2)
    assert heater.total_kwh == pytest.approx(5.0)


def test_missing_values_count_as_zero() -> None:
    devices = [_device("d1", "Lamp")]
    consumptions = [_consumption("c1", "d1", None), _consumption("c2", "d1", 0.5)]

    (summary,) = Aggregator().summarize(devices, consumptions)

    assert summary.consumption_count == 2
    assert summary.total_kwh == pytest.approx(0.5)
    assert summary.total_cost == 0.0


def test_chart_follows_device_order() -> None:
    devices = [_device("d1", "Fridge"), _device("d2", "Heater")]
    consumptions = [_consumption("c1", "d2", 4.0), _consumption("c2", "d1", 1.5)]

    series = Aggregator().chart(devices, consumptions)

    assert series.label == CHART_LABEL
    assert series.labels == ["Fridge", "Heater"]
    assert series.data == [pytest.approx(1.5), pytest.approx(4.0)]
