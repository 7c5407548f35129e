"""Per-device totals and chart series over consumption snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from app.schemas import ConsumptionRecord, DeviceRecord

CHART_LABEL = "kWh Consumption"


@dataclass
class DeviceSummary:
    """A device together with the naive sums of its consumption rows."""

    device: DeviceRecord
    total_kwh: float = 0.0
    total_cost: float = 0.0
    total_carbon_footprint: float = 0.0
    consumption_count: int = 0


@dataclass
class ChartSeries:
    label: str = CHART_LABEL
    labels: List[str] = field(default_factory=list)
    data: List[float] = field(default_factory=list)


def _value(number: Optional[float]) -> float:
    # Missing values count as zero.
    return number if number is not None else 0.0


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def summarize(
        self,
        devices: Sequence[DeviceRecord],
        consumptions: Iterable[ConsumptionRecord],
    ) -> List[DeviceSummary]:
        by_device: Dict[str, List[ConsumptionRecord]] = {}
        for consumption in consumptions:
            if consumption.device_id is None:
                continue
            by_device.setdefault(consumption.device_id, []).append(consumption)

        summaries: List[DeviceSummary] = []
        for device in devices:
            summary = DeviceSummary(device=device)
            for consumption in by_device.get(device.id, []):
                summary.consumption_count += 1
                summary.total_kwh += _value(consumption.kwh)
                summary.total_cost += _value(consumption.cost)
                summary.total_carbon_footprint += _value(consumption.carbon_footprint)
            summaries.append(summary)
        return summaries

    def chart(
        self,
        devices: Sequence[DeviceRecord],
        consumptions: Iterable[ConsumptionRecord],
    ) -> ChartSeries:
        series = ChartSeries()
        for summary in self.summarize(devices, consumptions):
            series.labels.append(summary.device.name or "")
            series.data.append(summary.total_kwh)
        return series
