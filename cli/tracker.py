"""Client-side session: local mirrors of the API state and the add-device flow."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, List, Optional, Protocol

from app.schemas import ConsumptionRecord, DeviceRecord
from cli.client import ApiError
from services.aggregator import Aggregator, ChartSeries, DeviceSummary
from services.calculator import calculate_consumption

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = (
    "Failed to fetch data. Please ensure the backend server is running and accessible."
)
ADD_DEVICE_ERROR_MESSAGE = "Failed to add device. Please try again."


class TrackerApi(Protocol):
    def list_devices(self) -> List[DeviceRecord]: ...

    def create_device(self, body: dict) -> DeviceRecord: ...

    def list_consumptions(self) -> List[ConsumptionRecord]: ...

    def create_consumption(self, body: dict) -> ConsumptionRecord: ...


@dataclass
class DeviceDraft:
    """Pending input for a new device; mirrors the device form."""

    name: str = ""
    wattage: Any = 0
    start_time: str = ""
    end_time: str = ""

    def to_payload(self) -> dict:
        return {
            "name": self.name,
            "wattage": self.wattage,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }


class TrackerSession:
    """Holds what the user sees and drives the sequential API calls.

    Mirrors are filled by :meth:`load` and only ever appended to afterwards.
    """

    def __init__(
        self,
        client: TrackerApi,
        aggregator: Optional[Aggregator] = None,
        clock: Optional[Callable[[], date]] = None,
    ) -> None:
        self.client = client
        self.aggregator = aggregator or Aggregator()
        self._clock = clock
        self.devices: List[DeviceRecord] = []
        self.consumptions: List[ConsumptionRecord] = []
        self.draft = DeviceDraft()
        self.error: Optional[str] = None

    def load(self) -> bool:
        """Fetch devices then consumptions; on failure keep the previous mirrors."""
        try:
            devices = self.client.list_devices()
            consumptions = self.client.list_consumptions()
        except ApiError as exc:
            logger.error("Error fetching data: %s", exc, extra={"status": exc.status_code})
            self.error = LOAD_ERROR_MESSAGE
            return False
        self.devices = list(devices)
        self.consumptions = list(consumptions)
        logger.debug("Loaded tracker state", extra={"count": len(self.devices)})
        return True

    def add_device(self) -> bool:
        """Create the drafted device, then its derived consumption.

        A failure after the device was created leaves it persisted and listed
        without a consumption; nothing is rolled back.
        """
        draft = self.draft
        try:
            device = self.client.create_device(draft.to_payload())
            self.devices.append(device)

            today = self._clock() if self._clock is not None else None
            estimate = calculate_consumption(
                draft.wattage, draft.start_time, draft.end_time, today=today
            )
            consumption = self.client.create_consumption(estimate.to_payload(device.id))
            self.consumptions.append(consumption)
        except ApiError as exc:
            logger.error("Error adding device: %s", exc, extra={"status": exc.status_code})
            self.error = ADD_DEVICE_ERROR_MESSAGE
            return False

        self.draft = DeviceDraft()
        return True

    def summaries(self) -> List[DeviceSummary]:
        return self.aggregator.summarize(self.devices, self.consumptions)

    def chart(self) -> ChartSeries:
        return self.aggregator.chart(self.devices, self.consumptions)
