from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from app.schemas import ConsumptionRecord, DeviceRecord
from cli.config import CLIConfig

logger = logging.getLogger(__name__)

_DEVICE = TypeAdapter(DeviceRecord)
_DEVICES = TypeAdapter(List[DeviceRecord])
_CONSUMPTION = TypeAdapter(ConsumptionRecord)
_CONSUMPTIONS = TypeAdapter(List[ConsumptionRecord])


class ApiError(Exception):
    """Any transport failure or non-2xx response from the tracker API."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApiClient:
    """Minimal HTTP client for the tracker service."""

    def __init__(self, config: CLIConfig, transport: httpx.BaseTransport | None = None) -> None:
        self._config = config
        self._client = httpx.Client(
            base_url=config.base_url,
            timeout=config.request_timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def list_devices(self) -> List[DeviceRecord]:
        return self._request("GET", "/devices", _DEVICES)

    def create_device(self, body: Dict[str, Any]) -> DeviceRecord:
        return self._request("POST", "/devices", _DEVICE, json=body)

    def list_consumptions(self) -> List[ConsumptionRecord]:
        return self._request("GET", "/consumptions", _CONSUMPTIONS)

    def create_consumption(self, body: Dict[str, Any]) -> ConsumptionRecord:
        return self._request("POST", "/consumptions", _CONSUMPTION, json=body)

    def _request(self, method: str, path: str, adapter: TypeAdapter, json: Any = None) -> Any:
        try:
            response = self._client.request(method, path, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.warning(
                "%s %s failed", method, path, extra={"status": status_code}
            )
            raise ApiError(
                f"HTTP error! status: {status_code}", status_code=status_code
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed", method, path, extra={"reason": str(exc)})
            raise ApiError(f"Request to {path} failed: {exc}") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError(f"Response from {path} is not valid JSON.") from exc
        try:
            return adapter.validate_python(payload)
        except ValidationError as exc:
            logger.warning(
                "%s %s returned an unexpected payload",
                method,
                path,
                extra={"reason": f"{exc.error_count()} validation errors"},
            )
            raise ApiError(f"Response from {path} has an unexpected shape.") from exc
