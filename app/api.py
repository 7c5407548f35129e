"""HTTP route definitions for the service."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from app.schemas import ConsumptionCreate, ConsumptionRecord, DeviceCreate, DeviceRecord
from datastore.sql_store import RecordStore, build_default_store

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store() -> RecordStore:
    return build_default_store()


def _store_failure(exc: SQLAlchemyError, entity: str) -> HTTPException:
    logger.exception(
        "Store operation failed",
        extra={"entity": entity, "reason": type(exc).__name__},
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error.",
    )


@router.get(
    "/devices",
    response_model=List[DeviceRecord],
    summary="List every registered device.",
)
def list_devices(store: RecordStore = Depends(get_store)) -> List[DeviceRecord]:
    try:
        return store.list_devices()
    except SQLAlchemyError as exc:
        raise _store_failure(exc, "device") from exc


@router.post(
    "/devices",
    response_model=DeviceRecord,
    summary="Register a device and return it with its generated identifier.",
)
def create_device(
    payload: DeviceCreate,
    store: RecordStore = Depends(get_store),
) -> DeviceRecord:
    try:
        return store.create_device(payload)
    except SQLAlchemyError as exc:
        raise _store_failure(exc, "device") from exc


@router.get(
    "/consumptions",
    response_model=List[ConsumptionRecord],
    summary="List every consumption snapshot.",
)
def list_consumptions(
    store: RecordStore = Depends(get_store),
) -> List[ConsumptionRecord]:
    try:
        return store.list_consumptions()
    except SQLAlchemyError as exc:
        raise _store_failure(exc, "consumption") from exc


@router.post(
    "/consumptions",
    response_model=ConsumptionRecord,
    summary="Persist a consumption snapshot; deviceId is not checked.",
)
def create_consumption(
    payload: ConsumptionCreate,
    store: RecordStore = Depends(get_store),
) -> ConsumptionRecord:
    try:
        return store.create_consumption(payload)
    except SQLAlchemyError as exc:
        raise _store_failure(exc, "consumption") from exc


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
