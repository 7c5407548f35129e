from __future__ import annotations

import logging
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.schemas import ConsumptionCreate, ConsumptionRecord, DeviceCreate, DeviceRecord
from models.records import Base, Consumption, Device
from settings import get_settings

logger = logging.getLogger(__name__)


class RecordStore:
    """SQLite-backed store for devices and their consumption snapshots.

    Each operation runs in its own short-lived session; nothing spans two
    calls, so a device and its consumption are written independently.
    """

    def __init__(self, database_path: Optional[Path] = None, echo: bool = False) -> None:
        self.database_path = database_path
        if database_path:
            database_path.parent.mkdir(parents=True, exist_ok=True)
            self.engine = create_engine(
                f"sqlite:///{database_path}",
                echo=echo,
                connect_args={"check_same_thread": False},
            )
        else:
            self.engine = create_engine(
                "sqlite://",
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        self._session_factory = sessionmaker(self.engine, expire_on_commit=False)

    def sync_schema(self) -> None:
        """Create any missing tables."""
        Base.metadata.create_all(self.engine)
        logger.info(
            "Database tables created/verified",
            extra={"database": self.database_path or ":memory:"},
        )

    def dispose(self) -> None:
        self.engine.dispose()

    @contextmanager
    def session(self) -> Iterator[Session]:
        with self._session_factory() as session:
            yield session

    def create_device(self, payload: DeviceCreate) -> DeviceRecord:
        row = Device(**payload.model_dump())
        with self.session() as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            record = DeviceRecord.model_validate(row)
        logger.info("Device created", extra={"entity": "device", "device_id": record.id})
        return record

    def list_devices(self) -> list[DeviceRecord]:
        with self.session() as session:
            rows = session.scalars(select(Device)).all()
            return [DeviceRecord.model_validate(row) for row in rows]

    def create_consumption(self, payload: ConsumptionCreate) -> ConsumptionRecord:
        row = Consumption(**payload.model_dump())
        with self.session() as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            record = ConsumptionRecord.model_validate(row)
        logger.info(
            "Consumption created",
            extra={
                "entity": "consumption",
                "consumption_id": record.id,
                "device_id": record.device_id,
            },
        )
        return record

    def list_consumptions(self) -> list[ConsumptionRecord]:
        with self.session() as session:
            rows = session.scalars(select(Consumption)).all()
            return [ConsumptionRecord.model_validate(row) for row in rows]


@lru_cache
def build_default_store(path: Optional[str] = None) -> RecordStore:
    settings = get_settings()
    database_path = settings.database_path if path is None else path
    store = RecordStore(
        database_path=Path(database_path) if database_path else None,
        echo=settings.sql_echo,
    )
    store.sync_schema()
    return store
