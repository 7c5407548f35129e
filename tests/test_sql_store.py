"""Unit tests for the SQLite record store."""

from __future__ import annotations

from datetime import date

from app.schemas import ConsumptionCreate, DeviceCreate
from datastore.sql_store import RecordStore


def _store(tmp_path=None) -> RecordStore:
    store = RecordStore(database_path=tmp_path / "tracker.sqlite" if tmp_path else None)
    store.sync_schema()
    return store


def test_create_device_assigns_identifier_and_round_trips() -> None:
    store = _store()
    payload = DeviceCreate(name="Fridge", wattage=150.0, startTime="00:00", endTime="23:59")

    created = store.create_device(payload)
    listed = store.list_devices()

    assert created.id
    assert created.created_at is not None
    assert [device.id for device in listed] == [created.id]
    assert listed[0].name == "Fridge"
    assert listed[0].wattage == 150.0
    assert listed[0].start_time == "00:00"
    assert listed[0].end_time == "23:59"
    store.dispose()


def test_identifiers_are_unique() -> None:
    store = _store()
    first = store.create_device(DeviceCreate(name="A"))
    second = store.create_device(DeviceCreate(name="A"))

    assert first.id != second.id
    assert len(store.list_devices()) == 2
    store.dispose()


def test_consumption_reference_is_not_enforced() -> None:
    store = _store()
    payload = ConsumptionCreate(
        deviceId="no-such-device", kWh=2.0, cost=0.24, carbonFootprint=0.8, date=date(2024, 3, 5)
    )

    created = store.create_consumption(payload)

    assert created.device_id == "no-such-device"
    assert store.list_devices() == []
    (listed,) = store.list_consumptions()
    assert listed.id == created.id
    assert listed.kwh == 2.0
    assert listed.date == date(2024, 3, 5)
    store.dispose()


def test_fields_are_optional_and_stored_as_null() -> None:
    store = _store()

    device = store.create_device(DeviceCreate())
    consumption = store.create_consumption(ConsumptionCreate())

    assert device.name is None
    assert device.wattage is None
    assert consumption.kwh is None
    assert consumption.date is None
    store.dispose()


def test_records_persist_to_disk_and_reload(tmp_path) -> None:
    store = _store(tmp_path)
    device = store.create_device(DeviceCreate(name="Heater", wattage=2000.0))
    store.dispose()

    assert (tmp_path / "tracker.sqlite").exists()

    reopened = _store(tmp_path)
    (loaded,) = reopened.list_devices()
    assert loaded.id == device.id
    assert loaded.name == "Heater"
    reopened.dispose()
