"""
Tests specific to the JSON document backing.

- A missing document is created as []
- The document is a JSON array with camelCase keys and numeric prices
- Malformed or unreadable documents surface as StorageError
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

from dp_cars.adapters.json_document_vehicle_repository import JsonDocumentVehicleRepository
from dp_cars.domain.errors import StorageError
from dp_cars.domain.vehicle import Vehicle, VehicleStatus


@pytest.fixture()
def document_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "vehicles.json"


@pytest.fixture()
def vehicle() -> Vehicle:
    stamp = datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
    return Vehicle(
        id=1,
        type="auto",
        title="Fiat Panda",
        price=Decimal("8500"),
        year=2019,
        km=42000,
        fuel="Benzina",
        transmission="Manuale",
        power="69 CV",
        images=("/uploads/1-front.jpg",),
        created_at=stamp,
        updated_at=stamp,
    )


def test_missing_document_is_initialized_empty(document_path: Path) -> None:
    repository = JsonDocumentVehicleRepository(document_path)

    assert repository.list_all() == []
    assert json.loads(document_path.read_text()) == []


def test_document_uses_wire_field_names(document_path: Path, vehicle: Vehicle) -> None:
    JsonDocumentVehicleRepository(document_path).add(vehicle)

    [stored] = json.loads(document_path.read_text())

    assert stored["price"] == 8500
    assert stored["status"] == "available"
    assert stored["images"] == ["/uploads/1-front.jpg"]
    assert "createdAt" in stored
    assert "updatedAt" in stored


def test_fractional_price_stays_a_number(document_path: Path) -> None:
    repository = JsonDocumentVehicleRepository(document_path)
    repository.add(Vehicle(id=2, type="moto", title="Vespa", price=Decimal("2999.5")))

    [stored] = json.loads(document_path.read_text())

    assert stored["price"] == 2999.5


def test_reads_document_written_by_another_instance(document_path: Path, vehicle: Vehicle) -> None:
    JsonDocumentVehicleRepository(document_path).add(vehicle)

    assert JsonDocumentVehicleRepository(document_path).get_by_id(1) == vehicle


def test_missing_optional_keys_take_defaults(document_path: Path) -> None:
    document_path.parent.mkdir(parents=True)
    document_path.write_text(json.dumps([{"id": 4, "title": "Old listing", "price": 1200}]))

    vehicle = JsonDocumentVehicleRepository(document_path).get_by_id(4)

    assert vehicle is not None
    assert vehicle.type == "auto"
    assert vehicle.status is VehicleStatus.AVAILABLE
    assert vehicle.images == ()
    assert vehicle.created_at is None


def test_malformed_document_raises_storage_error(document_path: Path) -> None:
    document_path.parent.mkdir(parents=True)
    document_path.write_text("{not json")

    with pytest.raises(StorageError):
        JsonDocumentVehicleRepository(document_path).list_all()


def test_write_leaves_no_temp_files(document_path: Path, vehicle: Vehicle) -> None:
    repository = JsonDocumentVehicleRepository(document_path)
    repository.add(vehicle)
    repository.remove(1)

    assert sorted(p.name for p in document_path.parent.iterdir()) == ["vehicles.json"]
