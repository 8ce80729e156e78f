from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch

import pytest

from dp_cars.adapters.in_memory_asset_store import InMemoryAssetStore
from dp_cars.adapters.in_memory_vehicle_repository import InMemoryVehicleRepository
from dp_cars.domain.errors import NotFoundError, StorageError, ValidationError
from dp_cars.domain.vehicle import ImageUpload, Vehicle, VehicleFields
from dp_cars.use_cases.update_vehicle import UpdateVehicle, UpdateVehicleRequest
from dp_cars.use_cases.vehicle_record_store import VehicleRecordStore


@pytest.fixture()
def assets() -> InMemoryAssetStore:
    return InMemoryAssetStore()


@pytest.fixture()
def store(assets: InMemoryAssetStore) -> VehicleRecordStore:
    existing = Vehicle(
        id=3,
        type="moto",
        title="Yamaha MT-07",
        price=Decimal("6500"),
        km=8000,
        images=("/uploads/1-a.jpg",),
    )
    return VehicleRecordStore(InMemoryVehicleRepository([existing]), assets)


def photo(name: str = "extra.png") -> ImageUpload:
    return ImageUpload(filename=name, content_type="image/png", data=b"png")


def test_updates_fields_and_appends_photos(store: VehicleRecordStore, assets: InMemoryAssetStore) -> None:
    response = UpdateVehicle(store).execute(
        UpdateVehicleRequest(vehicle_id="3", fields=VehicleFields(price=Decimal("6200")), images=[photo()])
    )

    vehicle = response.vehicle
    assert vehicle.price == Decimal("6200")
    assert vehicle.km == 8000
    assert vehicle.images[0] == "/uploads/1-a.jpg"
    assert len(vehicle.images) == 2
    assert assets.exists(vehicle.images[1])


def test_update_without_photos_keeps_images(store: VehicleRecordStore) -> None:
    response = UpdateVehicle(store).execute(UpdateVehicleRequest(vehicle_id="3", fields=VehicleFields(km=9000)))

    assert response.vehicle.images == ("/uploads/1-a.jpg",)


def test_unknown_vehicle_stores_no_photos(store: VehicleRecordStore, assets: InMemoryAssetStore) -> None:
    with pytest.raises(NotFoundError):
        UpdateVehicle(store).execute(UpdateVehicleRequest(vehicle_id="4", fields=VehicleFields(), images=[photo()]))

    assert assets.files == {}


@pytest.mark.parametrize("vehicle_id", ["abc", "0", "-2", ""])
def test_invalid_id_is_rejected(store: VehicleRecordStore, vehicle_id: str) -> None:
    with pytest.raises(ValidationError):
        UpdateVehicle(store).execute(UpdateVehicleRequest(vehicle_id=vehicle_id, fields=VehicleFields()))


def test_photos_are_removed_when_record_write_fails(store: VehicleRecordStore, assets: InMemoryAssetStore) -> None:
    with patch.object(InMemoryVehicleRepository, "replace", side_effect=StorageError("Failed to write vehicle document")):
        with pytest.raises(StorageError):
            UpdateVehicle(store).execute(UpdateVehicleRequest(vehicle_id="3", fields=VehicleFields(), images=[photo()]))

    assert assets.files == {}
