from __future__ import annotations

from dataclasses import dataclass, field

from dp_cars.domain.errors import DomainError
from dp_cars.domain.vehicle import ImageUpload, Vehicle, VehicleFields
from dp_cars.use_cases.get_vehicle_by_id import parse_vehicle_id
from dp_cars.use_cases.image_uploads import check_uploads, discard_assets, store_uploads
from dp_cars.use_cases.vehicle_record_store import VehicleRecordStore


@dataclass(frozen=True, slots=True)
class UpdateVehicleRequest:
    vehicle_id: str
    fields: VehicleFields
    images: list[ImageUpload] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class UpdateVehicleResponse:
    vehicle: Vehicle


class UpdateVehicle:
    """
    Partial update: only supplied fields change, new photos are appended.

    The vehicle must exist before any photo is stored.
    """

    def __init__(self, record_store: VehicleRecordStore) -> None:
        self._record_store = record_store

    def execute(self, request: UpdateVehicleRequest) -> UpdateVehicleResponse:
        """
        Raises:
            ValidationError: Bad id, bad supplied field, more than 10 photos
                or an unsupported/oversized photo
            NotFoundError: If the vehicle does not exist
            StorageError: If photos or the record cannot be written
        """
        vehicle_id = parse_vehicle_id(request.vehicle_id)
        request.fields.validate(creating=False)
        check_uploads(request.images)
        self._record_store.get(vehicle_id)

        refs = store_uploads(self._record_store, request.images)
        try:
            vehicle = self._record_store.update(vehicle_id, request.fields, refs)
        except DomainError:
            discard_assets(self._record_store, refs)
            raise

        return UpdateVehicleResponse(vehicle=vehicle)
