from __future__ import annotations

from dataclasses import dataclass, field

from dp_cars.domain.errors import DomainError
from dp_cars.domain.vehicle import ImageUpload, Vehicle, VehicleFields
from dp_cars.use_cases.image_uploads import check_uploads, discard_assets, store_uploads
from dp_cars.use_cases.vehicle_record_store import VehicleRecordStore, validate_new_vehicle


@dataclass(frozen=True, slots=True)
class CreateVehicleRequest:
    fields: VehicleFields
    images: list[ImageUpload] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class CreateVehicleResponse:
    vehicle: Vehicle


class CreateVehicle:
    """
    Create a vehicle listing from form fields and 5 to 10 photos.

    Order of work:
    1. Validate fields, photo count and every photo (no side effects yet)
    2. Store photos as assets
    3. Create the record; if that fails, the stored photos are removed
    """

    def __init__(self, record_store: VehicleRecordStore) -> None:
        self._record_store = record_store

    def execute(self, request: CreateVehicleRequest) -> CreateVehicleResponse:
        """
        Raises:
            ValidationError: Bad fields, fewer than 5 or more than 10 photos,
                or an unsupported/oversized photo
            StorageError: If photos or the record cannot be written
        """
        validate_new_vehicle(request.fields, len(request.images))
        check_uploads(request.images)

        refs = store_uploads(self._record_store, request.images)
        try:
            vehicle = self._record_store.create(request.fields, refs)
        except DomainError:
            discard_assets(self._record_store, refs)
            raise

        return CreateVehicleResponse(vehicle=vehicle)
