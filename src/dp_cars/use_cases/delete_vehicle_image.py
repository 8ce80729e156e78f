from __future__ import annotations

from dataclasses import dataclass

from dp_cars.domain.vehicle import Vehicle
from dp_cars.use_cases.get_vehicle_by_id import parse_vehicle_id
from dp_cars.use_cases.vehicle_record_store import VehicleRecordStore


@dataclass(frozen=True, slots=True)
class DeleteVehicleImageRequest:
    vehicle_id: str
    image_ref: str


@dataclass(frozen=True, slots=True)
class DeleteVehicleImageResponse:
    vehicle: Vehicle


class DeleteVehicleImage:
    def __init__(self, record_store: VehicleRecordStore) -> None:
        self._record_store = record_store

    def execute(self, request: DeleteVehicleImageRequest) -> DeleteVehicleImageResponse:
        """
        Raises:
            ValidationError: Bad id or missing image reference
            NotFoundError: Unknown vehicle, or image not attached to it
        """
        vehicle_id = parse_vehicle_id(request.vehicle_id)
        vehicle = self._record_store.delete_image(vehicle_id, request.image_ref)
        return DeleteVehicleImageResponse(vehicle=vehicle)
