from __future__ import annotations

from dataclasses import dataclass

from dp_cars.domain.asset import AssetCleanupReport
from dp_cars.use_cases.get_vehicle_by_id import parse_vehicle_id
from dp_cars.use_cases.vehicle_record_store import VehicleRecordStore


@dataclass(frozen=True, slots=True)
class DeleteVehicleRequest:
    vehicle_id: str


@dataclass(frozen=True, slots=True)
class DeleteVehicleResponse:
    deleted_id: int
    cleanup: AssetCleanupReport  # Per-file outcome; failures do not fail the request


class DeleteVehicle:
    """Delete a vehicle and cascade to its image files (best-effort per file)."""

    def __init__(self, record_store: VehicleRecordStore) -> None:
        self._record_store = record_store

    def execute(self, request: DeleteVehicleRequest) -> DeleteVehicleResponse:
        """
        Raises:
            ValidationError: Bad id
            NotFoundError: Unknown vehicle; the collection is left unchanged
        """
        vehicle_id = parse_vehicle_id(request.vehicle_id)
        report = self._record_store.delete(vehicle_id)
        return DeleteVehicleResponse(deleted_id=vehicle_id, cleanup=report)
