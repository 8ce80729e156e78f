"""Get vehicle by ID use case."""

from __future__ import annotations

from dataclasses import dataclass

from dp_cars.domain.errors import ValidationError
from dp_cars.domain.vehicle import Vehicle
from dp_cars.use_cases.vehicle_record_store import VehicleRecordStore


@dataclass(frozen=True, slots=True)
class GetVehicleByIdRequest:
    """Request to get a vehicle by ID."""

    vehicle_id: str


@dataclass(frozen=True, slots=True)
class GetVehicleByIdResponse:
    """Response containing the requested vehicle."""

    vehicle: Vehicle


def parse_vehicle_id(raw: str | int) -> int:
    """
    Parse a vehicle id from the transport.

    Raises:
        ValidationError: If `raw` is not a positive integer
    """
    try:
        vehicle_id = int(str(raw).strip())
    except ValueError:
        vehicle_id = 0

    if vehicle_id < 1:
        raise ValidationError(
            errors=[
                {
                    "field": "vehicle_id",
                    "message": "Must be a positive integer",
                    "code": "INVALID_ID",
                }
            ]
        )
    return vehicle_id


class GetVehicleById:
    """
    Use case for retrieving a single vehicle by ID.

    Responsibilities:
    - Validate vehicle_id format (must be a positive integer)
    - Delegate to the record store for data access
    - Raise NotFoundError if the vehicle doesn't exist
    """

    def __init__(self, record_store: VehicleRecordStore) -> None:
        """
        Initialize use case with dependencies.

        Args:
            record_store: Store owning the vehicle collection
        """
        self._record_store = record_store

    def execute(self, request: GetVehicleByIdRequest) -> GetVehicleByIdResponse:
        """
        Execute the get vehicle by ID use case.

        Raises:
            ValidationError: If vehicle_id is not a positive integer
            NotFoundError: If vehicle with given ID doesn't exist
        """
        vehicle_id = parse_vehicle_id(request.vehicle_id)
        return GetVehicleByIdResponse(vehicle=self._record_store.get(vehicle_id))
