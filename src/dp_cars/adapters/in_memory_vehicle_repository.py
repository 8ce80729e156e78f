from __future__ import annotations

from dp_cars.domain.vehicle import Vehicle
from dp_cars.ports.vehicle_repository import VehicleRepository


class InMemoryVehicleRepository(VehicleRepository):
    """
    Canonical contract implementation for tests.

    - Stores vehicles in insertion order
    - Replacing keeps the vehicle's position in the collection
    """

    def __init__(self, vehicles: list[Vehicle] | None = None) -> None:
        super().__init__()
        self._vehicles = list(vehicles or [])

    def list_all(self) -> list[Vehicle]:
        return list(self._vehicles)

    def get_by_id(self, vehicle_id: int) -> Vehicle | None:
        return next((v for v in self._vehicles if v.id == vehicle_id), None)

    def add(self, vehicle: Vehicle) -> None:
        with self.exclusive():
            self._vehicles = [*self._vehicles, vehicle]

    def replace(self, vehicle: Vehicle) -> bool:
        with self.exclusive():
            for index, existing in enumerate(self._vehicles):
                if existing.id == vehicle.id:
                    updated = list(self._vehicles)
                    updated[index] = vehicle
                    self._vehicles = updated
                    return True
            return False

    def remove(self, vehicle_id: int) -> bool:
        with self.exclusive():
            remaining = [v for v in self._vehicles if v.id != vehicle_id]
            if len(remaining) == len(self._vehicles):
                return False
            self._vehicles = remaining
            return True
