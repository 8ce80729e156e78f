from __future__ import annotations

from dataclasses import dataclass

from dp_cars.domain.vehicle import Vehicle
from dp_cars.use_cases.vehicle_record_store import VehicleRecordStore


@dataclass(frozen=True, slots=True)
class ListVehiclesResponse:
    vehicles: list[Vehicle]

    @property
    def count(self) -> int:
        return len(self.vehicles)


class ListVehicles:
    """Administrative listing: the whole collection, unfiltered and unpaged."""

    def __init__(self, record_store: VehicleRecordStore) -> None:
        self._record_store = record_store

    def execute(self) -> ListVehiclesResponse:
        return ListVehiclesResponse(vehicles=self._record_store.list())
