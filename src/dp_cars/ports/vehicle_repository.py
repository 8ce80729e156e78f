from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator

from dp_cars.domain.vehicle import Vehicle


class VehicleRepository(ABC):
    """
    Port for vehicle record persistence.

    Implementations persist the collection in insertion order and return
    full snapshots. They do not validate or assign ids; that is the record
    store's job.

    Contract (Concurrency):
        - Mutations must be wrapped in `exclusive()` by the caller so that
          read-modify-write sequences cannot interleave
        - Reads need no lock and see the last committed snapshot
    """

    def __init__(self, lock: threading.RLock | None = None) -> None:
        self._write_lock = lock or threading.RLock()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        """Single-writer critical section for this store (re-entrant)."""
        with self._write_lock:
            yield

    @abstractmethod
    def list_all(self) -> list[Vehicle]:
        """Return every vehicle in collection order."""
        ...

    @abstractmethod
    def get_by_id(self, vehicle_id: int) -> Vehicle | None:
        """Return the vehicle with `vehicle_id`, or None."""
        ...

    @abstractmethod
    def add(self, vehicle: Vehicle) -> None:
        """Append a new vehicle to the collection."""
        ...

    @abstractmethod
    def replace(self, vehicle: Vehicle) -> bool:
        """Replace the vehicle with the same id. Returns False if absent."""
        ...

    @abstractmethod
    def remove(self, vehicle_id: int) -> bool:
        """Remove the vehicle with `vehicle_id`. Returns False if absent."""
        ...
