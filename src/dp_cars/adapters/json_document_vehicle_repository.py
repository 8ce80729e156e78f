"""JSON document implementation of VehicleRepository."""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from dp_cars.domain.errors import StorageError
from dp_cars.domain.vehicle import Vehicle
from dp_cars.infra.document.models import VehicleDocument, VehicleDocumentRow
from dp_cars.ports.vehicle_repository import VehicleRepository

logger = logging.getLogger(__name__)


class JsonDocumentVehicleRepository(VehicleRepository):
    """
    Persists the whole collection as one JSON document.

    - A missing document is initialized as an empty sequence
    - Every mutation is load → change → write of the full document
    - Writes go to a temp file that atomically replaces the document,
      so readers never see a partially written collection
    """

    def __init__(self, path: str | Path, lock: threading.RLock | None = None) -> None:
        super().__init__(lock)
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def list_all(self) -> list[Vehicle]:
        return [_to_domain(row) for row in self._read()]

    def get_by_id(self, vehicle_id: int) -> Vehicle | None:
        for row in self._read():
            if row.id == vehicle_id:
                return _to_domain(row)
        return None

    def add(self, vehicle: Vehicle) -> None:
        with self.exclusive():
            rows = self._read()
            rows.append(_to_row(vehicle))
            self._write(rows)

    def replace(self, vehicle: Vehicle) -> bool:
        with self.exclusive():
            rows = self._read()
            for index, row in enumerate(rows):
                if row.id == vehicle.id:
                    rows[index] = _to_row(vehicle)
                    self._write(rows)
                    return True
            return False

    def remove(self, vehicle_id: int) -> bool:
        with self.exclusive():
            rows = self._read()
            remaining = [row for row in rows if row.id != vehicle_id]
            if len(remaining) == len(rows):
                return False
            self._write(remaining)
            return True

    def _ensure_document(self) -> None:
        if self._path.exists():
            return
        with self.exclusive():
            if not self._path.exists():
                logger.info("Initializing empty vehicle document", extra={"path": str(self._path)})
                self._write([])

    def _read(self) -> list[VehicleDocumentRow]:
        self._ensure_document()
        try:
            raw = self._path.read_bytes()
        except OSError as exc:
            logger.error("Failed to read vehicle document", extra={"path": str(self._path)})
            raise StorageError("Failed to read vehicle document", path=str(self._path)) from exc

        try:
            return VehicleDocument.validate_json(raw)
        except PydanticValidationError as exc:
            logger.error(
                "Vehicle document is malformed",
                extra={"path": str(self._path), "error_count": exc.error_count()},
            )
            raise StorageError("Vehicle document is malformed", path=str(self._path)) from exc

    def _write(self, rows: list[VehicleDocumentRow]) -> None:
        payload = VehicleDocument.dump_json(rows, by_alias=True, indent=2)
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
            logger.error("Failed to write vehicle document", extra={"path": str(self._path)})
            raise StorageError("Failed to write vehicle document", path=str(self._path)) from exc


def _to_domain(row: VehicleDocumentRow) -> Vehicle:
    return Vehicle(
        id=row.id,
        type=row.type,
        title=row.title,
        price=row.price,
        year=row.year,
        km=row.km,
        fuel=row.fuel,
        transmission=row.transmission,
        power=row.power,
        status=row.status,
        images=tuple(row.images),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_row(vehicle: Vehicle) -> VehicleDocumentRow:
    return VehicleDocumentRow(
        id=vehicle.id,
        type=vehicle.type,
        title=vehicle.title,
        price=vehicle.price,
        year=vehicle.year,
        km=vehicle.km,
        fuel=vehicle.fuel,
        transmission=vehicle.transmission,
        power=vehicle.power,
        status=vehicle.status,
        images=list(vehicle.images),
        created_at=vehicle.created_at,
        updated_at=vehicle.updated_at,
    )
