"""SQLAlchemy implementation of VehicleRepository."""

from __future__ import annotations

import logging
import threading

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dp_cars.domain.errors import StorageError
from dp_cars.domain.vehicle import Vehicle, VehicleStatus
from dp_cars.infra.db.models.vehicle import VehicleRow
from dp_cars.ports.vehicle_repository import VehicleRepository

logger = logging.getLogger(__name__)

# Repositories are built per request; they share one writer lock per process
_SHARED_WRITE_LOCK = threading.RLock()


class SqlVehicleRepository(VehicleRepository):
    """
    SQL implementation of VehicleRepository.

    - One row per vehicle; images stored as a JSON array
    - Collection order is id order (ids are assigned increasingly)
    - Each mutation commits immediately, while the caller still holds
      the writer lock
    - Converts VehicleRow (infrastructure) to Vehicle (domain)
    """

    def __init__(self, session: Session, lock: threading.RLock | None = None) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
            lock: Writer lock; defaults to the process-wide SQL writer lock
        """
        super().__init__(lock or _SHARED_WRITE_LOCK)
        self._session = session

    def list_all(self) -> list[Vehicle]:
        query = select(VehicleRow).order_by(VehicleRow.id)
        try:
            rows = self._session.execute(query).scalars().all()
        except SQLAlchemyError as exc:
            raise StorageError("Failed to read vehicles") from exc
        return [self._to_domain(row) for row in rows]

    def get_by_id(self, vehicle_id: int) -> Vehicle | None:
        try:
            row = self._session.get(VehicleRow, vehicle_id)
        except SQLAlchemyError as exc:
            raise StorageError("Failed to read vehicle", vehicle_id=vehicle_id) from exc
        return self._to_domain(row) if row else None

    def add(self, vehicle: Vehicle) -> None:
        with self.exclusive():
            self._session.add(self._to_row(vehicle))
            self._commit(vehicle.id)

    def replace(self, vehicle: Vehicle) -> bool:
        with self.exclusive():
            row = self._session.get(VehicleRow, vehicle.id)
            if row is None:
                return False
            self._copy_into(row, vehicle)
            self._commit(vehicle.id)
            return True

    def remove(self, vehicle_id: int) -> bool:
        with self.exclusive():
            row = self._session.get(VehicleRow, vehicle_id)
            if row is None:
                return False
            self._session.delete(row)
            self._commit(vehicle_id)
            return True

    def _commit(self, vehicle_id: int) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.error(
                "Failed to persist vehicle",
                extra={"vehicle_id": vehicle_id, "error_type": type(exc).__name__},
            )
            raise StorageError("Failed to persist vehicle", vehicle_id=vehicle_id) from exc

    def _to_row(self, vehicle: Vehicle) -> VehicleRow:
        row = VehicleRow(id=vehicle.id)
        self._copy_into(row, vehicle)
        return row

    def _copy_into(self, row: VehicleRow, vehicle: Vehicle) -> None:
        row.type = vehicle.type
        row.title = vehicle.title
        row.price = vehicle.price
        row.year = vehicle.year
        row.km = vehicle.km
        row.fuel = vehicle.fuel
        row.transmission = vehicle.transmission
        row.power = vehicle.power
        row.status = vehicle.status.value
        row.images = list(vehicle.images)  # New list so the JSON column is marked dirty
        if vehicle.created_at is not None:
            row.created_at = vehicle.created_at
        if vehicle.updated_at is not None:
            row.updated_at = vehicle.updated_at

    def _to_domain(self, row: VehicleRow) -> Vehicle:
        """
        Convert database model (VehicleRow) to domain entity (Vehicle).

        Args:
            row: SQLAlchemy VehicleRow model

        Returns:
            Vehicle domain entity
        """
        return Vehicle(
            id=row.id,
            type=row.type,
            title=row.title,
            price=row.price,  # Already Decimal from NUMERIC column
            year=row.year or 0,
            km=row.km or 0,
            fuel=row.fuel or "",
            transmission=row.transmission or "",
            power=row.power or "",
            status=VehicleStatus(row.status),
            images=tuple(row.images or ()),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
