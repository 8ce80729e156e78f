"""Vehicle record store: id assignment, validation and image bookkeeping."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Sequence

from dp_cars.domain.asset import AssetCleanupReport, AssetFailure
from dp_cars.domain.errors import NotFoundError, StorageError, ValidationError
from dp_cars.domain.vehicle import (
    DEFAULT_VEHICLE_TYPE,
    MIN_IMAGES_ON_CREATE,
    Vehicle,
    VehicleFields,
    VehicleStatus,
    apply_fields,
)
from dp_cars.ports.asset_store import AssetStore
from dp_cars.ports.vehicle_repository import VehicleRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VehicleRecordStore:
    """
    Owns the vehicle collection and keeps records and image files consistent.

    Responsibilities:
    - Validate fields and minimum photo count
    - Assign ids as max(existing) + 1
    - Stamp createdAt/updatedAt
    - Delete image files when images or records are removed

    Every mutation runs inside the repository's exclusive section, so two
    concurrent writers cannot compute from the same snapshot.
    """

    def __init__(
        self,
        vehicle_repository: VehicleRepository,
        asset_store: AssetStore,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = vehicle_repository
        self._assets = asset_store
        self._clock = clock

    @property
    def assets(self) -> AssetStore:
        return self._assets

    def list(self) -> list[Vehicle]:
        """Full snapshot in collection order. No filtering here."""
        return self._repository.list_all()

    def get(self, vehicle_id: int) -> Vehicle:
        """
        Raises:
            NotFoundError: If no vehicle has `vehicle_id`
        """
        vehicle = self._repository.get_by_id(vehicle_id)
        if vehicle is None:
            raise NotFoundError(resource="Vehicle", identifier=vehicle_id)
        return vehicle

    def create(self, fields: VehicleFields, image_refs: Sequence[str]) -> Vehicle:
        """
        Create a vehicle from validated fields and already stored images.

        Raises:
            ValidationError: Fewer than 5 images, short title or price <= 0.
                Nothing is persisted in that case.
        """
        validate_new_vehicle(fields, len(image_refs))

        with self._repository.exclusive():
            existing = self._repository.list_all()
            new_id = max((vehicle.id for vehicle in existing), default=0) + 1
            now = self._clock()

            vehicle = Vehicle(
                id=new_id,
                type=(fields.type or "").strip() or DEFAULT_VEHICLE_TYPE,
                title=(fields.title or "").strip(),
                price=fields.price,  # type: ignore[arg-type]  # checked by validation
                year=fields.year or 0,
                km=fields.km or 0,
                fuel=fields.fuel or "",
                transmission=fields.transmission or "",
                power=fields.power or "",
                status=fields.status or VehicleStatus.AVAILABLE,
                images=tuple(image_refs),
                created_at=now,
                updated_at=now,
            )
            self._repository.add(vehicle)

        logger.info(
            "Vehicle created",
            extra={"vehicle_id": vehicle.id, "image_count": len(vehicle.images)},
        )
        return vehicle

    def update(
        self,
        vehicle_id: int,
        fields: VehicleFields,
        new_image_refs: Sequence[str] = (),
    ) -> Vehicle:
        """
        Merge supplied fields and append new images. Always bumps updatedAt.

        Raises:
            ValidationError: If a supplied field breaks a catalog rule
            NotFoundError: If no vehicle has `vehicle_id`
        """
        fields.validate(creating=False)

        with self._repository.exclusive():
            current = self.get(vehicle_id)
            updated = replace(
                current,
                **apply_fields(fields),
                images=current.images + tuple(new_image_refs),
                updated_at=self._clock(),
            )
            self._persist_replacement(updated)

        logger.info(
            "Vehicle updated",
            extra={"vehicle_id": vehicle_id, "new_images": len(new_image_refs)},
        )
        return updated

    def delete_image(self, vehicle_id: int, image_ref: str) -> Vehicle:
        """
        Detach one image from a vehicle and delete its file (best-effort).

        Raises:
            ValidationError: If `image_ref` is empty
            NotFoundError: If the vehicle does not exist or does not own `image_ref`
        """
        if not image_ref or not image_ref.strip():
            raise ValidationError(
                errors=[
                    {
                        "field": "imagePath",
                        "message": "imagePath is required",
                        "code": "REQUIRED",
                    }
                ]
            )

        with self._repository.exclusive():
            current = self.get(vehicle_id)
            if image_ref not in current.images:
                raise NotFoundError(resource="Image", identifier=image_ref, vehicle_id=vehicle_id)

            updated = replace(
                current,
                images=tuple(ref for ref in current.images if ref != image_ref),
                updated_at=self._clock(),
            )
            self._persist_replacement(updated)

        # The record no longer references the file, so a failed delete only leaves an orphan
        self.remove_assets([image_ref])
        return updated

    def delete(self, vehicle_id: int) -> AssetCleanupReport:
        """
        Remove a vehicle, then every one of its image files.

        File deletions are attempted independently; failures are collected
        in the report and never abort the operation.

        Raises:
            NotFoundError: If no vehicle has `vehicle_id`
        """
        with self._repository.exclusive():
            current = self.get(vehicle_id)
            if not self._repository.remove(vehicle_id):
                raise NotFoundError(resource="Vehicle", identifier=vehicle_id)

        report = self.remove_assets(current.images)
        logger.info(
            "Vehicle deleted",
            extra={
                "vehicle_id": vehicle_id,
                "removed_images": len(report.removed),
                "missing_images": len(report.missing),
                "failed_images": len(report.failures),
            },
        )
        return report

    def remove_assets(self, asset_refs: Sequence[str]) -> AssetCleanupReport:
        """Best-effort deletion of `asset_refs`, one attempt each."""
        report = AssetCleanupReport()
        for ref in asset_refs:
            try:
                if self._assets.delete(ref):
                    report.removed.append(ref)
                else:
                    report.missing.append(ref)
            except StorageError as exc:
                logger.warning(
                    "Failed to delete image file",
                    extra={"asset_ref": ref, "error": exc.message},
                )
                report.failures.append(AssetFailure(asset_ref=ref, reason=exc.message))
        return report

    def _persist_replacement(self, vehicle: Vehicle) -> None:
        if not self._repository.replace(vehicle):
            raise NotFoundError(resource="Vehicle", identifier=vehicle.id)


def validate_new_vehicle(fields: VehicleFields, image_count: int) -> None:
    """
    Validate a creation request, reporting every offending field at once.

    Raises:
        ValidationError: With one entry per problem
    """
    errors: list[dict[str, str]] = []

    if image_count < MIN_IMAGES_ON_CREATE:
        errors.append(
            {
                "field": "images",
                "message": f"At least {MIN_IMAGES_ON_CREATE} photos are required, got {image_count}",
                "code": "NOT_ENOUGH_IMAGES",
            }
        )

    try:
        fields.validate(creating=True)
    except ValidationError as exc:
        errors.extend(exc.errors or [])

    if errors:
        raise ValidationError(errors=errors)
