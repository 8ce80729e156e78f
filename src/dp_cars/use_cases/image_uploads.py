from __future__ import annotations

import logging
from typing import Sequence

from dp_cars.domain.asset import validate_image
from dp_cars.domain.errors import DomainError, ValidationError
from dp_cars.domain.vehicle import MAX_IMAGES_PER_UPLOAD, ImageUpload
from dp_cars.use_cases.vehicle_record_store import VehicleRecordStore

logger = logging.getLogger(__name__)


def check_uploads(uploads: Sequence[ImageUpload]) -> None:
    """
    Reject a batch before any byte is written.

    Raises:
        ValidationError: More than 10 images, or any image of the wrong type/size
    """
    if len(uploads) > MAX_IMAGES_PER_UPLOAD:
        raise ValidationError(
            errors=[
                {
                    "field": "images",
                    "message": f"At most {MAX_IMAGES_PER_UPLOAD} photos per request, got {len(uploads)}",
                    "code": "TOO_MANY_IMAGES",
                }
            ]
        )
    for upload in uploads:
        validate_image(upload.filename, upload.content_type, len(upload.data))


def store_uploads(record_store: VehicleRecordStore, uploads: Sequence[ImageUpload]) -> list[str]:
    """
    Store every upload, in order. If one fails, the ones already stored are removed.

    Raises:
        ValidationError | StorageError: From the asset store
    """
    refs: list[str] = []
    try:
        for upload in uploads:
            refs.append(record_store.assets.store(upload.filename, upload.content_type, upload.data))
    except DomainError:
        discard_assets(record_store, refs)
        raise
    return refs


def discard_assets(record_store: VehicleRecordStore, refs: Sequence[str]) -> None:
    """Remove assets whose record write never happened."""
    if not refs:
        return
    report = record_store.remove_assets(refs)
    if not report.complete:
        logger.warning(
            "Orphaned image files left after failed write",
            extra={"asset_refs": [failure.asset_ref for failure in report.failures]},
        )
