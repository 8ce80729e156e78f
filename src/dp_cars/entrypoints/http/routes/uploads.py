from __future__ import annotations

from fastapi import UploadFile

from dp_cars.domain.asset import MAX_IMAGE_BYTES
from dp_cars.domain.vehicle import ImageUpload


def read_uploads(files: list[UploadFile]) -> list[ImageUpload]:
    """
    Reads multipart files into domain uploads.

    At most MAX_IMAGE_BYTES + 1 bytes are read per file: enough for the
    asset store to reject oversized images without buffering them whole.
    """
    uploads = []
    for upload in files:
        upload.file.seek(0)
        uploads.append(
            ImageUpload(
                filename=upload.filename or "",
                content_type=upload.content_type or "",
                data=upload.file.read(MAX_IMAGE_BYTES + 1),
            )
        )
    return uploads
