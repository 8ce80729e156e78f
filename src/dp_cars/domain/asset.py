from __future__ import annotations

import re
import threading
import time
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Callable

from dp_cars.domain.errors import ValidationError


MAX_IMAGE_BYTES = 5 * 1024 * 1024
ALLOWED_IMAGE_EXTENSIONS = frozenset({"jpeg", "jpg", "png", "webp"})
ASSET_URL_PREFIX = "/uploads/"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


@dataclass(frozen=True, slots=True)
class AssetFailure:
    asset_ref: str
    reason: str


@dataclass(slots=True)
class AssetCleanupReport:
    """
    Outcome of a best-effort cascading asset deletion.

    Every asset is attempted independently:
    - removed: file existed and was deleted
    - missing: file was already gone (not an error)
    - failures: deletion raised a storage error
    """

    removed: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    failures: list[AssetFailure] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failures


def sanitize_filename(original_name: str) -> str:
    """Keep only [A-Za-z0-9_.-]; everything else becomes '_'."""
    base = PurePosixPath(original_name.replace("\\", "/")).name
    return _UNSAFE_CHARS.sub("_", base) or "image"


def validate_image(original_name: str, content_type: str, size: int) -> None:
    """
    Accept only jpeg/jpg/png/webp up to MAX_IMAGE_BYTES.

    Both the extension and the declared content type must name an
    accepted format.

    Raises:
        ValidationError: For unsupported type or oversized payload
    """
    extension = PurePosixPath(original_name).suffix.lower().lstrip(".")
    media_type, _, subtype = (content_type or "").lower().partition("/")

    if extension not in ALLOWED_IMAGE_EXTENSIONS or media_type != "image" or (
        subtype.split(";")[0].strip() not in ALLOWED_IMAGE_EXTENSIONS
    ):
        raise ValidationError(
            errors=[
                {
                    "field": "images",
                    "message": f"Only images are allowed (jpeg, jpg, png, webp): {original_name}",
                    "code": "UNSUPPORTED_IMAGE_TYPE",
                }
            ]
        )

    if size > MAX_IMAGE_BYTES:
        raise ValidationError(
            errors=[
                {
                    "field": "images",
                    "message": f"Image exceeds {MAX_IMAGE_BYTES // (1024 * 1024)} MB: {original_name}",
                    "code": "IMAGE_TOO_LARGE",
                }
            ]
        )


def asset_name_from_ref(asset_ref: str) -> str:
    """'/uploads/123-a.jpg' -> '123-a.jpg'. Directory components are dropped."""
    return PurePosixPath(asset_ref.replace("\\", "/")).name


class AssetNameGenerator:
    """
    Produces '<millis>-<safe name>' with a strictly increasing stamp.

    Two uploads in the same millisecond get consecutive stamps, so names
    never collide within one generator.
    """

    def __init__(self, clock_ms: Callable[[], int] | None = None) -> None:
        self._clock_ms = clock_ms or (lambda: time.time_ns() // 1_000_000)
        self._last_stamp = 0
        self._lock = threading.Lock()

    def next_name(self, original_name: str) -> str:
        with self._lock:
            stamp = max(self._clock_ms(), self._last_stamp + 1)
            self._last_stamp = stamp
        return f"{stamp}-{sanitize_filename(original_name)}"
