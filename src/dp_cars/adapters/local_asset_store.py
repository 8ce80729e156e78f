"""Filesystem implementation of AssetStore."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dp_cars.domain.asset import (
    ASSET_URL_PREFIX,
    AssetNameGenerator,
    asset_name_from_ref,
    validate_image,
)
from dp_cars.domain.errors import StorageError
from dp_cars.ports.asset_store import AssetStore

logger = logging.getLogger(__name__)


class LocalAssetStore(AssetStore):
    """
    Stores image bytes as files in a single directory.

    - File names are '<millis>-<sanitized original name>'
    - References are '/uploads/<file name>'
    - References resolve by base name only, so a reference can never
      point outside the directory
    """

    def __init__(self, directory: str | Path, names: AssetNameGenerator | None = None) -> None:
        self._directory = Path(directory)
        self._names = names or AssetNameGenerator()

    @property
    def directory(self) -> Path:
        return self._directory

    def store(self, original_name: str, content_type: str, data: bytes) -> str:
        validate_image(original_name, content_type, len(data))

        name = self._names.next_name(original_name)
        path = self._directory / name

        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            # 'xb' refuses to overwrite an existing asset
            with open(path, "xb") as handle:
                handle.write(data)
        except OSError as exc:
            logger.error(
                "Failed to write asset",
                extra={"asset_name": name, "error": str(exc)},
            )
            raise StorageError("Failed to store image", asset=name) from exc

        logger.info("Asset stored", extra={"asset_name": name, "size": len(data)})
        return f"{ASSET_URL_PREFIX}{name}"

    def delete(self, asset_ref: str) -> bool:
        path = self._resolve(asset_ref)
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.info("Asset already absent", extra={"asset_ref": asset_ref})
            return False
        except OSError as exc:
            raise StorageError("Failed to delete image", asset=asset_ref) from exc

        logger.info("Asset deleted", extra={"asset_ref": asset_ref})
        return True

    def exists(self, asset_ref: str) -> bool:
        return self._resolve(asset_ref).is_file()

    def _resolve(self, asset_ref: str) -> Path:
        return self._directory / asset_name_from_ref(asset_ref)
