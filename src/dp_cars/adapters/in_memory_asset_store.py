from __future__ import annotations

from dp_cars.domain.asset import (
    ASSET_URL_PREFIX,
    AssetNameGenerator,
    asset_name_from_ref,
    validate_image,
)
from dp_cars.domain.errors import StorageError
from dp_cars.ports.asset_store import AssetStore


class InMemoryAssetStore(AssetStore):
    """
    Canonical contract implementation for tests.

    - Applies the same validation and naming as the filesystem store
    - `fail_on_delete` lists references whose deletion raises StorageError
    """

    def __init__(self, names: AssetNameGenerator | None = None) -> None:
        self._names = names or AssetNameGenerator()
        self.files: dict[str, bytes] = {}
        self.fail_on_delete: set[str] = set()

    def store(self, original_name: str, content_type: str, data: bytes) -> str:
        validate_image(original_name, content_type, len(data))
        name = self._names.next_name(original_name)
        self.files[name] = data
        return f"{ASSET_URL_PREFIX}{name}"

    def delete(self, asset_ref: str) -> bool:
        if asset_ref in self.fail_on_delete:
            raise StorageError("Failed to delete image", asset=asset_ref)
        return self.files.pop(asset_name_from_ref(asset_ref), None) is not None

    def exists(self, asset_ref: str) -> bool:
        return asset_name_from_ref(asset_ref) in self.files
