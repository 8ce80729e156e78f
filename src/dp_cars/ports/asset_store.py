from __future__ import annotations

from abc import ABC, abstractmethod


class AssetStore(ABC):
    """
    Port for uploaded image files.

    Pure file operations keyed by generated names; no catalog logic.
    """

    @abstractmethod
    def store(self, original_name: str, content_type: str, data: bytes) -> str:
        """
        Persist an image and return its asset reference.

        Raises:
            ValidationError: If the content is not an accepted image or too large
            StorageError: If the bytes cannot be written
        """
        ...

    @abstractmethod
    def delete(self, asset_ref: str) -> bool:
        """
        Delete an asset. Idempotent.

        Returns:
            True if a file was removed, False if it did not exist

        Raises:
            StorageError: If the file exists but cannot be removed
        """
        ...

    @abstractmethod
    def exists(self, asset_ref: str) -> bool: ...
