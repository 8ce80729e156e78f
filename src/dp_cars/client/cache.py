"""Last-known catalog cache used when the live catalog is unreachable."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)

CACHE_MAX_AGE = timedelta(hours=1)


@dataclass(frozen=True, slots=True)
class CacheEntry:
    data: list[dict[str, Any]] = field(default_factory=list)
    saved_at: datetime | None = None

    def is_fresh(self, now: datetime, max_age: timedelta = CACHE_MAX_AGE) -> bool:
        """Valid while now - saved_at < max_age."""
        if self.saved_at is None:
            return False
        return now - self.saved_at < max_age


class CacheStorage(ABC):
    """Holds at most one CacheEntry; saving overwrites the previous one."""

    @abstractmethod
    def load(self) -> CacheEntry | None: ...

    @abstractmethod
    def save(self, entry: CacheEntry) -> None: ...


class InMemoryCacheStorage(CacheStorage):
    def __init__(self, entry: CacheEntry | None = None) -> None:
        self.entry = entry

    def load(self) -> CacheEntry | None:
        return self.entry

    def save(self, entry: CacheEntry) -> None:
        self.entry = entry


class _CacheDocument(BaseModel):
    data: list[dict[str, Any]] = Field(default_factory=list)
    saved_at: datetime = Field(alias="savedAt")

    model_config = {"populate_by_name": True}


class FileCacheStorage(CacheStorage):
    """
    Cache persisted as a small JSON file: {"data": [...], "savedAt": "..."}.

    An unreadable cache is treated as absent and a failed save only logs:
    the cache must never break catalog browsing.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def load(self) -> CacheEntry | None:
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("Catalog cache unreadable", extra={"path": str(self._path), "error": str(exc)})
            return None

        try:
            document = _CacheDocument.model_validate_json(raw)
        except PydanticValidationError:
            logger.warning("Catalog cache malformed", extra={"path": str(self._path)})
            return None

        saved_at = document.saved_at
        if saved_at.tzinfo is None:
            # Timestamps without an offset were written in UTC
            saved_at = saved_at.replace(tzinfo=timezone.utc)

        return CacheEntry(data=document.data, saved_at=saved_at)

    def save(self, entry: CacheEntry) -> None:
        if entry.saved_at is None:
            raise ValueError("Cannot save a cache entry without saved_at")
        document = _CacheDocument(data=entry.data, saved_at=entry.saved_at)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(document.model_dump_json(by_alias=True), encoding="utf-8")
        except OSError as exc:
            logger.warning("Catalog cache not saved", extra={"path": str(self._path), "error": str(exc)})
