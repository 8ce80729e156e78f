"""Catalog browsing state with offline fallback to the last-known results."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable

from dp_cars.client.cache import CACHE_MAX_AGE, CacheEntry, CacheStorage, FileCacheStorage
from dp_cars.client.transport import CatalogFetchError, CatalogFilters, CatalogTransport
from dp_cars.infra.config import catalog_api_base, client_cache_path

logger = logging.getLogger(__name__)

PAGE_LIMIT = 6


class ConnectionState(str, Enum):
    LIVE = "live"
    OFFLINE = "offline"


class LoadMode(str, Enum):
    REPLACE = "replace"
    APPEND = "append"


@dataclass(frozen=True, slots=True)
class CatalogView:
    """
    What the catalog screen shows after a load.

    - stale: results come from the cache, not the live catalog
    - unavailable: offline with no usable cache; nothing to show
    """

    vehicles: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0
    page: int = 1
    state: ConnectionState = ConnectionState.LIVE
    stale: bool = False
    unavailable: bool = False

    @property
    def has_more(self) -> bool:
        # Paging only makes sense against the live catalog
        return self.state is ConnectionState.LIVE and len(self.vehicles) < self.total


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CatalogController:
    """
    Loads catalog pages and falls back to the cached result list on failure.

    - refresh() replaces the list with page 1 of the current filters
    - load_more() appends the next page
    - Every load takes a sequence token; a response that is no longer the
      latest request is discarded, so a slow old page never overwrites a
      newer filter's results
    - A successful load writes the accumulated list to the cache
    - A failed load shows the cache when it is younger than `max_age`,
      otherwise an unavailable view
    """

    def __init__(
        self,
        transport: CatalogTransport,
        cache: CacheStorage,
        limit: int = PAGE_LIMIT,
        max_age: timedelta = CACHE_MAX_AGE,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._transport = transport
        self._cache = cache
        self._limit = limit
        self._max_age = max_age
        self._clock = clock

        self._lock = threading.Lock()
        self._sequence = 0
        self._filters = CatalogFilters()
        self._view = CatalogView(page=0)

    @property
    def view(self) -> CatalogView:
        return self._view

    @property
    def filters(self) -> CatalogFilters:
        return self._filters

    def refresh(self, filters: CatalogFilters | None = None) -> CatalogView:
        """Load page 1, optionally under new filters."""
        with self._lock:
            if filters is not None:
                self._filters = filters
        return self._load(page=1, mode=LoadMode.REPLACE)

    def load_more(self) -> CatalogView:
        """Append the next page. No-op when there is nothing more to load."""
        current = self._view
        if not current.has_more:
            return current
        return self._load(page=current.page + 1, mode=LoadMode.APPEND)

    def _load(self, page: int, mode: LoadMode) -> CatalogView:
        with self._lock:
            self._sequence += 1
            token = self._sequence
            filters = self._filters

        try:
            remote = self._transport.fetch_page(filters, page, self._limit)
        except CatalogFetchError:
            return self._fall_back(token)

        with self._lock:
            if token != self._sequence:
                logger.info("Discarding superseded catalog response", extra={"page": page})
                return self._view

            if mode is LoadMode.APPEND:
                vehicles = self._view.vehicles + remote.vehicles
            else:
                vehicles = list(remote.vehicles)

            self._view = CatalogView(
                vehicles=vehicles,
                total=remote.total,
                page=page,
                state=ConnectionState.LIVE,
            )
            self._cache.save(CacheEntry(data=vehicles, saved_at=self._clock()))
            return self._view

    def _fall_back(self, token: int) -> CatalogView:
        entry = self._cache.load()
        now = self._clock()

        with self._lock:
            if token != self._sequence:
                return self._view

            if entry is not None and entry.data and entry.is_fresh(now, self._max_age):
                logger.info(
                    "Showing cached catalog",
                    extra={"vehicle_count": len(entry.data), "saved_at": entry.saved_at.isoformat()},  # type: ignore[union-attr]
                )
                self._view = CatalogView(
                    vehicles=list(entry.data),
                    total=len(entry.data),
                    page=1,
                    state=ConnectionState.OFFLINE,
                    stale=True,
                )
            else:
                logger.warning("Catalog unavailable and no usable cache")
                self._view = CatalogView(
                    page=1,
                    state=ConnectionState.OFFLINE,
                    unavailable=True,
                )
            return self._view


def build_catalog_controller() -> CatalogController:
    """Controller wired to DP_CARS_API_BASE and DP_CARS_CACHE_PATH."""
    return CatalogController(
        transport=CatalogTransport(catalog_api_base()),
        cache=FileCacheStorage(client_cache_path()),
    )
