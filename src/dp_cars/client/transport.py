"""HTTP access to the catalog endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import requests
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)

FETCH_TIMEOUT_SECONDS = 5.0


class CatalogFetchError(Exception):
    """The live catalog could not be fetched (network, HTTP status, timeout, body)."""


@dataclass(frozen=True, slots=True)
class CatalogFilters:
    type: str = "all"
    search: str = ""
    sort: str = "price-asc"


@dataclass(frozen=True, slots=True)
class RemotePage:
    vehicles: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0


class _CatalogPayload(BaseModel):
    data: list[dict[str, Any]] = Field(default_factory=list)
    total: int = 0


class CatalogTransport:
    """
    Fetches catalog pages from GET {base_url}/api/vehicles.

    Every failure mode surfaces as CatalogFetchError so callers have a
    single fallback path.
    """

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float = FETCH_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout

    def fetch_page(self, filters: CatalogFilters, page: int, limit: int) -> RemotePage:
        url = f"{self._base_url}/api/vehicles"
        params = {
            "type": filters.type or "all",
            "sort": filters.sort or "price-asc",
            "search": filters.search or "",
            "page": str(page),
            "limit": str(limit),
        }

        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
            response.raise_for_status()
            payload = _CatalogPayload.model_validate(response.json())
        except requests.RequestException as exc:
            # Covers timeouts, connection errors and non-2xx statuses
            logger.warning("Catalog fetch failed", extra={"url": url, "error": str(exc)})
            raise CatalogFetchError(str(exc)) from exc
        except (ValueError, PydanticValidationError) as exc:
            logger.warning("Catalog response malformed", extra={"url": url})
            raise CatalogFetchError("Malformed catalog response") from exc

        return RemotePage(vehicles=payload.data, total=payload.total)
