from __future__ import annotations

from dataclasses import dataclass

from dp_cars.domain.catalog import CatalogPage, CatalogQuery, query_catalog
from dp_cars.use_cases.vehicle_record_store import VehicleRecordStore


@dataclass(frozen=True, slots=True)
class SearchVehicleCatalogRequest:
    query: CatalogQuery


@dataclass(frozen=True, slots=True)
class SearchVehicleCatalogResponse:
    page: CatalogPage


class SearchVehicleCatalog:
    """
    Vehicle catalog search with type filter, free-text search, sort and paging.

    Takes a snapshot from the record store and runs the pure query over it;
    no filtering logic lives in the store.
    """

    def __init__(self, record_store: VehicleRecordStore) -> None:
        self._record_store = record_store

    def execute(self, request: SearchVehicleCatalogRequest) -> SearchVehicleCatalogResponse:
        """
        Execute catalog search.

        Args:
            request: Parsed catalog query

        Returns:
            Response containing the requested page and the total match count

        Raises:
            ValidationError: If paging parameters are invalid
        """
        request.query.validate()

        snapshot = self._record_store.list()
        return SearchVehicleCatalogResponse(page=query_catalog(snapshot, request.query))
