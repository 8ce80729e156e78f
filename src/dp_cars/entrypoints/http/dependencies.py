"""
Dependency injection for FastAPI routes.

Key principle: database sessions are per-request, never cached. The JSON
document repository and the asset store are process singletons, so all
requests share one writer lock per store.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Iterator

from fastapi import Depends

from dp_cars.adapters.json_document_vehicle_repository import JsonDocumentVehicleRepository
from dp_cars.adapters.local_asset_store import LocalAssetStore
from dp_cars.adapters.sql_vehicle_repository import SqlVehicleRepository
from dp_cars.infra.config import (
    SQL_BACKEND,
    uploads_dir,
    vehicle_store_backend,
    vehicles_document_path,
)
from dp_cars.infra.db.session import get_session
from dp_cars.ports.asset_store import AssetStore
from dp_cars.use_cases.create_vehicle import CreateVehicle
from dp_cars.use_cases.delete_vehicle import DeleteVehicle
from dp_cars.use_cases.delete_vehicle_image import DeleteVehicleImage
from dp_cars.use_cases.get_vehicle_by_id import GetVehicleById
from dp_cars.use_cases.list_vehicles import ListVehicles
from dp_cars.use_cases.search_vehicle_catalog import SearchVehicleCatalog
from dp_cars.use_cases.update_vehicle import UpdateVehicle
from dp_cars.use_cases.vehicle_record_store import VehicleRecordStore


@lru_cache
def get_asset_store() -> AssetStore:
    return LocalAssetStore(uploads_dir())


@lru_cache
def get_document_repository() -> JsonDocumentVehicleRepository:
    return JsonDocumentVehicleRepository(vehicles_document_path())


def get_record_store() -> Iterator[VehicleRecordStore]:
    """
    Provides the record store for a single request.

    With the SQL backend the store is bound to a per-request session that
    is committed/rolled back and closed when the request ends.

    Yields:
        VehicleRecordStore: Store over the configured backing
    """
    if vehicle_store_backend() == SQL_BACKEND:
        with get_session() as session:
            yield VehicleRecordStore(SqlVehicleRepository(session), get_asset_store())
    else:
        yield VehicleRecordStore(get_document_repository(), get_asset_store())


def get_search_catalog_use_case(
    store: VehicleRecordStore = Depends(get_record_store),
) -> SearchVehicleCatalog:
    return SearchVehicleCatalog(record_store=store)


def get_get_vehicle_by_id_use_case(
    store: VehicleRecordStore = Depends(get_record_store),
) -> GetVehicleById:
    return GetVehicleById(record_store=store)


def get_list_vehicles_use_case(
    store: VehicleRecordStore = Depends(get_record_store),
) -> ListVehicles:
    return ListVehicles(record_store=store)


def get_create_vehicle_use_case(
    store: VehicleRecordStore = Depends(get_record_store),
) -> CreateVehicle:
    return CreateVehicle(record_store=store)


def get_update_vehicle_use_case(
    store: VehicleRecordStore = Depends(get_record_store),
) -> UpdateVehicle:
    return UpdateVehicle(record_store=store)


def get_delete_vehicle_image_use_case(
    store: VehicleRecordStore = Depends(get_record_store),
) -> DeleteVehicleImage:
    return DeleteVehicleImage(record_store=store)


def get_delete_vehicle_use_case(
    store: VehicleRecordStore = Depends(get_record_store),
) -> DeleteVehicle:
    return DeleteVehicle(record_store=store)
