"""
Unit tests for FastAPI dependency wiring.

- get_record_store() picks the backing from VEHICLE_STORE_BACKEND
- With the SQL backing, the session comes from get_session() per request
- JSON document repository and asset store are process singletons
- Use case providers wrap the record store they are given
"""

from __future__ import annotations

from pathlib import Path
from types import GeneratorType
from typing import Iterator
from unittest.mock import MagicMock, Mock, patch

import pytest

from dp_cars.adapters.json_document_vehicle_repository import JsonDocumentVehicleRepository
from dp_cars.adapters.local_asset_store import LocalAssetStore
from dp_cars.adapters.sql_vehicle_repository import SqlVehicleRepository
from dp_cars.entrypoints.http.dependencies import (
    get_asset_store,
    get_create_vehicle_use_case,
    get_delete_vehicle_image_use_case,
    get_delete_vehicle_use_case,
    get_document_repository,
    get_get_vehicle_by_id_use_case,
    get_list_vehicles_use_case,
    get_record_store,
    get_search_catalog_use_case,
    get_update_vehicle_use_case,
)
from dp_cars.use_cases.create_vehicle import CreateVehicle
from dp_cars.use_cases.delete_vehicle import DeleteVehicle
from dp_cars.use_cases.delete_vehicle_image import DeleteVehicleImage
from dp_cars.use_cases.get_vehicle_by_id import GetVehicleById
from dp_cars.use_cases.list_vehicles import ListVehicles
from dp_cars.use_cases.search_vehicle_catalog import SearchVehicleCatalog
from dp_cars.use_cases.update_vehicle import UpdateVehicle
from dp_cars.use_cases.vehicle_record_store import VehicleRecordStore


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    monkeypatch.setenv("VEHICLES_DB_PATH", str(tmp_path / "vehicles.json"))
    monkeypatch.setenv("UPLOADS_DIR", str(tmp_path / "uploads"))
    get_asset_store.cache_clear()
    get_document_repository.cache_clear()
    yield
    get_asset_store.cache_clear()
    get_document_repository.cache_clear()


# ==============================================================================
# get_record_store()
# ==============================================================================


def test_get_record_store_is_generator() -> None:
    assert isinstance(get_record_store(), GeneratorType)


def test_json_backend_is_the_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("VEHICLE_STORE_BACKEND", raising=False)

    store = next(get_record_store())

    assert isinstance(store._repository, JsonDocumentVehicleRepository)
    assert isinstance(store.assets, LocalAssetStore)


def test_json_backend_shares_one_repository(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VEHICLE_STORE_BACKEND", "json")

    first = next(get_record_store())
    second = next(get_record_store())

    assert first._repository is second._repository
    assert first.assets is second.assets


def test_sql_backend_uses_session_per_request(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VEHICLE_STORE_BACKEND", "sql")
    mock_session = Mock()
    mock_context_manager = MagicMock()
    mock_context_manager.__enter__.return_value = mock_session

    with patch("dp_cars.entrypoints.http.dependencies.get_session") as mock_get_session:
        mock_get_session.return_value = mock_context_manager

        generator = get_record_store()
        store = next(generator)

        assert isinstance(store._repository, SqlVehicleRepository)
        assert store._repository._session is mock_session

        with pytest.raises(StopIteration):
            next(generator)

    mock_context_manager.__exit__.assert_called_once()


def test_unknown_backend_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VEHICLE_STORE_BACKEND", "mongo")

    with pytest.raises(RuntimeError):
        next(get_record_store())


# ==============================================================================
# Use case providers
# ==============================================================================


@pytest.mark.parametrize(
    ("provider", "use_case_type"),
    [
        (get_search_catalog_use_case, SearchVehicleCatalog),
        (get_get_vehicle_by_id_use_case, GetVehicleById),
        (get_list_vehicles_use_case, ListVehicles),
        (get_create_vehicle_use_case, CreateVehicle),
        (get_update_vehicle_use_case, UpdateVehicle),
        (get_delete_vehicle_image_use_case, DeleteVehicleImage),
        (get_delete_vehicle_use_case, DeleteVehicle),
    ],
)
def test_providers_wrap_given_record_store(provider, use_case_type) -> None:  # type: ignore[no-untyped-def]
    store = Mock(spec=VehicleRecordStore)

    use_case = provider(store=store)

    assert isinstance(use_case, use_case_type)
    assert use_case._record_store is store
