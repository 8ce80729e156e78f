"""
Unit tests for SqlVehicleRepository failure handling.

Happy paths run against SQLite in the repository contract suite; these
tests use a mocked session to force database errors.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from dp_cars.adapters.sql_vehicle_repository import SqlVehicleRepository
from dp_cars.domain.errors import StorageError
from dp_cars.domain.vehicle import Vehicle


@pytest.fixture()
def mock_session() -> Mock:
    return Mock(spec=Session)


@pytest.fixture()
def vehicle() -> Vehicle:
    return Vehicle(id=1, type="auto", title="Fiat Panda", price=Decimal("8500"))


def test_failed_commit_rolls_back_and_raises_storage_error(mock_session: Mock, vehicle: Vehicle) -> None:
    mock_session.commit.side_effect = OperationalError("INSERT", {}, Exception("disk full"))
    repository = SqlVehicleRepository(mock_session)

    with pytest.raises(StorageError):
        repository.add(vehicle)

    mock_session.rollback.assert_called_once()


def test_failed_read_raises_storage_error(mock_session: Mock) -> None:
    mock_session.get.side_effect = OperationalError("SELECT", {}, Exception("gone"))
    repository = SqlVehicleRepository(mock_session)

    with pytest.raises(StorageError):
        repository.get_by_id(1)


def test_replace_missing_row_does_not_commit(mock_session: Mock, vehicle: Vehicle) -> None:
    mock_session.get.return_value = None
    repository = SqlVehicleRepository(mock_session)

    assert repository.replace(vehicle) is False
    mock_session.commit.assert_not_called()


def test_repositories_share_the_writer_lock(mock_session: Mock) -> None:
    first = SqlVehicleRepository(mock_session)
    second = SqlVehicleRepository(Mock(spec=Session))

    assert first._write_lock is second._write_lock
