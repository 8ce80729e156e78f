"""
Test suite for the catalog query.

Verifies:
- type filter is exact, "all" disables it
- search is a case-insensitive substring of title, fuel or transmission
- sorts are stable and missing numbers compare as 0
- total counts matches before paging; pages past the end are empty
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from dp_cars.domain.catalog import CatalogPage, CatalogQuery, SortKey, query_catalog
from dp_cars.domain.errors import ValidationError
from dp_cars.domain.vehicle import Vehicle


def make_vehicle(vehicle_id: int, **overrides: object) -> Vehicle:
    values: dict[str, object] = {
        "id": vehicle_id,
        "type": "auto",
        "title": f"Vehicle {vehicle_id}",
        "price": Decimal("10000"),
        "year": 2020,
        "km": 10000,
        "fuel": "Benzina",
        "transmission": "Manuale",
    }
    values.update(overrides)
    return Vehicle(**values)  # type: ignore[arg-type]


@pytest.fixture()
def catalog() -> list[Vehicle]:
    return [
        make_vehicle(1, title="Fiat Panda", price=Decimal("10000"), year=2018, km=60000),
        make_vehicle(2, title="Yamaha MT-07", type="moto", price=Decimal("5000"), year=2021, km=8000),
        make_vehicle(3, title="BMW Serie 3", price=Decimal("20000"), year=2022, km=15000, fuel="Diesel"),
        make_vehicle(4, title="Toyota Yaris", price=Decimal("10000"), year=2019, km=30000, transmission="Automatico"),
    ]


def ids(page: CatalogPage) -> list[int]:
    return [vehicle.id for vehicle in page.vehicles]


# ==============================================================================
# Filters
# ==============================================================================


def test_all_type_returns_everything(catalog: list[Vehicle]) -> None:
    page = query_catalog(catalog, CatalogQuery(limit=10))

    assert page.total == 4
    assert len(page.vehicles) == 4


def test_type_filter_is_exact(catalog: list[Vehicle]) -> None:
    page = query_catalog(catalog, CatalogQuery(type="moto"))

    assert ids(page) == [2]
    assert page.total == 1


def test_unknown_type_matches_nothing(catalog: list[Vehicle]) -> None:
    page = query_catalog(catalog, CatalogQuery(type="camper"))

    assert page.vehicles == []
    assert page.total == 0
    assert page.total_pages == 0


@pytest.mark.parametrize("search", ["panda", "PAN", "  Fiat  "])
def test_search_is_case_insensitive_substring(catalog: list[Vehicle], search: str) -> None:
    page = query_catalog(catalog, CatalogQuery(search=search))

    assert ids(page) == [1]


def test_search_matches_fuel_and_transmission(catalog: list[Vehicle]) -> None:
    assert ids(query_catalog(catalog, CatalogQuery(search="diesel"))) == [3]
    assert ids(query_catalog(catalog, CatalogQuery(search="automatico"))) == [4]


def test_type_and_search_combine(catalog: list[Vehicle]) -> None:
    page = query_catalog(catalog, CatalogQuery(type="moto", search="panda"))

    assert page.total == 0


# ==============================================================================
# Sorting
# ==============================================================================


def test_price_desc_orders_highest_first() -> None:
    vehicles = [
        make_vehicle(1, price=Decimal("10000")),
        make_vehicle(2, price=Decimal("5000")),
        make_vehicle(3, price=Decimal("20000")),
    ]

    page = query_catalog(vehicles, CatalogQuery(sort=SortKey.PRICE_DESC))

    assert [vehicle.price for vehicle in page.vehicles] == [
        Decimal("20000"),
        Decimal("10000"),
        Decimal("5000"),
    ]


def test_sort_is_stable_for_equal_prices(catalog: list[Vehicle]) -> None:
    asc = query_catalog(catalog, CatalogQuery(sort=SortKey.PRICE_ASC))
    desc = query_catalog(catalog, CatalogQuery(sort=SortKey.PRICE_DESC))

    # 1 and 4 share a price and keep their snapshot order both ways
    assert ids(asc) == [2, 1, 4, 3]
    assert ids(desc) == [3, 1, 4, 2]


@pytest.mark.parametrize(
    ("sort", "expected"),
    [
        (SortKey.YEAR_DESC, [3, 2, 4, 1]),
        (SortKey.KM_ASC, [2, 3, 4, 1]),
        (SortKey.KM_DESC, [1, 4, 3, 2]),
    ],
)
def test_numeric_sorts(catalog: list[Vehicle], sort: SortKey, expected: list[int]) -> None:
    assert ids(query_catalog(catalog, CatalogQuery(sort=sort))) == expected


def test_unknown_sort_key_falls_back_to_price_asc() -> None:
    assert SortKey.parse("cheapest") is SortKey.PRICE_ASC
    assert SortKey.parse(None) is SortKey.PRICE_ASC
    assert SortKey.parse("km-desc") is SortKey.KM_DESC


# ==============================================================================
# Paging
# ==============================================================================


@pytest.fixture()
def large_catalog() -> list[Vehicle]:
    return [make_vehicle(i, price=Decimal(1000 * ((i * 7) % 15 + 1))) for i in range(1, 16)]


def test_consecutive_pages_concatenate_to_sorted_prefix(large_catalog: list[Vehicle]) -> None:
    full = query_catalog(large_catalog, CatalogQuery(limit=100))
    first = query_catalog(large_catalog, CatalogQuery(page=1, limit=6))
    second = query_catalog(large_catalog, CatalogQuery(page=2, limit=6))

    assert first.vehicles + second.vehicles == full.vehicles[:12]


def test_total_counts_matches_before_paging(large_catalog: list[Vehicle]) -> None:
    page = query_catalog(large_catalog, CatalogQuery(page=3, limit=6))

    assert page.total == 15
    assert page.total_pages == 3
    assert len(page.vehicles) == 3


def test_page_past_the_end_is_empty(large_catalog: list[Vehicle]) -> None:
    page = query_catalog(large_catalog, CatalogQuery(page=9, limit=6))

    assert page.vehicles == []
    assert page.total == 15


def test_query_is_idempotent(large_catalog: list[Vehicle]) -> None:
    query = CatalogQuery(search="vehicle", sort=SortKey.KM_DESC, page=2, limit=4)

    assert query_catalog(large_catalog, query) == query_catalog(large_catalog, query)


def test_query_does_not_mutate_snapshot(catalog: list[Vehicle]) -> None:
    before = list(catalog)

    query_catalog(catalog, CatalogQuery(sort=SortKey.PRICE_DESC))

    assert catalog == before


@pytest.mark.parametrize(("page", "limit"), [(0, 6), (1, 0), (-1, 6)])
def test_invalid_paging_is_rejected(catalog: list[Vehicle], page: int, limit: int) -> None:
    with pytest.raises(ValidationError):
        query_catalog(catalog, CatalogQuery(page=page, limit=limit))
