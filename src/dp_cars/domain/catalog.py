from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Sequence

from dp_cars.domain.errors import ValidationError
from dp_cars.domain.vehicle import Vehicle


ALL_TYPES = "all"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 6


class SortKey(str, Enum):
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    YEAR_DESC = "year-desc"
    KM_ASC = "km-asc"
    KM_DESC = "km-desc"

    @classmethod
    def parse(cls, value: str | None) -> SortKey:
        """Unknown or missing sort keys fall back to price-asc."""
        try:
            return cls((value or "").strip())
        except ValueError:
            return cls.PRICE_ASC


# (attribute, descending)
_SORT_SPECS: dict[SortKey, tuple[str, bool]] = {
    SortKey.PRICE_ASC: ("price", False),
    SortKey.PRICE_DESC: ("price", True),
    SortKey.YEAR_DESC: ("year", True),
    SortKey.KM_ASC: ("km", False),
    SortKey.KM_DESC: ("km", True),
}


@dataclass(frozen=True, slots=True)
class CatalogQuery:
    type: str = ALL_TYPES
    search: str = ""
    sort: SortKey = SortKey.PRICE_ASC
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def validate(self) -> None:
        """
        Validate paging parameters.

        Raises:
            ValidationError: If page or limit is below 1
        """
        if self.page < 1:
            raise ValidationError("page must be >= 1")
        if self.limit < 1:
            raise ValidationError("limit must be >= 1")


@dataclass(frozen=True, slots=True)
class CatalogPage:
    vehicles: list[Vehicle]
    page: int
    limit: int
    total: int  # Matching vehicles before paging

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)


def query_catalog(vehicles: Sequence[Vehicle], query: CatalogQuery) -> CatalogPage:
    """
    Filter, search, sort and paginate a catalog snapshot.

    - type: exact match unless "all"
    - search: case-insensitive substring of title OR fuel OR transmission
    - sort: stable, so equal keys keep snapshot order
    - paging applies AFTER filtering; out-of-range pages are empty
    """
    query.validate()

    matches = [vehicle for vehicle in vehicles if _matches(vehicle, query)]
    total = len(matches)  # Count BEFORE paging

    attribute, descending = _SORT_SPECS[query.sort]
    ordered = sorted(matches, key=_numeric_key(attribute), reverse=descending)

    start = (query.page - 1) * query.limit
    end = start + query.limit

    return CatalogPage(
        vehicles=ordered[start:end],
        page=query.page,
        limit=query.limit,
        total=total,
    )


def _matches(vehicle: Vehicle, query: CatalogQuery) -> bool:
    if query.type != ALL_TYPES and vehicle.type != query.type:
        return False

    needle = query.search.strip().lower()
    if needle:
        haystacks = (vehicle.title, vehicle.fuel, vehicle.transmission)
        if not any(needle in (text or "").lower() for text in haystacks):
            return False

    return True


def _numeric_key(attribute: str) -> Callable[[Vehicle], Any]:
    # Missing numbers compare as 0
    def key(vehicle: Vehicle) -> Decimal:
        value = getattr(vehicle, attribute, None)
        return Decimal(value) if value is not None else Decimal(0)

    return key
