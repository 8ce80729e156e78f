from __future__ import annotations

from dp_cars.domain.asset import AssetCleanupReport
from dp_cars.domain.catalog import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    ALL_TYPES,
    CatalogPage,
    CatalogQuery,
    SortKey,
)
from dp_cars.domain.vehicle import (
    Vehicle,
    VehicleFields,
    parse_non_negative_int,
    parse_positive_int,
    parse_price,
    parse_status,
)
from dp_cars.entrypoints.http.dtos.vehicles import (
    CatalogSearchResponseDTO,
    DeleteVehicleResponseDTO,
    FailedImageDTO,
    VehicleFormDTO,
    VehicleListResponseDTO,
    VehicleResponseDTO,
    VehicleSearchQueryDTO,
)


def _supplied(value: str | None) -> str | None:
    """Blank form values count as 'not supplied'."""
    if value is None or not value.strip():
        return None
    return value


def _stripped(value: str | None) -> str | None:
    value = _supplied(value)
    return value.strip() if value is not None else None


class VehicleMapper:
    """Maps between REST DTOs and domain models for vehicles."""

    @staticmethod
    def to_catalog_query(dto: VehicleSearchQueryDTO) -> CatalogQuery:
        """
        Converts query params to a domain query, defaulting anything malformed.

        - type: "all" when blank
        - sort: price-asc when unknown
        - page: 1, limit: 6 when missing, non-integer or < 1

        Args:
            dto: The data transfer object containing search query parameters

        Returns:
            CatalogQuery: Domain query, always valid
        """
        return CatalogQuery(
            type=dto.type.strip() or ALL_TYPES,
            search=dto.search.strip(),
            sort=SortKey.parse(dto.sort),
            page=parse_positive_int(dto.page, DEFAULT_PAGE),
            limit=parse_positive_int(dto.limit, DEFAULT_LIMIT),
        )

    @staticmethod
    def to_fields(dto: VehicleFormDTO) -> VehicleFields:
        """
        Converts form fields to domain fields.

        Handles string → number conversion at the boundary:
        - price: Decimal, 0 when malformed (then rejected by validation)
        - year, km: non-negative int, 0 when malformed

        Raises:
            ValidationError: If status is not a known status
        """
        price = _supplied(dto.price)
        year = _supplied(dto.year)
        km = _supplied(dto.km)
        status = _supplied(dto.status)

        return VehicleFields(
            type=_stripped(dto.type),
            title=_supplied(dto.title),
            price=parse_price(price) if price is not None else None,
            year=parse_non_negative_int(year) if year is not None else None,
            km=parse_non_negative_int(km) if km is not None else None,
            fuel=_supplied(dto.fuel),
            transmission=_supplied(dto.transmission),
            power=_supplied(dto.power),
            status=parse_status(status) if status is not None else None,
        )

    @staticmethod
    def to_vehicle_response(vehicle: Vehicle) -> VehicleResponseDTO:
        """
        Converts domain Vehicle entity to REST response DTO.

        Handles Decimal → str conversion at the boundary.
        """
        return VehicleResponseDTO(
            id=vehicle.id,
            type=vehicle.type,
            title=vehicle.title,
            price=str(vehicle.price),  # Decimal → str at boundary
            year=vehicle.year,
            km=vehicle.km,
            fuel=vehicle.fuel,
            transmission=vehicle.transmission,
            power=vehicle.power,
            status=vehicle.status.value,
            images=list(vehicle.images),
            created_at=vehicle.created_at,
            updated_at=vehicle.updated_at,
        )

    @staticmethod
    def to_search_response(page: CatalogPage) -> CatalogSearchResponseDTO:
        return CatalogSearchResponseDTO(
            data=[VehicleMapper.to_vehicle_response(v) for v in page.vehicles],
            page=page.page,
            limit=page.limit,
            total=page.total,
            total_pages=page.total_pages,
        )

    @staticmethod
    def to_list_response(vehicles: list[Vehicle]) -> VehicleListResponseDTO:
        return VehicleListResponseDTO(
            data=[VehicleMapper.to_vehicle_response(v) for v in vehicles],
            count=len(vehicles),
        )

    @staticmethod
    def to_delete_response(deleted_id: int, report: AssetCleanupReport) -> DeleteVehicleResponseDTO:
        return DeleteVehicleResponseDTO(
            deleted_id=deleted_id,
            removed_images=report.removed,
            missing_images=report.missing,
            failed_images=[
                FailedImageDTO(image_path=failure.asset_ref, reason=failure.reason)
                for failure in report.failures
            ],
        )
