from fastapi import APIRouter, Depends

from dp_cars.entrypoints.http.dependencies import (
    get_get_vehicle_by_id_use_case,
    get_search_catalog_use_case,
)
from dp_cars.entrypoints.http.dtos.vehicles import (
    CatalogSearchResponseDTO,
    VehicleResponseDTO,
    VehicleSearchQueryDTO,
)
from dp_cars.entrypoints.http.error_responses import ErrorResponse
from dp_cars.entrypoints.http.mappers.vehicle_mapper import VehicleMapper
from dp_cars.use_cases.get_vehicle_by_id import GetVehicleById, GetVehicleByIdRequest
from dp_cars.use_cases.search_vehicle_catalog import (
    SearchVehicleCatalog,
    SearchVehicleCatalogRequest,
)


router = APIRouter(tags=["Vehicles"])


@router.get(
    "/vehicles",
    response_model=CatalogSearchResponseDTO,
    summary="Search vehicle catalog",
    description="""
    Search the catalog with optional filters, sorting and pagination.

    ## Filters
    - type: exact match, `all` (default) disables it
    - search: case-insensitive substring of title, fuel or transmission

    ## Sorting
    price-asc (default), price-desc, year-desc, km-asc, km-desc.
    Equal keys keep catalog order.

    ## Pagination
    - page: default 1, limit: default 6
    - Malformed values fall back to the defaults
    - Pages past the end are empty, not errors

    ## Example
    ```
    GET /api/vehicles?type=auto&search=diesel&sort=price-desc&page=2
    ```
    """,
)
def search_vehicles(
    query: VehicleSearchQueryDTO = Depends(),
    use_case: SearchVehicleCatalog = Depends(get_search_catalog_use_case),
) -> CatalogSearchResponseDTO:
    """Search vehicles endpoint following parse → execute → map → return pattern."""
    # 1. Map to domain request
    request = SearchVehicleCatalogRequest(query=VehicleMapper.to_catalog_query(query))

    # 2. Execute use case
    result = use_case.execute(request)

    # 3. Map to response
    return VehicleMapper.to_search_response(result.page)


@router.get(
    "/vehicles/{vehicle_id}",
    response_model=VehicleResponseDTO,
    summary="Get vehicle by ID",
    responses={
        404: {"model": ErrorResponse, "description": "Vehicle not found"},
        422: {"model": ErrorResponse, "description": "Invalid vehicle ID"},
    },
)
def get_vehicle(
    vehicle_id: str,
    use_case: GetVehicleById = Depends(get_get_vehicle_by_id_use_case),
) -> VehicleResponseDTO:
    result = use_case.execute(GetVehicleByIdRequest(vehicle_id=vehicle_id))
    return VehicleMapper.to_vehicle_response(result.vehicle)
