from fastapi import APIRouter, Body, Depends, File, UploadFile, status

from dp_cars.entrypoints.http.dependencies import (
    get_create_vehicle_use_case,
    get_delete_vehicle_image_use_case,
    get_delete_vehicle_use_case,
    get_list_vehicles_use_case,
    get_update_vehicle_use_case,
)
from dp_cars.entrypoints.http.dtos.vehicles import (
    DeleteImageRequestDTO,
    DeleteVehicleResponseDTO,
    VehicleFormDTO,
    VehicleListResponseDTO,
    VehicleResponseDTO,
)
from dp_cars.entrypoints.http.error_responses import ErrorResponse
from dp_cars.entrypoints.http.mappers.vehicle_mapper import VehicleMapper
from dp_cars.entrypoints.http.routes.uploads import read_uploads
from dp_cars.use_cases.create_vehicle import CreateVehicle, CreateVehicleRequest
from dp_cars.use_cases.delete_vehicle import DeleteVehicle, DeleteVehicleRequest
from dp_cars.use_cases.delete_vehicle_image import (
    DeleteVehicleImage,
    DeleteVehicleImageRequest,
)
from dp_cars.use_cases.list_vehicles import ListVehicles
from dp_cars.use_cases.update_vehicle import UpdateVehicle, UpdateVehicleRequest


router = APIRouter(prefix="/admin", tags=["Admin"])

_ERRORS = {
    404: {"model": ErrorResponse, "description": "Vehicle or image not found"},
    422: {"model": ErrorResponse, "description": "Validation error"},
    500: {"model": ErrorResponse, "description": "Storage failure"},
}


@router.get("/vehicles", response_model=VehicleListResponseDTO, summary="List all vehicles")
def list_vehicles(
    use_case: ListVehicles = Depends(get_list_vehicles_use_case),
) -> VehicleListResponseDTO:
    return VehicleMapper.to_list_response(use_case.execute().vehicles)


@router.post(
    "/vehicles",
    response_model=VehicleResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create vehicle",
    description="""
    Multipart form with vehicle fields and 5 to 10 `images`
    (jpeg, jpg, png or webp, 5 MB max each).

    title (3+ characters) and price (> 0) are required.
    """,
    responses=_ERRORS,
)
def create_vehicle(
    form: VehicleFormDTO = Depends(VehicleFormDTO.as_form),
    images: list[UploadFile] = File(default=[]),
    use_case: CreateVehicle = Depends(get_create_vehicle_use_case),
) -> VehicleResponseDTO:
    request = CreateVehicleRequest(
        fields=VehicleMapper.to_fields(form),
        images=read_uploads(images),
    )
    result = use_case.execute(request)
    return VehicleMapper.to_vehicle_response(result.vehicle)


@router.put(
    "/vehicles/{vehicle_id}",
    response_model=VehicleResponseDTO,
    summary="Update vehicle",
    description="""
    Partial update: blank or absent fields keep their value.
    Up to 10 new `images` are appended to the existing ones.
    """,
    responses=_ERRORS,
)
def update_vehicle(
    vehicle_id: str,
    form: VehicleFormDTO = Depends(VehicleFormDTO.as_form),
    images: list[UploadFile] = File(default=[]),
    use_case: UpdateVehicle = Depends(get_update_vehicle_use_case),
) -> VehicleResponseDTO:
    request = UpdateVehicleRequest(
        vehicle_id=vehicle_id,
        fields=VehicleMapper.to_fields(form),
        images=read_uploads(images),
    )
    result = use_case.execute(request)
    return VehicleMapper.to_vehicle_response(result.vehicle)


@router.delete(
    "/vehicles/{vehicle_id}/images",
    response_model=VehicleResponseDTO,
    summary="Delete one vehicle image",
    responses=_ERRORS,
)
def delete_vehicle_image(
    vehicle_id: str,
    payload: DeleteImageRequestDTO | None = Body(default=None),
    use_case: DeleteVehicleImage = Depends(get_delete_vehicle_image_use_case),
) -> VehicleResponseDTO:
    request = DeleteVehicleImageRequest(
        vehicle_id=vehicle_id,
        image_ref=(payload.image_path if payload else None) or "",
    )
    result = use_case.execute(request)
    return VehicleMapper.to_vehicle_response(result.vehicle)


@router.delete(
    "/vehicles/{vehicle_id}",
    response_model=DeleteVehicleResponseDTO,
    summary="Delete vehicle",
    description="""
    Removes the vehicle and then each of its image files.
    A file that cannot be removed is reported in `failedImages`;
    it does not fail the request.
    """,
    responses=_ERRORS,
)
def delete_vehicle(
    vehicle_id: str,
    use_case: DeleteVehicle = Depends(get_delete_vehicle_use_case),
) -> DeleteVehicleResponseDTO:
    result = use_case.execute(DeleteVehicleRequest(vehicle_id=vehicle_id))
    return VehicleMapper.to_delete_response(result.deleted_id, result.cleanup)
