from datetime import datetime

from fastapi import Form
from pydantic import BaseModel, ConfigDict, Field


class VehicleResponseDTO(BaseModel):
    id: int
    type: str
    title: str
    price: str
    year: int
    km: int
    fuel: str
    transmission: str
    power: str
    status: str
    images: list[str]
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)


class VehicleSearchQueryDTO(BaseModel):
    """
    Query parameters for searching the catalog.

    Kept as raw strings: malformed values fall back to defaults in the
    mapper instead of failing the request.
    """

    type: str = Field(
        default="all",
        description="Vehicle category, exact match ('all' disables the filter)",
        examples=["auto"],
    )
    search: str = Field(
        default="",
        description="Case-insensitive substring of title, fuel or transmission",
        examples=["panda"],
    )
    sort: str = Field(
        default="price-asc",
        description="One of price-asc, price-desc, year-desc, km-asc, km-desc",
        examples=["price-desc"],
    )
    page: str | None = Field(default=None, description="1-based page number", examples=["1"])
    limit: str | None = Field(default=None, description="Page size", examples=["6"])


class CatalogSearchResponseDTO(BaseModel):
    data: list[VehicleResponseDTO]
    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")

    model_config = ConfigDict(populate_by_name=True)


class VehicleListResponseDTO(BaseModel):
    data: list[VehicleResponseDTO]
    count: int


class VehicleFormDTO(BaseModel):
    """Multipart form fields for create/update. Blank means 'not supplied'."""

    type: str | None = None
    title: str | None = None
    price: str | None = None
    year: str | None = None
    km: str | None = None
    fuel: str | None = None
    transmission: str | None = None
    power: str | None = None
    status: str | None = None

    @classmethod
    def as_form(
        cls,
        type: str | None = Form(default=None),
        title: str | None = Form(default=None),
        price: str | None = Form(default=None),
        year: str | None = Form(default=None),
        km: str | None = Form(default=None),
        fuel: str | None = Form(default=None),
        transmission: str | None = Form(default=None),
        power: str | None = Form(default=None),
        status: str | None = Form(default=None),
    ) -> "VehicleFormDTO":
        return cls(
            type=type,
            title=title,
            price=price,
            year=year,
            km=km,
            fuel=fuel,
            transmission=transmission,
            power=power,
            status=status,
        )


class DeleteImageRequestDTO(BaseModel):
    image_path: str | None = Field(default=None, alias="imagePath", examples=["/uploads/1700000000000-front.jpg"])

    model_config = ConfigDict(populate_by_name=True)


class FailedImageDTO(BaseModel):
    image_path: str = Field(alias="imagePath")
    reason: str

    model_config = ConfigDict(populate_by_name=True)


class DeleteVehicleResponseDTO(BaseModel):
    deleted_id: int = Field(alias="deletedId")
    removed_images: list[str] = Field(alias="removedImages")
    missing_images: list[str] = Field(alias="missingImages")
    failed_images: list[FailedImageDTO] = Field(alias="failedImages")

    model_config = ConfigDict(populate_by_name=True)
