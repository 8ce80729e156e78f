from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_serializer

from dp_cars.domain.vehicle import DEFAULT_VEHICLE_TYPE, VehicleStatus


class VehicleDocumentRow(BaseModel):
    """
    One record of the vehicles JSON document.

    Keys are camelCase, as served on the wire. Fields missing from older
    documents fall back to their defaults.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    type: str = DEFAULT_VEHICLE_TYPE
    title: str = ""
    price: Decimal = Decimal("0")
    year: int = 0
    km: int = 0
    fuel: str = ""
    transmission: str = ""
    power: str = ""
    status: VehicleStatus = VehicleStatus.AVAILABLE
    images: list[str] = Field(default_factory=list)
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @field_serializer("price", when_used="json")
    def serialize_price(self, price: Decimal) -> int | float:
        # Stored as a JSON number, not a string
        return int(price) if price == price.to_integral_value() else float(price)


VehicleDocument = TypeAdapter(list[VehicleDocumentRow])
