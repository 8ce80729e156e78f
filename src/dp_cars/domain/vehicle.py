from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from dp_cars.domain.errors import ValidationError


MIN_IMAGES_ON_CREATE = 5
MAX_IMAGES_PER_UPLOAD = 10
MIN_TITLE_LENGTH = 3
DEFAULT_VEHICLE_TYPE = "auto"


class VehicleStatus(str, Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    SOLD = "sold"


@dataclass(frozen=True, slots=True)
class Vehicle:
    id: int
    type: str
    title: str
    price: Decimal
    year: int = 0
    km: int = 0
    fuel: str = ""
    transmission: str = ""
    power: str = ""
    status: VehicleStatus = VehicleStatus.AVAILABLE
    images: tuple[str, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class VehicleFields:
    """
    Partial set of vehicle attributes supplied by a caller.

    None means "not supplied": on create the default applies, on update
    the existing value is kept.
    """

    type: str | None = None
    title: str | None = None
    price: Decimal | None = None
    year: int | None = None
    km: int | None = None
    fuel: str | None = None
    transmission: str | None = None
    power: str | None = None
    status: VehicleStatus | None = None

    def validate(self, *, creating: bool) -> None:
        """
        Validate supplied fields against catalog rules.

        Title and price are mandatory on creation; on update they are only
        checked when supplied.

        Raises:
            ValidationError: With one entry per offending field
        """
        errors: list[dict[str, str]] = []

        if self.title is not None or creating:
            if len((self.title or "").strip()) < MIN_TITLE_LENGTH:
                errors.append(
                    {
                        "field": "title",
                        "message": f"Must be at least {MIN_TITLE_LENGTH} characters",
                        "code": "TITLE_TOO_SHORT",
                    }
                )

        if self.price is not None or creating:
            if self.price is None or self.price <= 0:
                errors.append(
                    {
                        "field": "price",
                        "message": "Must be greater than 0",
                        "code": "INVALID_PRICE",
                    }
                )

        if errors:
            raise ValidationError(errors=errors)


def apply_fields(fields: VehicleFields) -> dict[str, Any]:
    """Attribute changes implied by merging the supplied `fields` into a vehicle."""
    changes: dict[str, Any] = {}
    if fields.type is not None and fields.type.strip():
        changes["type"] = fields.type.strip()
    if fields.title is not None:
        changes["title"] = fields.title.strip()
    for name in ("price", "year", "km", "fuel", "transmission", "power", "status"):
        value = getattr(fields, name)
        if value is not None:
            changes[name] = value
    return changes


# ==============================================================================
# Boundary parsing
# ==============================================================================
#
# Raw values arrive as strings (form fields, query parameters). Each helper
# documents the default it falls back to instead of relying on implicit
# coercion.


def parse_non_negative_int(value: Any, default: int = 0) -> int:
    """year, km: integer >= 0, `default` when blank, malformed or negative."""
    if value is None or isinstance(value, bool):
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        try:
            parsed = int(Decimal(str(value).strip()))
        except (InvalidOperation, ValueError, OverflowError):
            return default
    return parsed if parsed >= 0 else default


def parse_positive_int(value: Any, default: int) -> int:
    """page, limit: integer >= 1, `default` when blank, malformed or < 1."""
    if value is None or isinstance(value, bool):
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return default
    return parsed if parsed >= 1 else default


def parse_price(value: Any) -> Decimal:
    """price: Decimal, Decimal("0") when blank or malformed (rejected later by validation)."""
    if value is None:
        return Decimal("0")
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not parsed.is_finite():
        return Decimal("0")
    return parsed


def parse_status(value: str) -> VehicleStatus:
    """status: one of available/reserved/sold, anything else is rejected."""
    try:
        return VehicleStatus(value.strip().lower())
    except ValueError:
        raise ValidationError(
            errors=[
                {
                    "field": "status",
                    "message": "Must be one of: available, reserved, sold",
                    "code": "INVALID_STATUS",
                }
            ]
        )


@dataclass(frozen=True, slots=True)
class ImageUpload:
    """Raw image as received from a caller, before it becomes an asset."""

    filename: str
    content_type: str
    data: bytes = field(repr=False)
