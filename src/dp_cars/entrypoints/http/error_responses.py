"""Error bodies returned by the catalog and admin routes."""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """One offending form field, e.g. too few photos on create."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "images",
                "message": "At least 5 photos are required, got 3",
                "code": "NOT_ENOUGH_IMAGES",
            }
        }
    )


class ErrorResponse(BaseModel):
    """
    `{detail, code, errors?}` for every 4xx/5xx.

    `errors` is only present for VALIDATION_ERROR. STORAGE_ERROR always
    carries the same generic detail; the cause stays in the server log.
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Vehicle with identifier '7' not found", "code": "NOT_FOUND"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "images",
                            "message": "At least 5 photos are required, got 3",
                            "code": "NOT_ENOUGH_IMAGES",
                        },
                        {
                            "field": "price",
                            "message": "Must be greater than 0",
                            "code": "INVALID_PRICE",
                        },
                    ],
                },
                {"detail": "A storage error occurred", "code": "STORAGE_ERROR"},
            ]
        }
    )
