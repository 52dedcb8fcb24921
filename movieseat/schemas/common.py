"""Common schema utilities."""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class ErrorResponse(BaseModel):
    """Error response schema."""

    error: str
    detail: str | None = None
    seats: list[str] | None = None
    unknown_seats: list[str] | None = None


class CancelResponse(BaseModel):
    """Response for a canceled booking."""

    id: str
    message: str = "canceled"
