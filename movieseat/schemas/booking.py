"""Booking schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field

from movieseat.schemas.common import BaseSchema


class BookingCreate(BaseSchema):
    """Schema for creating a booking."""

    customer_name: str = Field(..., max_length=200)
    showing_id: str = Field(..., max_length=100)
    seat_ids: list[str]


class Booking(BaseSchema):
    """An active booking held in the ledger."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True, frozen=True)

    id: str
    customer_name: str
    program_id: str
    showing_id: str
    seat_ids: list[str]
    created_at: datetime = Field(default_factory=datetime.now)
