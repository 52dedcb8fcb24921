"""Seat schemas."""

from enum import Enum

from movieseat.schemas.common import BaseSchema


class SeatStatus(str, Enum):
    """Seat status enum."""

    AVAILABLE = "available"
    BOOKED = "booked"


class Seat(BaseSchema):
    """A single seat of a showing."""

    id: str
    status: SeatStatus = SeatStatus.AVAILABLE
