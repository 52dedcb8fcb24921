"""SQLAlchemy models."""

from movieseat.models.base import Base
from movieseat.models.booking import Booking, BookingSeat
from movieseat.models.program import Program, Showing
from movieseat.models.seat import Seat, SeatStatus

__all__ = [
    "Base",
    "Program",
    "Showing",
    "Seat",
    "SeatStatus",
    "Booking",
    "BookingSeat",
]
