"""Pydantic schemas for API request/response and engine state."""

from movieseat.schemas.booking import Booking, BookingCreate
from movieseat.schemas.common import CancelResponse, ErrorResponse
from movieseat.schemas.program import Program, Showing, ShowingSeatsResponse
from movieseat.schemas.seat import Seat, SeatStatus

__all__ = [
    "Program",
    "Showing",
    "ShowingSeatsResponse",
    "Seat",
    "SeatStatus",
    "Booking",
    "BookingCreate",
    "CancelResponse",
    "ErrorResponse",
]
