"""Services package."""

from movieseat.services.booking_service import BookingService

__all__ = [
    "BookingService",
]
