"""API dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from movieseat.services.booking_service import BookingService


def get_booking_service(request: Request) -> BookingService:
    """Get the booking service built at startup."""
    return request.app.state.booking_service


# Annotated dependencies
BookingServiceDep = Annotated[BookingService, Depends(get_booking_service)]
