"""Bookings API endpoints."""

from fastapi import APIRouter, Query, status

from movieseat.api.v1.dependencies import BookingServiceDep
from movieseat.schemas.booking import Booking, BookingCreate
from movieseat.schemas.common import CancelResponse, ErrorResponse

router = APIRouter()


@router.post(
    "",
    response_model=Booking,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Create booking",
)
async def create_booking(
    booking_data: BookingCreate,
    booking_service: BookingServiceDep,
) -> Booking:
    """
    Book seats for a showing.

    All requested seats are booked together or none are. A conflict
    returns 409 with the seats that could not be booked.
    """
    return await booking_service.create_booking(
        customer_name=booking_data.customer_name,
        showing_id=booking_data.showing_id,
        seat_ids=booking_data.seat_ids,
    )


@router.get(
    "",
    response_model=list[Booking],
    summary="List bookings",
)
async def list_bookings(
    booking_service: BookingServiceDep,
    customer: str | None = Query(None, description="Case-insensitive customer name filter"),
) -> list[Booking]:
    """List active bookings in creation order."""
    return booking_service.list_bookings(customer)


@router.get(
    "/{booking_id}",
    response_model=Booking,
    responses={404: {"model": ErrorResponse}},
    summary="Get booking",
)
async def get_booking(
    booking_id: str,
    booking_service: BookingServiceDep,
) -> Booking:
    """Get booking details."""
    return booking_service.get_booking(booking_id)


@router.delete(
    "/{booking_id}",
    response_model=CancelResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Cancel booking",
)
async def cancel_booking(
    booking_id: str,
    booking_service: BookingServiceDep,
) -> CancelResponse:
    """Cancel a booking and release its seats."""
    booking = await booking_service.cancel_booking(booking_id)
    return CancelResponse(id=booking.id)
