"""Showings API endpoints."""

from fastapi import APIRouter

from movieseat.api.v1.dependencies import BookingServiceDep
from movieseat.schemas.common import ErrorResponse
from movieseat.schemas.program import ShowingSeatsResponse

router = APIRouter()


@router.get(
    "/{showing_id}/seats",
    response_model=ShowingSeatsResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get seats for showing",
)
async def get_showing_seats(
    showing_id: str,
    booking_service: BookingServiceDep,
) -> ShowingSeatsResponse:
    """Get the seat layout and availability of a showing."""
    return booking_service.get_showing_seats(showing_id)
