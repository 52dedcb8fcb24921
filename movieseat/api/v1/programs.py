"""Programs API endpoints."""

from fastapi import APIRouter

from movieseat.api.v1.dependencies import BookingServiceDep
from movieseat.schemas.program import Program

router = APIRouter()


@router.get(
    "",
    response_model=list[Program],
    summary="List programs",
)
async def list_programs(
    booking_service: BookingServiceDep,
) -> list[Program]:
    """List programs with their showings and current seat states."""
    return booking_service.list_programs()
