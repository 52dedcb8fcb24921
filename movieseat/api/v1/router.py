"""API v1 main router."""

from fastapi import APIRouter

from movieseat.api.v1.bookings import router as bookings_router
from movieseat.api.v1.programs import router as programs_router
from movieseat.api.v1.showings import router as showings_router

router = APIRouter(prefix="/v1")

router.include_router(programs_router, prefix="/programs", tags=["Programs"])
router.include_router(showings_router, prefix="/showings", tags=["Showings"])
router.include_router(bookings_router, prefix="/bookings", tags=["Bookings"])
