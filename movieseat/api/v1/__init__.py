"""API v1 routers package."""

from movieseat.api.v1.bookings import router as bookings_router
from movieseat.api.v1.programs import router as programs_router
from movieseat.api.v1.showings import router as showings_router

__all__ = [
    "programs_router",
    "showings_router",
    "bookings_router",
]
