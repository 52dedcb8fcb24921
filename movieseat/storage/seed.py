"""Default catalog written on first startup."""

from datetime import datetime

from movieseat.config import Settings
from movieseat.schemas.program import Program, Showing
from movieseat.schemas.seat import Seat, SeatStatus

DEFAULT_PROGRAM_ID = "m1"
DEFAULT_SHOWING_ID = "s1"


def build_seats(count: int, row: str = "A") -> list[Seat]:
    """Create ``count`` available seats named ``<row>1`` .. ``<row><count>``."""
    return [Seat(id=f"{row}{number}", status=SeatStatus.AVAILABLE) for number in range(1, count + 1)]


def default_catalog(settings: Settings) -> list[Program]:
    return [
        Program(
            id=DEFAULT_PROGRAM_ID,
            title=settings.SEED_PROGRAM_TITLE,
            duration_minutes=settings.SEED_DURATION_MINUTES,
            showings=[
                Showing(
                    id=DEFAULT_SHOWING_ID,
                    time=datetime.now(),
                    seats=build_seats(settings.SEED_SEAT_COUNT, settings.SEED_SEAT_ROW),
                )
            ],
        )
    ]
