"""Program and showing schemas."""

from datetime import datetime

from pydantic import Field

from movieseat.schemas.common import BaseSchema
from movieseat.schemas.seat import Seat


class Showing(BaseSchema):
    """A scheduled showing with its own seat list."""

    id: str
    time: datetime
    seats: list[Seat] = Field(default_factory=list)


class Program(BaseSchema):
    """A program (film) and its showings."""

    id: str
    title: str
    duration_minutes: int | None = None
    showings: list[Showing] = Field(default_factory=list)


class ShowingSeatsResponse(BaseSchema):
    """Seat layout of one showing."""

    title: str
    program_id: str
    showing_id: str
    time: datetime
    available_count: int
    booked_count: int
    seats: list[Seat]
