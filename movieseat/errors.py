"""Booking engine errors."""


class BookingError(Exception):
    """Base class for errors surfaced by the booking engine."""

    error_code = "booking_error"
    status_code = 500

    def __init__(self, message: str | None = None):
        self.message = message or self.error_code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.error_code, "detail": self.message}


class InvalidRequestError(BookingError):
    """Malformed caller input."""

    error_code = "invalid_request"
    status_code = 400


class ShowingNotFoundError(BookingError):
    """Showing id does not resolve in the catalog."""

    error_code = "showing_not_found"
    status_code = 404

    def __init__(self, showing_id: str):
        self.showing_id = showing_id
        super().__init__(f"Showing {showing_id} not found")


class BookingNotFoundError(BookingError):
    """Booking id is not in the ledger."""

    error_code = "booking_not_found"
    status_code = 404

    def __init__(self, booking_id: str):
        self.booking_id = booking_id
        super().__init__(f"Booking {booking_id} not found")


class SeatNotFoundError(BookingError):
    """One or more seat ids are absent from a seat map."""

    error_code = "seat_not_found"
    status_code = 404

    def __init__(self, seat_ids: list[str]):
        self.seat_ids = list(seat_ids)
        super().__init__(f"Seats not found: {', '.join(self.seat_ids)}")


class SeatsUnavailableError(BookingError):
    """
    Requested seats cannot be booked.

    ``seats`` holds every requested seat that is not available, unknown
    seat ids included. ``unknown`` holds the subset that does not exist in
    the showing at all.
    """

    error_code = "seats_unavailable"
    status_code = 409

    def __init__(self, seats: list[str], unknown: list[str] | None = None):
        self.seats = list(seats)
        self.unknown = list(unknown or [])
        super().__init__(f"Seats not available: {', '.join(self.seats)}")

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["seats"] = self.seats
        data["unknown_seats"] = self.unknown
        return data


class PersistenceError(BookingError):
    """Durable store I/O failed."""

    error_code = "persistence_failure"
    status_code = 503
