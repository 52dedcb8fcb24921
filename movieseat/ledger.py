"""Reservation ledger holding the currently active bookings."""

from typing import Iterable

from movieseat.errors import BookingNotFoundError
from movieseat.schemas.booking import Booking


class ReservationLedger:
    """
    Insertion-ordered collection of active bookings.

    The ledger is the single source of truth for which bookings exist. It
    does not know about seat status; the booking service keeps the two in
    lockstep.
    """

    def __init__(self, bookings: Iterable[Booking] = ()):
        self._bookings: dict[str, Booking] = {}
        for booking in bookings:
            self.append(booking)

    def __len__(self) -> int:
        return len(self._bookings)

    def __contains__(self, booking_id: object) -> bool:
        return booking_id in self._bookings

    def append(self, booking: Booking) -> None:
        if booking.id in self._bookings:
            raise ValueError(f"Booking {booking.id} already in ledger")
        self._bookings[booking.id] = booking

    def find(self, booking_id: str) -> Booking:
        booking = self._bookings.get(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def position(self, booking_id: str) -> int:
        for index, current_id in enumerate(self._bookings):
            if current_id == booking_id:
                return index
        raise BookingNotFoundError(booking_id)

    def remove(self, booking_id: str) -> Booking:
        booking = self._bookings.pop(booking_id, None)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def reinstate(self, booking: Booking, position: int) -> None:
        """Put a removed booking back at its former position."""
        if booking.id in self._bookings:
            raise ValueError(f"Booking {booking.id} already in ledger")
        items = list(self._bookings.items())
        items.insert(position, (booking.id, booking))
        self._bookings = dict(items)

    def list_by_customer(self, customer: str | None = None) -> list[Booking]:
        """
        List bookings in insertion order.

        Args:
            customer: Case-insensitive substring of the customer name.
                Empty or None returns every booking.
        """
        if not customer:
            return list(self._bookings.values())
        needle = customer.lower()
        return [
            booking
            for booking in self._bookings.values()
            if needle in (booking.customer_name or "").lower()
        ]

    def for_showing(self, showing_id: str) -> list[Booking]:
        return [b for b in self._bookings.values() if b.showing_id == showing_id]

    def booked_seats(self, showing_id: str) -> set[str]:
        """Seat ids held by active bookings of a showing."""
        seats: set[str] = set()
        for booking in self.for_showing(showing_id):
            seats.update(booking.seat_ids)
        return seats

    def snapshot(self) -> list[Booking]:
        return list(self._bookings.values())
