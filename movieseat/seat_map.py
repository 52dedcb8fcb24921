"""Per-showing seat availability map."""

from typing import Iterable

from movieseat.errors import SeatNotFoundError
from movieseat.schemas.seat import Seat, SeatStatus


class SeatMap:
    """
    Fixed set of seats for one showing.

    Wraps the showing's own ``Seat`` objects, so a transition here is
    visible in the catalog the showing belongs to. The set of seat ids is
    fixed at construction; only statuses change.
    """

    def __init__(self, seats: Iterable[Seat]):
        self._seats: dict[str, Seat] = {}
        for seat in seats:
            if seat.id in self._seats:
                raise ValueError(f"Duplicate seat id in seat map: {seat.id}")
            self._seats[seat.id] = seat

    def __len__(self) -> int:
        return len(self._seats)

    def __contains__(self, seat_id: object) -> bool:
        return seat_id in self._seats

    @property
    def seat_ids(self) -> list[str]:
        return list(self._seats)

    def status_of(self, seat_id: str) -> SeatStatus:
        seat = self._seats.get(seat_id)
        if seat is None:
            raise SeatNotFoundError([seat_id])
        return seat.status

    def seats_status(self, seat_ids: Iterable[str]) -> dict[str, SeatStatus]:
        """
        Get the status of each given seat.

        Raises:
            SeatNotFoundError: If any seat id is absent from the map
        """
        seat_ids = list(seat_ids)
        missing = self.unknown(seat_ids)
        if missing:
            raise SeatNotFoundError(missing)
        return {seat_id: self._seats[seat_id].status for seat_id in seat_ids}

    def are_all_available(self, seat_ids: Iterable[str]) -> bool:
        """True iff every seat exists and is available."""
        return not self.unavailable(seat_ids)

    def unknown(self, seat_ids: Iterable[str]) -> list[str]:
        """Seat ids not present in the map, in request order."""
        return [seat_id for seat_id in seat_ids if seat_id not in self._seats]

    def unavailable(self, seat_ids: Iterable[str]) -> list[str]:
        """Seat ids that cannot be booked right now, unknown ids included."""
        result = []
        for seat_id in seat_ids:
            seat = self._seats.get(seat_id)
            if seat is None or seat.status != SeatStatus.AVAILABLE:
                result.append(seat_id)
        return result

    def transition(self, seat_ids: Iterable[str], new_status: SeatStatus) -> list[str]:
        """
        Set the status of the given seats.

        This is the mutation primitive: preconditions must already have been
        checked by the caller. Unknown seat ids are skipped.

        Returns:
            Seat ids that were skipped because they are not in the map
        """
        skipped = []
        for seat_id in seat_ids:
            seat = self._seats.get(seat_id)
            if seat is None:
                skipped.append(seat_id)
                continue
            seat.status = new_status
        return skipped

    def restore(self, statuses: dict[str, SeatStatus]) -> None:
        """Put seats back to previously captured statuses."""
        for seat_id, status in statuses.items():
            self.transition([seat_id], status)

    def counts(self) -> dict[SeatStatus, int]:
        """Number of seats in each status."""
        result = {status: 0 for status in SeatStatus}
        for seat in self._seats.values():
            result[seat.status] += 1
        return result
