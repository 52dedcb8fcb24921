"""Booking service: the seat reservation consistency engine."""

import asyncio
import logging
from collections import Counter
from typing import Iterable

from ulid import ULID

from movieseat.catalog import CatalogIndex
from movieseat.errors import (
    InvalidRequestError,
    PersistenceError,
    SeatsUnavailableError,
    ShowingNotFoundError,
)
from movieseat.ledger import ReservationLedger
from movieseat.locks import ShowingLocks
from movieseat.schemas.booking import Booking
from movieseat.schemas.program import Program, ShowingSeatsResponse
from movieseat.schemas.seat import SeatStatus
from movieseat.seat_map import SeatMap
from movieseat.storage.base import BaseStore

logger = logging.getLogger(__name__)


class BookingService:
    """
    Service for booking operations.

    The only component that mutates seat state or the ledger. Every
    create/cancel for a showing runs its check, mutation and persistence
    under that showing's lock, so calls for one showing are totally
    ordered and never act on stale availability.
    """

    def __init__(
        self,
        store: BaseStore,
        catalog: CatalogIndex,
        ledger: ReservationLedger,
        locks: ShowingLocks | None = None,
    ):
        self.store = store
        self.catalog = catalog
        self.ledger = ledger
        self.locks = locks or ShowingLocks()
        # Held from mutation through save (or rollback); one writer at a time.
        self._persist_lock = asyncio.Lock()

    @classmethod
    async def load(cls, store: BaseStore, lock_scope: str = "showing") -> "BookingService":
        """Build the service from the store's current durable state."""
        programs = await store.load_catalog()
        bookings = await store.load_ledger()
        logger.info(
            f"Loaded {len(programs)} program(s) and {len(bookings)} booking(s) "
            f"from {store.name} store"
        )
        return cls(store, CatalogIndex(programs), ReservationLedger(bookings), ShowingLocks(lock_scope))

    def _generate_booking_id(self) -> str:
        """Generate unique booking id using ULID."""
        return f"BK-{str(ULID())}"

    @staticmethod
    def _validate_request(customer_name: str, showing_id: str, seat_ids: list[str]) -> None:
        if not customer_name or not customer_name.strip():
            raise InvalidRequestError("customer_name is required")
        if not showing_id or not showing_id.strip():
            raise InvalidRequestError("showing_id is required")
        if not seat_ids:
            raise InvalidRequestError("At least one seat is required")
        if any(not isinstance(seat_id, str) or not seat_id for seat_id in seat_ids):
            raise InvalidRequestError("Seat ids must be non-empty strings")
        duplicates = [seat_id for seat_id, count in Counter(seat_ids).items() if count > 1]
        if duplicates:
            raise InvalidRequestError(f"Duplicate seats in request: {', '.join(duplicates)}")

    async def create_booking(
        self,
        customer_name: str,
        showing_id: str,
        seat_ids: Iterable[str],
    ) -> Booking:
        """
        Book seats for a customer.

        Args:
            customer_name: Name the booking is held under
            showing_id: Showing to book
            seat_ids: Seats to book, non-empty and without duplicates

        Returns:
            Created booking

        Raises:
            InvalidRequestError: If input is malformed
            ShowingNotFoundError: If the showing does not exist
            SeatsUnavailableError: If any seat is booked or unknown
            PersistenceError: If the new state could not be saved
        """
        if isinstance(seat_ids, str):
            raise InvalidRequestError("seat_ids must be a list of seat ids")
        seat_ids = list(seat_ids) if seat_ids is not None else []
        self._validate_request(customer_name, showing_id, seat_ids)

        program, showing = self.catalog.find_showing(showing_id)
        seat_map = self.catalog.seat_map(showing_id)

        async with self.locks.hold(showing_id):
            unavailable = seat_map.unavailable(seat_ids)
            if unavailable:
                unknown = seat_map.unknown(seat_ids)
                logger.warning(
                    f"Seats unavailable for showing {showing_id}: {unavailable}"
                    + (f" (unknown: {unknown})" if unknown else "")
                )
                raise SeatsUnavailableError(unavailable, unknown)

            booking = Booking(
                id=self._generate_booking_id(),
                customer_name=customer_name,
                program_id=program.id,
                showing_id=showing.id,
                seat_ids=seat_ids,
            )

            async with self._persist_lock:
                seat_map.transition(seat_ids, SeatStatus.BOOKED)
                self.ledger.append(booking)
                try:
                    await self._save()
                except PersistenceError:
                    self.ledger.remove(booking.id)
                    seat_map.transition(seat_ids, SeatStatus.AVAILABLE)
                    logger.error(f"Rolled back booking {booking.id} after failed save", exc_info=True)
                    raise

        logger.info(
            f"Created booking {booking.id} for {customer_name!r}: "
            f"showing {showing_id}, seats {seat_ids}"
        )
        return booking

    async def cancel_booking(self, booking_id: str) -> Booking:
        """
        Cancel a booking and release its seats.

        Seats whose showing or seat map entry no longer resolves are
        skipped with a warning; the booking is still removed.

        Returns:
            Removed booking

        Raises:
            InvalidRequestError: If booking id is empty
            BookingNotFoundError: If the booking is not in the ledger
            PersistenceError: If the new state could not be saved
        """
        if not booking_id:
            raise InvalidRequestError("booking_id is required")

        # Bookings are immutable, so the showing id read here stays valid.
        showing_id = self.ledger.find(booking_id).showing_id

        async with self.locks.hold(showing_id):
            async with self._persist_lock:
                # A concurrent cancel may have removed it while we waited.
                position = self.ledger.position(booking_id)
                booking = self.ledger.remove(booking_id)
                seat_map, previous = self._release_seats(booking)
                try:
                    await self._save()
                except PersistenceError:
                    self.ledger.reinstate(booking, position)
                    if seat_map is not None:
                        seat_map.restore(previous)
                    logger.error(f"Rolled back cancellation of {booking_id} after failed save", exc_info=True)
                    raise

        logger.info(f"Canceled booking {booking_id}: showing {showing_id}, seats {booking.seat_ids}")
        return booking

    def _release_seats(self, booking: Booking) -> tuple[SeatMap | None, dict[str, SeatStatus]]:
        """
        Mark a removed booking's seats available again.

        Returns:
            The seat map touched (None if the showing is gone) and the seat
            statuses before the release, for rollback
        """
        try:
            seat_map = self.catalog.seat_map(booking.showing_id)
        except ShowingNotFoundError:
            logger.warning(
                f"Showing {booking.showing_id} of booking {booking.id} no longer exists; "
                f"seat release skipped"
            )
            return None, {}

        previous = {
            seat_id: seat_map.status_of(seat_id)
            for seat_id in booking.seat_ids
            if seat_id in seat_map
        }
        skipped = seat_map.transition(booking.seat_ids, SeatStatus.AVAILABLE)
        if skipped:
            logger.warning(
                f"Seats {skipped} of booking {booking.id} not found in showing "
                f"{booking.showing_id}; release skipped for them"
            )
        return seat_map, previous

    async def _save(self) -> None:
        """
        Write the current catalog and ledger to the store.

        Callers must hold ``_persist_lock`` from their in-memory mutation
        until this returns or their rollback is done, so a snapshot never
        contains another operation's unsaved change.
        """
        programs = self.catalog.snapshot()
        bookings = self.ledger.snapshot()
        try:
            await self.store.save_catalog(programs)
            await self.store.save_ledger(bookings)
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to save state: {e}") from e

    def list_programs(self) -> list[Program]:
        """Get all programs with current seat states."""
        return self.catalog.list_programs()

    def get_showing_seats(self, showing_id: str) -> ShowingSeatsResponse:
        """Get the seat layout of a showing."""
        program, showing = self.catalog.find_showing(showing_id)
        counts = self.catalog.seat_map(showing_id).counts()
        return ShowingSeatsResponse(
            title=program.title,
            program_id=program.id,
            showing_id=showing.id,
            time=showing.time,
            available_count=counts[SeatStatus.AVAILABLE],
            booked_count=counts[SeatStatus.BOOKED],
            seats=[seat.model_copy() for seat in showing.seats],
        )

    def list_bookings(self, customer: str | None = None) -> list[Booking]:
        """List active bookings, optionally filtered by customer name."""
        return self.ledger.list_by_customer(customer)

    def get_booking(self, booking_id: str) -> Booking:
        """Get booking by ID."""
        return self.ledger.find(booking_id)

    async def reconcile(self) -> int:
        """
        Make seat statuses agree with the ledger.

        A seat is booked iff an active booking references it. Disagreeing
        seats are fixed in memory and the result is saved.

        Returns:
            Number of seats whose status was corrected
        """
        fixed = 0
        showing_ids = set(self.catalog.showing_ids())

        for booking in self.ledger.snapshot():
            if booking.showing_id not in showing_ids:
                logger.warning(
                    f"Booking {booking.id} references unknown showing {booking.showing_id}"
                )

        for showing_id in self.catalog.showing_ids():
            async with self.locks.hold(showing_id), self._persist_lock:
                seat_map = self.catalog.seat_map(showing_id)
                claims = Counter(
                    seat_id
                    for booking in self.ledger.for_showing(showing_id)
                    for seat_id in booking.seat_ids
                )
                double_booked = sorted(seat_id for seat_id, count in claims.items() if count > 1)
                if double_booked:
                    logger.error(f"Seats held by more than one booking in showing {showing_id}: {double_booked}")
                missing = sorted(seat_id for seat_id in claims if seat_id not in seat_map)
                if missing:
                    logger.warning(f"Bookings of showing {showing_id} reference unknown seats: {missing}")

                for seat_id in seat_map.seat_ids:
                    expected = SeatStatus.BOOKED if seat_id in claims else SeatStatus.AVAILABLE
                    actual = seat_map.status_of(seat_id)
                    if actual != expected:
                        logger.warning(
                            f"Seat {seat_id} of showing {showing_id} was {actual.value}, "
                            f"ledger says {expected.value}"
                        )
                        seat_map.transition([seat_id], expected)
                        fixed += 1

        if fixed:
            async with self._persist_lock:
                await self._save()
            logger.info(f"Reconciled {fixed} seat(s) with the ledger")
        return fixed
