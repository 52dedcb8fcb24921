"""
Unit tests for the reservation ledger and catalog index
"""

import pytest

from movieseat.catalog import CatalogIndex
from movieseat.errors import BookingNotFoundError, ShowingNotFoundError
from movieseat.ledger import ReservationLedger
from movieseat.schemas.booking import Booking
from movieseat.schemas.seat import SeatStatus
from movieseat.storage.seed import default_catalog


def make_booking(booking_id: str, customer: str, seats: list[str], showing_id: str = "s1") -> Booking:
    return Booking(
        id=booking_id,
        customer_name=customer,
        program_id="m1",
        showing_id=showing_id,
        seat_ids=seats,
    )


@pytest.fixture
def ledger() -> ReservationLedger:
    return ReservationLedger(
        [
            make_booking("b1", "Alice Smith", ["A1"]),
            make_booking("b2", "Bob", ["A2", "A3"]),
            make_booking("b3", "alice cooper", ["A4"], showing_id="s2"),
        ]
    )


@pytest.mark.unit
class TestReservationLedger:
    """Test ledger bookkeeping"""

    def test_list_all_in_insertion_order(self, ledger: ReservationLedger):
        assert [b.id for b in ledger.list_by_customer()] == ["b1", "b2", "b3"]
        assert [b.id for b in ledger.list_by_customer("")] == ["b1", "b2", "b3"]

    def test_filter_is_case_insensitive_substring(self, ledger: ReservationLedger):
        assert [b.id for b in ledger.list_by_customer("ALICE")] == ["b1", "b3"]
        assert [b.id for b in ledger.list_by_customer("ob")] == ["b2"]
        assert ledger.list_by_customer("nobody") == []

    def test_append_duplicate_rejected(self, ledger: ReservationLedger):
        with pytest.raises(ValueError):
            ledger.append(make_booking("b1", "Eve", ["A9"]))

    def test_find_and_remove(self, ledger: ReservationLedger):
        assert ledger.find("b2").customer_name == "Bob"
        removed = ledger.remove("b2")
        assert removed.id == "b2"
        assert "b2" not in ledger
        with pytest.raises(BookingNotFoundError):
            ledger.find("b2")
        with pytest.raises(BookingNotFoundError):
            ledger.remove("b2")

    def test_reinstate_keeps_position(self, ledger: ReservationLedger):
        position = ledger.position("b2")
        booking = ledger.remove("b2")
        ledger.reinstate(booking, position)
        assert [b.id for b in ledger.snapshot()] == ["b1", "b2", "b3"]

    def test_booked_seats_per_showing(self, ledger: ReservationLedger):
        assert ledger.booked_seats("s1") == {"A1", "A2", "A3"}
        assert ledger.booked_seats("s2") == {"A4"}
        assert ledger.booked_seats("s9") == set()


@pytest.mark.unit
class TestCatalogIndex:
    """Test showing resolution"""

    def test_find_showing(self, settings):
        catalog = CatalogIndex(default_catalog(settings))
        program, showing = catalog.find_showing("s1")
        assert program.id == "m1"
        assert program.title == "Avengers: Endgame"
        assert showing.id == "s1"
        assert len(catalog.seat_map("s1")) == 36

    def test_unknown_showing(self, settings):
        catalog = CatalogIndex(default_catalog(settings))
        with pytest.raises(ShowingNotFoundError):
            catalog.find_showing("nope")
        with pytest.raises(ShowingNotFoundError):
            catalog.seat_map("nope")

    def test_snapshot_is_detached(self, settings):
        catalog = CatalogIndex(default_catalog(settings))
        snapshot = catalog.snapshot()
        catalog.seat_map("s1").transition(["A1"], SeatStatus.BOOKED)
        assert snapshot[0].showings[0].seats[0].status == SeatStatus.AVAILABLE
        assert catalog.snapshot()[0].showings[0].seats[0].status == SeatStatus.BOOKED
