"""Catalog index resolving showings to their program and seat map."""

from movieseat.errors import ShowingNotFoundError
from movieseat.schemas.program import Program, Showing
from movieseat.seat_map import SeatMap


class CatalogIndex:
    """
    Read path over the seeded programs.

    Programs and showings are read-only once loaded. The seat maps share
    the showings' seat objects, so status changes made through a seat map
    are reflected in ``snapshot()``.
    """

    def __init__(self, programs: list[Program]):
        self._programs = programs
        self._showings: dict[str, tuple[Program, Showing]] = {}
        self._seat_maps: dict[str, SeatMap] = {}

        for program in programs:
            for showing in program.showings:
                if showing.id in self._showings:
                    raise ValueError(f"Duplicate showing id in catalog: {showing.id}")
                self._showings[showing.id] = (program, showing)
                self._seat_maps[showing.id] = SeatMap(showing.seats)

    def find_showing(self, showing_id: str) -> tuple[Program, Showing]:
        """
        Resolve a showing id.

        Raises:
            ShowingNotFoundError: If the showing is not in the catalog
        """
        entry = self._showings.get(showing_id)
        if entry is None:
            raise ShowingNotFoundError(showing_id)
        return entry

    def seat_map(self, showing_id: str) -> SeatMap:
        seat_map = self._seat_maps.get(showing_id)
        if seat_map is None:
            raise ShowingNotFoundError(showing_id)
        return seat_map

    def showing_ids(self) -> list[str]:
        return list(self._showings)

    def list_programs(self) -> list[Program]:
        """Get a copy of all programs with current seat states."""
        return self.snapshot()

    def snapshot(self) -> list[Program]:
        """Deep copy of the catalog, safe to hand to a store or a caller."""
        return [program.model_copy(deep=True) for program in self._programs]
