"""Relational store backed by SQLAlchemy."""

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.orm import selectinload

from movieseat.config import Settings
from movieseat.database import create_session_factory
from movieseat.errors import PersistenceError
from movieseat.models import Base
from movieseat.models.booking import Booking as BookingModel
from movieseat.models.booking import BookingSeat
from movieseat.models.program import Program as ProgramModel
from movieseat.models.program import Showing as ShowingModel
from movieseat.models.seat import Seat as SeatModel
from movieseat.models.seat import SeatStatus as ModelSeatStatus
from movieseat.schemas.booking import Booking
from movieseat.schemas.program import Program, Showing
from movieseat.schemas.seat import Seat, SeatStatus
from movieseat.storage.base import BaseStore


class SqlStore(BaseStore):
    """
    Store keeping state in relational tables.

    Every save replaces the stored snapshot inside a single transaction,
    so readers never see a half-applied write.
    """

    name = "sql"

    def __init__(self, engine: AsyncEngine, settings: Settings | None = None):
        super().__init__(settings)
        self.engine = engine
        self.session_factory = create_session_factory(engine)

    async def create_tables(self) -> None:
        """Create tables that do not exist yet."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to create tables: {e}") from e

    async def load_catalog(self) -> list[Program]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(ProgramModel)
                    .options(selectinload(ProgramModel.showings).selectinload(ShowingModel.seats))
                    .order_by(ProgramModel.position)
                )
                return [self._to_program(row) for row in result.scalars().all()]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load catalog: {e}") from e

    async def save_catalog(self, programs: list[Program]) -> None:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    await session.execute(delete(SeatModel))
                    await session.execute(delete(ShowingModel))
                    await session.execute(delete(ProgramModel))
                    session.add_all(
                        [self._from_program(program, index) for index, program in enumerate(programs)]
                    )
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to save catalog: {e}") from e

    async def load_ledger(self) -> list[Booking]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(BookingModel)
                    .options(selectinload(BookingModel.booking_seats))
                    .order_by(BookingModel.position)
                )
                return [
                    Booking(
                        id=row.booking_id,
                        customer_name=row.customer_name,
                        program_id=row.program_id,
                        showing_id=row.showing_id,
                        seat_ids=[bs.seat_number for bs in row.booking_seats],
                        created_at=row.created_at,
                    )
                    for row in result.scalars().all()
                ]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load ledger: {e}") from e

    async def save_ledger(self, bookings: list[Booking]) -> None:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    await session.execute(delete(BookingSeat))
                    await session.execute(delete(BookingModel))
                    session.add_all(
                        [
                            BookingModel(
                                booking_id=booking.id,
                                customer_name=booking.customer_name,
                                program_id=booking.program_id,
                                showing_id=booking.showing_id,
                                position=index,
                                created_at=booking.created_at,
                                booking_seats=[
                                    BookingSeat(seat_number=seat_id, position=seat_index)
                                    for seat_index, seat_id in enumerate(booking.seat_ids)
                                ],
                            )
                            for index, booking in enumerate(bookings)
                        ]
                    )
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to save ledger: {e}") from e

    async def catalog_exists(self) -> bool:
        try:
            async with self.session_factory() as session:
                count = (await session.execute(select(func.count(ProgramModel.program_id)))).scalar()
                return bool(count)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to query catalog: {e}") from e

    async def ledger_exists(self) -> bool:
        # The bookings table exists once create_tables() ran; an empty table is a valid ledger.
        return True

    async def close(self) -> None:
        await self.engine.dispose()

    @staticmethod
    def _to_program(row: ProgramModel) -> Program:
        return Program(
            id=row.program_id,
            title=row.title,
            duration_minutes=row.duration_minutes,
            showings=[
                Showing(
                    id=showing.showing_id,
                    time=showing.starts_at,
                    seats=[
                        Seat(id=seat.seat_number, status=SeatStatus(seat.status.value))
                        for seat in showing.seats
                    ],
                )
                for showing in row.showings
            ],
        )

    @staticmethod
    def _from_program(program: Program, position: int) -> ProgramModel:
        return ProgramModel(
            program_id=program.id,
            title=program.title,
            duration_minutes=program.duration_minutes,
            position=position,
            showings=[
                ShowingModel(
                    showing_id=showing.id,
                    starts_at=showing.time,
                    position=showing_index,
                    seats=[
                        SeatModel(
                            seat_number=seat.id,
                            status=ModelSeatStatus(seat.status.value),
                            position=seat_index,
                        )
                        for seat_index, seat in enumerate(showing.seats)
                    ],
                )
                for showing_index, showing in enumerate(program.showings)
            ],
        )
