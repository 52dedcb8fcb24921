"""Seat model."""

import enum
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movieseat.models.base import Base

if TYPE_CHECKING:
    from movieseat.models.program import Showing


class SeatStatus(str, enum.Enum):
    """Seat status enum."""

    AVAILABLE = "available"
    BOOKED = "booked"


class Seat(Base):
    """Seat model representing a seat of a showing."""

    __tablename__ = "seats"

    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    showing_id: Mapped[str] = mapped_column(
        String(50), ForeignKey("showings.showing_id", ondelete="CASCADE"), nullable=False
    )
    seat_number: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[SeatStatus] = mapped_column(Enum(SeatStatus), default=SeatStatus.AVAILABLE)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    showing: Mapped["Showing"] = relationship("Showing", back_populates="seats")

    __table_args__ = (
        UniqueConstraint("showing_id", "seat_number", name="uk_showing_seat"),
    )
