"""Program and showing models."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movieseat.models.base import Base

if TYPE_CHECKING:
    from movieseat.models.seat import Seat


class Program(Base):
    """Program model representing a film and its showings."""

    __tablename__ = "programs"

    program_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    duration_minutes: Mapped[int | None] = mapped_column(Integer)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    showings: Mapped[list["Showing"]] = relationship(
        "Showing",
        back_populates="program",
        cascade="all, delete-orphan",
        order_by="Showing.position",
    )


class Showing(Base):
    """Showing model representing one scheduled screening."""

    __tablename__ = "showings"

    showing_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    program_id: Mapped[str] = mapped_column(
        String(50), ForeignKey("programs.program_id", ondelete="CASCADE"), nullable=False
    )
    starts_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    program: Mapped["Program"] = relationship("Program", back_populates="showings")
    seats: Mapped[list["Seat"]] = relationship(
        "Seat",
        back_populates="showing",
        cascade="all, delete-orphan",
        order_by="Seat.position",
    )

    __table_args__ = (Index("idx_showing_program", "program_id"),)
