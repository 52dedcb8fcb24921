"""Booking models."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movieseat.models.base import Base


class Booking(Base):
    """
    Booking model representing an active booking.

    Showing and program ids are plain columns: a booking stays cancelable
    even if its showing no longer resolves.
    """

    __tablename__ = "bookings"

    booking_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    program_id: Mapped[str] = mapped_column(String(50), nullable=False)
    showing_id: Mapped[str] = mapped_column(String(50), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # Relationships
    booking_seats: Mapped[list["BookingSeat"]] = relationship(
        "BookingSeat",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingSeat.position",
    )

    __table_args__ = (
        Index("idx_booking_showing", "showing_id"),
        Index("idx_booking_position", "position"),
    )


class BookingSeat(Base):
    """BookingSeat model representing seats in a booking."""

    __tablename__ = "booking_seats"

    booking_seat_id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    booking_id: Mapped[str] = mapped_column(
        String(50), ForeignKey("bookings.booking_id", ondelete="CASCADE"), nullable=False
    )
    seat_number: Mapped[str] = mapped_column(String(20), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    booking: Mapped["Booking"] = relationship("Booking", back_populates="booking_seats")

    __table_args__ = (
        UniqueConstraint("booking_id", "seat_number", name="uk_booking_seat"),
    )
