from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.db_setting import Base


class BookingModel(Base):
    __tablename__ = 'booking'
    __table_args__ = (UniqueConstraint('reference', name='uq_booking_reference'),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reference: Mapped[str] = mapped_column(String(20), nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('user.id', ondelete='RESTRICT'), nullable=False, index=True
    )
    # RESTRICT: a showtime cannot disappear while any booking references it
    showtime_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('showtime.id', ondelete='RESTRICT'), nullable=False, index=True
    )
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False, index=True)
    # Survives cancellation, which releases the seat_assignment rows
    seat_count: Mapped[int] = mapped_column(Integer, default=0, server_default='0', nullable=False)
    payment_ref: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    seats: Mapped[List['SeatAssignmentModel']] = relationship(
        'SeatAssignmentModel',
        lazy='selectin',
        order_by='SeatAssignmentModel.id',
        cascade='all, delete-orphan',
        passive_deletes=True,
    )


class SeatAssignmentModel(Base):
    """One row per claimed seat so the store enforces seat uniqueness per showtime."""

    __tablename__ = 'seat_assignment'
    __table_args__ = (
        UniqueConstraint('showtime_id', 'seat_number', name='uq_seat_assignment_showtime_seat'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('booking.id', ondelete='CASCADE'), nullable=False, index=True
    )
    showtime_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('showtime.id', ondelete='RESTRICT'), nullable=False
    )
    seat_number: Mapped[str] = mapped_column(String(10), nullable=False)
