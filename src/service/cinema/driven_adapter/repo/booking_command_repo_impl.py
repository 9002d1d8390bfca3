"""
Booking Command Repository Implementation

Seat claims are one row each under a unique (showtime_id, seat_number) index,
so the store itself rejects a double booking that slips past the in-transaction check.
"""

import attrs
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.exception.booking_exceptions import (
    BookingReferenceCollisionError,
    SeatConflictError,
)
from src.service.cinema.driven_adapter.model.booking_model import BookingModel, SeatAssignmentModel
from src.service.cinema.driven_adapter.repo.model_mapper import booking_to_entity
from src.service.cinema.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


SEAT_UNIQUE_CONSTRAINT = 'uq_seat_assignment_showtime_seat'
REFERENCE_UNIQUE_CONSTRAINT = 'uq_booking_reference'


class BookingCommandRepoImpl(SessionScopedRepo, IBookingCommandRepo):
    @Logger.io
    async def create_with_seats(self, *, booking: Booking) -> Booking:
        async with self._get_session() as session:
            db_booking = BookingModel(
                reference=booking.reference,
                user_id=booking.user_id,
                showtime_id=booking.showtime_id,
                total_amount=booking.total_amount,
                status=booking.status.value,
                seat_count=booking.seat_count,
                payment_ref=booking.payment_ref,
                seats=[
                    SeatAssignmentModel(showtime_id=booking.showtime_id, seat_number=seat_id)
                    for seat_id in booking.seat_ids
                ],
            )

            try:
                async with session.begin_nested():
                    session.add(db_booking)
                    await session.flush()
            except IntegrityError as e:
                message = str(e.orig)
                if SEAT_UNIQUE_CONSTRAINT in message:
                    raise SeatConflictError(booking.seat_ids) from e
                if REFERENCE_UNIQUE_CONSTRAINT in message:
                    raise BookingReferenceCollisionError(booking.reference) from e
                raise

            await session.refresh(db_booking, attribute_names=['created_at', 'updated_at'])
            return attrs.evolve(
                booking,
                id=db_booking.id,
                created_at=db_booking.created_at,
                updated_at=db_booking.updated_at,
            )

    @Logger.io
    async def get_by_id_for_update(self, *, booking_id: int) -> Booking | None:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel)
                .where(BookingModel.id == booking_id)
                .with_for_update(of=BookingModel)
                .execution_options(populate_existing=True)
            )
            db_booking = result.scalar_one_or_none()
            if not db_booking:
                return None
            return booking_to_entity(db_booking)

    @Logger.io
    async def update_status(self, *, booking: Booking) -> Booking:
        async with self._get_session() as session:
            result = await session.execute(
                update(BookingModel)
                .where(BookingModel.id == booking.id)
                .values(
                    status=booking.status.value,
                    payment_ref=booking.payment_ref,
                    updated_at=func.now(),
                )
                .returning(BookingModel.updated_at)
            )
            updated_at = result.scalar_one()
            await self._save(session)
            return attrs.evolve(booking, updated_at=updated_at)

    @Logger.io
    async def release_seats(self, *, booking_id: int) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                delete(SeatAssignmentModel).where(SeatAssignmentModel.booking_id == booking_id)
            )
            await self._save(session)
            return result.rowcount or 0
