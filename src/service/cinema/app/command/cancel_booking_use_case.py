from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.domain.exception.booking_exceptions import BookingNotFoundError


class CancelBookingUseCase:
    """
    Cancel a booking and release its seats in the same transaction.

    Owners may cancel their own pending bookings; administrators may cancel any.
    Cancelling twice is a no-op.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, audit_logger: AuditLogger) -> None:
        self.uow = uow
        self.audit_logger = audit_logger
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        audit_logger: AuditLogger = Depends(Provide[Container.audit_logger]),
    ) -> Self:
        return cls(uow=uow, audit_logger=audit_logger)

    @Logger.io
    async def execute(self, *, booking_id: int, actor_id: int, is_admin: bool = False) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'booking.id': booking_id, 'actor.id': actor_id},
        ):
            async with self.uow:
                booking = await self.uow.booking_command_repo.get_by_id_for_update(
                    booking_id=booking_id
                )
                if not booking:
                    raise BookingNotFoundError(booking_id)

                booking.validate_cancellable_by(actor_id=actor_id, is_admin=is_admin)
                if booking.is_cancelled:
                    return booking

                cancelled = await self.uow.booking_command_repo.update_status(
                    booking=booking.cancel()
                )
                released = await self.uow.booking_command_repo.release_seats(
                    booking_id=booking_id
                )
                await self.uow.commit()

        metrics.record_seats_released(seat_count=released)
        Logger.base.info(f'🗑️ [CANCEL] {cancelled.reference}: released {released} seat(s)')
        await self.audit_logger.record(
            action=f'Cancelled booking {cancelled.reference}',
            category=LogCategory.ADMIN if is_admin else LogCategory.BOOKING,
            user_id=actor_id,
            details={'booking_id': booking_id, 'released_seats': released},
        )
        return cancelled
