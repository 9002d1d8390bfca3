from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.domain.exception.booking_exceptions import BookingNotFoundError


class UpdateBookingStatusUseCase:
    """
    Admin status correction.

    Setting `cancelled` goes through CancelBookingUseCase so seats are released.
    A cancelled booking cannot be moved back to another status.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        cancel_booking: CancelBookingUseCase,
        audit_logger: AuditLogger,
    ) -> None:
        self.uow = uow
        self.cancel_booking = cancel_booking
        self.audit_logger = audit_logger

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        cancel_booking: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
        audit_logger: AuditLogger = Depends(Provide[Container.audit_logger]),
    ) -> Self:
        return cls(uow=uow, cancel_booking=cancel_booking, audit_logger=audit_logger)

    @Logger.io
    async def execute(self, *, booking_id: int, status: BookingStatus, admin_id: int) -> Booking:
        if status == BookingStatus.CANCELLED:
            return await self.cancel_booking.execute(
                booking_id=booking_id, actor_id=admin_id, is_admin=True
            )

        async with self.uow:
            booking = await self.uow.booking_command_repo.get_by_id_for_update(
                booking_id=booking_id
            )
            if not booking:
                raise BookingNotFoundError(booking_id)

            updated = booking.change_status(status)
            if updated is booking:
                return booking
            updated = await self.uow.booking_command_repo.update_status(booking=updated)
            await self.uow.commit()

        await self.audit_logger.record(
            action=f'Updated booking {updated.reference} status',
            category=LogCategory.ADMIN,
            user_id=admin_id,
            details={'booking_id': booking_id, 'from': booking.status.value, 'to': status.value},
        )
        return updated
