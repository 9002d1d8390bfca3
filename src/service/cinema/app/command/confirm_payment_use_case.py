from typing import Optional, Self

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


class ConfirmPaymentUseCase:
    """
    Transition a pending booking to completed with its payment reference.

    Idempotent: confirming an already-completed booking changes nothing, so a
    repeated provider callback is harmless.
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
    async def execute(
        self, *, booking_id: int, payment_ref: str, user_id: Optional[int] = None
    ) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.confirm_payment', attributes={'booking.id': booking_id}
        ):
            async with self.uow:
                booking = await self.uow.booking_command_repo.get_by_id_for_update(
                    booking_id=booking_id
                )
                if not booking:
                    raise BookingNotFoundError(booking_id)
                if user_id is not None:
                    booking.validate_owned_by(user_id)

                confirmed = booking.confirm(payment_ref=payment_ref)
                if confirmed is booking:
                    metrics.record_payment_confirmation(result='duplicate')
                    Logger.base.info(f'🔁 [CONFIRM] {booking.reference} already completed')
                    return booking

                confirmed = await self.uow.booking_command_repo.update_status(booking=confirmed)
                await self.uow.commit()

        metrics.record_payment_confirmation(result='confirmed')
        Logger.base.info(f'💳 [CONFIRM] {confirmed.reference} completed ({payment_ref})')
        await self.audit_logger.record(
            action=f'Payment confirmed for booking {confirmed.reference}',
            category=LogCategory.PAYMENT,
            user_id=confirmed.user_id,
            details={
                'booking_id': confirmed.id,
                'payment_ref': payment_ref,
                'amount': str(confirmed.total_amount),
            },
        )
        return confirmed
