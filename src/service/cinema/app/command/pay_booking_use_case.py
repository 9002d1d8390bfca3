from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.cinema.app.command.confirm_payment_use_case import ConfirmPaymentUseCase
from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema.app.interface.i_payment_gateway import IPaymentGateway
from src.service.cinema.app.interface.i_showtime_query_repo import IShowtimeQueryRepo
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.domain.exception.booking_exceptions import (
    BookingNotFoundError,
    PaymentFailedError,
    ShowtimeNotFoundError,
)
from src.service.cinema.domain.value_object.pricing import PriceQuote


class PayBookingUseCase:
    """
    Second half of the two-step flow: charge a pending booking, then confirm it.

    The stored total is re-verified against the current showtime price before the
    card is charged. The charge is keyed by the booking reference, so two confirms
    racing for one booking share a single charge and the later confirmPayment is a
    no-op with the same payment ref.
    """

    def __init__(
        self,
        *,
        booking_query_repo: IBookingQueryRepo,
        showtime_query_repo: IShowtimeQueryRepo,
        payment_gateway: IPaymentGateway,
        confirm_payment: ConfirmPaymentUseCase,
        audit_logger: AuditLogger,
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.showtime_query_repo = showtime_query_repo
        self.payment_gateway = payment_gateway
        self.confirm_payment = confirm_payment
        self.audit_logger = audit_logger

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        showtime_query_repo: IShowtimeQueryRepo = Depends(
            Provide[Container.showtime_query_repo]
        ),
        payment_gateway: IPaymentGateway = Depends(Provide[Container.payment_gateway]),
        confirm_payment: ConfirmPaymentUseCase = Depends(ConfirmPaymentUseCase.depends),
        audit_logger: AuditLogger = Depends(Provide[Container.audit_logger]),
    ) -> Self:
        return cls(
            booking_query_repo=booking_query_repo,
            showtime_query_repo=showtime_query_repo,
            payment_gateway=payment_gateway,
            confirm_payment=confirm_payment,
            audit_logger=audit_logger,
        )

    @Logger.io
    async def execute(self, *, booking_id: int, user_id: int, payment_token: str) -> Booking:
        booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise BookingNotFoundError(booking_id)
        booking.validate_owned_by(user_id)

        if booking.is_completed:
            return booking
        if booking.is_cancelled:
            raise DomainError('Cannot pay for a cancelled booking')

        detail = await self.showtime_query_repo.get_detail(showtime_id=booking.showtime_id)
        if not detail:
            raise ShowtimeNotFoundError(booking.showtime_id)
        expected = PriceQuote.quote_total(
            seat_count=len(booking.seat_ids),
            price=detail.showtime.price,
            booking_fee=settings.BOOKING_FEE,
        )
        PriceQuote.verify(
            quoted=booking.total_amount, expected=expected, tolerance=settings.PRICE_TOLERANCE
        )

        result = await self.payment_gateway.charge(
            token=payment_token,
            amount=booking.total_amount,
            currency=settings.PAYMENT_CURRENCY,
            metadata={'booking_reference': booking.reference, 'user_id': user_id},
            idempotency_key=f'booking-{booking.reference}',
        )
        if not result.success:
            metrics.record_payment(result='declined')
            await self.audit_logger.record(
                action=f'Payment failed for booking {booking.reference}',
                category=LogCategory.PAYMENT,
                user_id=user_id,
                details={'reason': result.reason, 'amount': str(booking.total_amount)},
            )
            raise PaymentFailedError(result.reason or 'declined')

        metrics.record_payment(result='succeeded')
        await self.audit_logger.record(
            action='Payment gateway response',
            category=LogCategory.API,
            user_id=user_id,
            details=result.raw,
        )
        return await self.confirm_payment.execute(
            booking_id=booking_id, payment_ref=result.reference or '', user_id=user_id
        )
