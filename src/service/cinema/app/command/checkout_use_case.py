from datetime import datetime
from decimal import Decimal
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.cinema.app.command.reserve_seats_use_case import ReserveSeatsUseCase
from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema.app.interface.i_payment_gateway import IPaymentGateway
from src.service.cinema.app.interface.i_showtime_query_repo import IShowtimeQueryRepo
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.domain.exception.booking_exceptions import (
    PaymentFailedError,
    SeatConflictError,
    ShowtimeNotBookableError,
    ShowtimeNotFoundError,
)
from src.service.cinema.domain.value_object.pricing import PriceQuote


class CheckoutUseCase:
    """
    One-shot checkout: pre-check, charge, then reserve as completed.

    Flow:
    1. Load showtime, validate seats, fast-fail on claimed seats, verify the quoted total
    2. Charge the payment gateway (decline -> PaymentFailedError)
    3. Reserve seats with status completed and the charge reference

    A reservation that fails after a successful charge is logged and audited under
    `error` with the charge reference for manual reconciliation. No refund is issued
    here; the original error is re-raised to the client.
    """

    def __init__(
        self,
        *,
        showtime_query_repo: IShowtimeQueryRepo,
        booking_query_repo: IBookingQueryRepo,
        payment_gateway: IPaymentGateway,
        reserve_seats: ReserveSeatsUseCase,
        audit_logger: AuditLogger,
    ) -> None:
        self.showtime_query_repo = showtime_query_repo
        self.booking_query_repo = booking_query_repo
        self.payment_gateway = payment_gateway
        self.reserve_seats = reserve_seats
        self.audit_logger = audit_logger
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        showtime_query_repo: IShowtimeQueryRepo = Depends(
            Provide[Container.showtime_query_repo]
        ),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        payment_gateway: IPaymentGateway = Depends(Provide[Container.payment_gateway]),
        reserve_seats: ReserveSeatsUseCase = Depends(ReserveSeatsUseCase.depends),
        audit_logger: AuditLogger = Depends(Provide[Container.audit_logger]),
    ) -> Self:
        return cls(
            showtime_query_repo=showtime_query_repo,
            booking_query_repo=booking_query_repo,
            payment_gateway=payment_gateway,
            reserve_seats=reserve_seats,
            audit_logger=audit_logger,
        )

    @Logger.io
    async def execute(
        self,
        *,
        user_id: int,
        showtime_id: int,
        seat_ids: List[str],
        quoted_total: Decimal,
        payment_token: str,
    ) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.checkout',
            attributes={'showtime.id': showtime_id, 'user.id': user_id},
        ):
            # Step 1: fail fast before touching the card
            detail = await self.showtime_query_repo.get_detail(showtime_id=showtime_id)
            if not detail:
                raise ShowtimeNotFoundError(showtime_id)
            if reason := detail.bookable_reason(now=datetime.now()):
                raise ShowtimeNotBookableError(showtime_id, reason)

            seats = detail.grid.validate(seat_ids)
            claimed = await self.booking_query_repo.list_claimed_seats(showtime_id=showtime_id)
            if taken := [seat for seat in seats if seat in claimed]:
                raise SeatConflictError(taken)

            expected = PriceQuote.quote_total(
                seat_count=len(seats),
                price=detail.showtime.price,
                booking_fee=settings.BOOKING_FEE,
            )
            PriceQuote.verify(
                quoted=quoted_total, expected=expected, tolerance=settings.PRICE_TOLERANCE
            )

            # Step 2: charge
            result = await self.payment_gateway.charge(
                token=payment_token,
                amount=expected,
                currency=settings.PAYMENT_CURRENCY,
                metadata={
                    'showtime_id': showtime_id,
                    'user_id': user_id,
                    'seats': ','.join(seats),
                },
            )
            if not result.success:
                metrics.record_payment(result='declined')
                await self.audit_logger.record(
                    action='Payment failed',
                    category=LogCategory.PAYMENT,
                    user_id=user_id,
                    details={
                        'showtime_id': showtime_id,
                        'amount': str(expected),
                        'reason': result.reason,
                    },
                )
                raise PaymentFailedError(result.reason or 'declined')

            metrics.record_payment(result='succeeded')
            await self.audit_logger.record(
                action='Payment gateway response',
                category=LogCategory.API,
                user_id=user_id,
                details=result.raw,
            )

            # Step 3: claim the seats as paid
            try:
                return await self.reserve_seats.execute(
                    user_id=user_id,
                    showtime_id=showtime_id,
                    seat_ids=seats,
                    quoted_amount=quoted_total,
                    status=BookingStatus.COMPLETED,
                    payment_ref=result.reference,
                )
            except Exception as e:
                metrics.record_payment(result='charged_not_booked')
                Logger.base.error(
                    f'💸 [CHECKOUT] Charge {result.reference} succeeded but booking failed '
                    f'for showtime {showtime_id}: {e}'
                )
                await self.audit_logger.record(
                    action='Payment captured without booking',
                    category=LogCategory.ERROR,
                    user_id=user_id,
                    details={
                        'payment_ref': result.reference,
                        'showtime_id': showtime_id,
                        'seats': seats,
                        'amount': str(expected),
                        'error': str(e),
                    },
                )
                raise
