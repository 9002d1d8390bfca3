from datetime import datetime
from decimal import Decimal
import time
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.domain.exception.booking_exceptions import (
    BookingReferenceCollisionError,
    InvalidSeatError,
    PriceMismatchError,
    SeatConflictError,
    ShowtimeNotBookableError,
    ShowtimeNotFoundError,
)
from src.service.cinema.domain.value_object.booking_reference import BookingReference
from src.service.cinema.domain.value_object.pricing import PriceQuote


class ReserveSeatsUseCase:
    """
    Atomically claim seats for one showtime.

    Flow (one transaction):
    1. Lock the showtime row (serializes reservations per showtime)
    2. Check the showtime is active and has not started
    3. Validate seat ids against the theater grid
    4. Recompute the total and compare it with the quoted one
    5. Reject seats already claimed by a non-cancelled booking
    6. Insert booking + seat assignments, commit

    The unique (showtime_id, seat_id) index is the backstop if anything bypasses the lock.
    """

    MAX_REFERENCE_ATTEMPTS = 3

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
        self,
        *,
        user_id: int,
        showtime_id: int,
        seat_ids: List[str],
        quoted_amount: Decimal,
        status: BookingStatus = BookingStatus.PENDING,
        payment_ref: Optional[str] = None,
    ) -> Booking:
        started = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.reserve_seats',
            attributes={
                'showtime.id': showtime_id,
                'user.id': user_id,
                'seat.count': len(seat_ids),
            },
        ):
            try:
                booking = await self._reserve(
                    user_id=user_id,
                    showtime_id=showtime_id,
                    seat_ids=seat_ids,
                    quoted_amount=quoted_amount,
                    status=status,
                    payment_ref=payment_ref,
                )
            except SeatConflictError as e:
                metrics.record_seat_reservation(
                    result='seat_conflict', duration=time.perf_counter() - started
                )
                Logger.base.warning(
                    f'🪑 [RESERVE] Showtime {showtime_id}: seats {e.seats} already claimed'
                )
                raise
            except PriceMismatchError:
                metrics.record_seat_reservation(
                    result='price_mismatch', duration=time.perf_counter() - started
                )
                raise
            except (InvalidSeatError, ShowtimeNotBookableError, ShowtimeNotFoundError):
                metrics.record_seat_reservation(
                    result='invalid', duration=time.perf_counter() - started
                )
                raise
            except Exception:
                metrics.record_seat_reservation(
                    result='error', duration=time.perf_counter() - started
                )
                raise

        metrics.record_seat_reservation(
            result='success',
            duration=time.perf_counter() - started,
            seat_count=len(booking.seat_ids),
        )
        Logger.base.info(
            f'🎟️ [RESERVE] {booking.reference}: {len(booking.seat_ids)} seat(s) '
            f'for showtime {showtime_id} ({booking.status})'
        )
        await self.audit_logger.record(
            action=f'Booked {len(booking.seat_ids)} seat(s) for showtime {showtime_id}',
            category=LogCategory.BOOKING,
            user_id=user_id,
            details={
                'booking_reference': booking.reference,
                'showtime_id': showtime_id,
                'seats': booking.seat_ids,
                'total_amount': str(booking.total_amount),
                'status': booking.status.value,
            },
        )
        return booking

    async def _reserve(
        self,
        *,
        user_id: int,
        showtime_id: int,
        seat_ids: List[str],
        quoted_amount: Decimal,
        status: BookingStatus,
        payment_ref: Optional[str],
    ) -> Booking:
        async with self.uow:
            detail = await self.uow.showtime_command_repo.get_detail_for_update(
                showtime_id=showtime_id
            )
            if not detail:
                raise ShowtimeNotFoundError(showtime_id)

            if reason := detail.bookable_reason(now=datetime.now()):
                raise ShowtimeNotBookableError(showtime_id, reason)

            seats = detail.grid.validate(seat_ids)

            expected = PriceQuote.quote_total(
                seat_count=len(seats),
                price=detail.showtime.price,
                booking_fee=settings.BOOKING_FEE,
            )
            PriceQuote.verify(
                quoted=quoted_amount, expected=expected, tolerance=settings.PRICE_TOLERANCE
            )

            claimed = await self.uow.booking_query_repo.list_claimed_seats(
                showtime_id=showtime_id
            )
            if taken := [seat for seat in seats if seat in claimed]:
                raise SeatConflictError(taken)

            try:
                booking = await self._insert(
                    user_id=user_id,
                    showtime_id=showtime_id,
                    seats=seats,
                    total_amount=expected,
                    status=status,
                    payment_ref=payment_ref,
                )
            except SeatConflictError as e:
                # Name the seats actually held rather than the whole request
                claimed = await self.uow.booking_query_repo.list_claimed_seats(
                    showtime_id=showtime_id
                )
                raise SeatConflictError(
                    [seat for seat in seats if seat in claimed] or seats
                ) from e

            await self.uow.commit()
            return booking

    async def _insert(
        self,
        *,
        user_id: int,
        showtime_id: int,
        seats: List[str],
        total_amount: Decimal,
        status: BookingStatus,
        payment_ref: Optional[str],
    ) -> Booking:
        attempt = 1
        while True:
            booking = Booking.create(
                user_id=user_id,
                showtime_id=showtime_id,
                seat_ids=seats,
                total_amount=total_amount,
                reference=BookingReference.generate(settings.BOOKING_REFERENCE_PREFIX),
                status=status,
                payment_ref=payment_ref,
            )
            try:
                return await self.uow.booking_command_repo.create_with_seats(booking=booking)
            except BookingReferenceCollisionError as e:
                Logger.base.warning(
                    f'🔁 [RESERVE] Reference {e.reference} collided '
                    f'(attempt {attempt}/{self.MAX_REFERENCE_ATTEMPTS})'
                )
                if attempt >= self.MAX_REFERENCE_ATTEMPTS:
                    raise
                attempt += 1
