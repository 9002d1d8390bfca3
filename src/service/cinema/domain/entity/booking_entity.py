from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import DomainError, ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.enum.booking_status import BookingStatus


@attrs.define
class Booking:
    user_id: int
    showtime_id: int
    total_amount: Decimal
    seat_ids: List[str] = attrs.field(factory=list)
    reference: str = ''
    status: BookingStatus = BookingStatus.PENDING
    payment_ref: Optional[str] = None
    # seat_ids empties once a cancellation releases the seats; this does not
    seat_count: int = 0
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        user_id: int,
        showtime_id: int,
        seat_ids: List[str],
        total_amount: Decimal,
        reference: str,
        status: BookingStatus = BookingStatus.PENDING,
        payment_ref: Optional[str] = None,
    ) -> 'Booking':
        if not seat_ids:
            raise DomainError('A booking needs at least one seat')
        if status == BookingStatus.CANCELLED:
            raise DomainError('Cannot create a cancelled booking')
        if status == BookingStatus.COMPLETED and not payment_ref:
            raise DomainError('A completed booking requires a payment reference')

        now = datetime.now(timezone.utc)
        return cls(
            user_id=user_id,
            showtime_id=showtime_id,
            seat_ids=list(seat_ids),
            seat_count=len(seat_ids),
            total_amount=total_amount,
            reference=reference,
            status=status,
            payment_ref=payment_ref,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_completed(self) -> bool:
        return self.status == BookingStatus.COMPLETED

    @property
    def is_cancelled(self) -> bool:
        return self.status == BookingStatus.CANCELLED

    @Logger.io
    def confirm(self, *, payment_ref: str) -> 'Booking':
        """
        Mark a pending booking as paid.

        Confirming an already-completed booking returns it unchanged so repeated
        delivery from the payment provider is harmless.

        Raises:
            DomainError: booking is cancelled or payment_ref is empty
        """
        if not payment_ref:
            raise DomainError('Payment reference is required')
        if self.is_cancelled:
            raise DomainError('Cannot confirm a cancelled booking')
        if self.is_completed:
            if self.payment_ref != payment_ref:
                Logger.base.warning(
                    f'⚠️ [Booking] {self.reference} already completed with {self.payment_ref}, '
                    f'ignoring {payment_ref}'
                )
            return self

        return attrs.evolve(
            self,
            status=BookingStatus.COMPLETED,
            payment_ref=payment_ref,
            updated_at=datetime.now(timezone.utc),
        )

    @Logger.io
    def cancel(self) -> 'Booking':
        if self.is_cancelled:
            return self
        return attrs.evolve(
            self, status=BookingStatus.CANCELLED, updated_at=datetime.now(timezone.utc)
        )

    @Logger.io
    def change_status(self, status: BookingStatus) -> 'Booking':
        """Administrative status correction. Cancellation goes through cancel()."""
        if self.is_cancelled:
            raise DomainError('Cancelled bookings cannot be reopened')
        if status == BookingStatus.CANCELLED:
            raise DomainError('Use cancellation to cancel a booking')
        if status == self.status:
            return self
        return attrs.evolve(self, status=status, updated_at=datetime.now(timezone.utc))

    def validate_cancellable_by(self, *, actor_id: int, is_admin: bool) -> None:
        if is_admin:
            return
        if self.user_id != actor_id:
            raise ForbiddenError('You can only cancel your own bookings')
        if self.is_completed:
            raise DomainError('Paid bookings can only be cancelled by an administrator')

    def validate_owned_by(self, user_id: int) -> None:
        if self.user_id != user_id:
            raise ForbiddenError('Access denied')


@attrs.define
class BookingDetail:
    """Booking joined with what a receipt or the admin list shows."""

    booking: Booking
    movie_title: str
    theater_name: str
    show_date: date
    show_time: time
    user_email: str = ''
    user_name: str = ''
    poster_url: Optional[str] = None
