from decimal import Decimal

import pytest

from src.platform.exception.exceptions import DomainError, ForbiddenError
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.domain.exception.booking_exceptions import SeatConflictError


def _booking(**overrides) -> Booking:
    fields = {
        'user_id': 2,
        'showtime_id': 1,
        'seat_ids': ['C3', 'C4'],
        'total_amount': Decimal('27.48'),
        'reference': 'CM-0A1B2C3D4E',
    }
    fields.update(overrides)
    return Booking.create(**fields)


@pytest.mark.unit
class TestBookingCreate:
    def test_new_booking_is_pending(self) -> None:
        booking = _booking()
        assert booking.status == BookingStatus.PENDING
        assert booking.payment_ref is None
        assert booking.created_at is not None

    def test_completed_booking_needs_payment_reference(self) -> None:
        with pytest.raises(DomainError, match='requires a payment reference'):
            _booking(status=BookingStatus.COMPLETED)

    def test_booking_needs_seats(self) -> None:
        with pytest.raises(DomainError, match='at least one seat'):
            _booking(seat_ids=[])


@pytest.mark.unit
class TestBookingConfirm:
    def test_confirm_marks_pending_booking_completed(self) -> None:
        confirmed = _booking().confirm(payment_ref='ch_demo_1')
        assert confirmed.status == BookingStatus.COMPLETED
        assert confirmed.payment_ref == 'ch_demo_1'

    def test_confirm_is_idempotent(self) -> None:
        """
        Given: a booking already completed by one payment delivery
        When: the same confirmation arrives again (even with another reference)
        Then: the booking is returned unchanged
        """
        confirmed = _booking().confirm(payment_ref='ch_demo_1')

        assert confirmed.confirm(payment_ref='ch_demo_1') is confirmed
        again = confirmed.confirm(payment_ref='ch_demo_2')
        assert again is confirmed
        assert again.payment_ref == 'ch_demo_1'

    def test_cancelled_booking_cannot_be_confirmed(self) -> None:
        with pytest.raises(DomainError, match='cancelled'):
            _booking().cancel().confirm(payment_ref='ch_demo_1')


@pytest.mark.unit
class TestBookingCancel:
    def test_cancel_twice_is_noop(self) -> None:
        cancelled = _booking().cancel()
        assert cancelled.status == BookingStatus.CANCELLED
        assert cancelled.cancel() is cancelled

    def test_cancel_keeps_seat_count(self) -> None:
        booking = _booking()
        assert booking.seat_count == 2
        assert booking.cancel().seat_count == 2

    def test_owner_may_cancel_pending_booking(self) -> None:
        _booking().validate_cancellable_by(actor_id=2, is_admin=False)

    def test_other_user_may_not_cancel(self) -> None:
        with pytest.raises(ForbiddenError):
            _booking().validate_cancellable_by(actor_id=3, is_admin=False)

    def test_paid_booking_needs_admin(self) -> None:
        paid = _booking().confirm(payment_ref='ch_demo_1')
        with pytest.raises(DomainError, match='administrator'):
            paid.validate_cancellable_by(actor_id=2, is_admin=False)
        paid.validate_cancellable_by(actor_id=99, is_admin=True)

    def test_change_status_refuses_reopening_cancelled(self) -> None:
        with pytest.raises(DomainError, match='cannot be reopened'):
            _booking().cancel().change_status(BookingStatus.PENDING)


@pytest.mark.unit
class TestSeatConflictError:
    def test_seats_keep_request_order(self) -> None:
        """
        Given: C2 and C10 are both taken
        When: the conflict is raised for a request listing C2 before C10
        Then: the message and payload list C2 first, without duplicates
        """
        error = SeatConflictError(['C2', 'C10', 'C2'])

        assert error.seats == ['C2', 'C10']
        assert error.extra == {'seats': ['C2', 'C10']}
        assert error.message.startswith('Seat(s) C2, C10 already booked')
