"""
Unit tests for the booking lifecycle after reservation

Test Focus:
1. ConfirmPaymentUseCase: pending -> completed, duplicate delivery is a no-op
2. CancelBookingUseCase: status and seat release in one commit, second cancel is a no-op
3. DeleteShowtimeUseCase: refused while any booking references the showtime
"""

from datetime import date, time
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock

import attrs
import pytest

from src.platform.exception.exceptions import DomainError, ForbiddenError
from src.service.cinema.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.cinema.app.command.confirm_payment_use_case import ConfirmPaymentUseCase
from src.service.cinema.app.command.delete_showtime_use_case import DeleteShowtimeUseCase
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.entity.showtime_entity import Showtime, ShowtimeDetail
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.domain.exception.booking_exceptions import (
    BookingNotFoundError,
    HasBookingsError,
)


@pytest.fixture
def pending_booking() -> Booking:
    return attrs.evolve(
        Booking.create(
            user_id=2,
            showtime_id=1,
            seat_ids=['C3', 'C4'],
            total_amount=Decimal('27.48'),
            reference='CM-0A1B2C3D4E',
        ),
        id=10,
    )


async def _echo(*, booking: Booking) -> Booking:
    return booking


@pytest.mark.unit
class TestConfirmPayment:
    async def test_pending_booking_is_completed(
        self, fake_uow: Any, audit_logger: AsyncMock, pending_booking: Booking
    ) -> None:
        fake_uow.booking_command_repo.get_by_id_for_update = AsyncMock(
            return_value=pending_booking
        )
        fake_uow.booking_command_repo.update_status = AsyncMock(side_effect=_echo)
        use_case = ConfirmPaymentUseCase(uow=fake_uow, audit_logger=audit_logger)

        booking = await use_case.execute(booking_id=10, payment_ref='ch_demo_1', user_id=2)

        assert booking.status == BookingStatus.COMPLETED
        assert booking.payment_ref == 'ch_demo_1'
        assert fake_uow.committed == 1
        assert audit_logger.record.call_args.kwargs['category'] == LogCategory.PAYMENT

    async def test_duplicate_confirmation_changes_nothing(
        self, fake_uow: Any, audit_logger: AsyncMock, pending_booking: Booking
    ) -> None:
        """
        Given: a booking already completed with ch_demo_1
        When: the payment confirmation is delivered again
        Then: no write, no commit, same booking returned
        """
        completed = pending_booking.confirm(payment_ref='ch_demo_1')
        fake_uow.booking_command_repo.get_by_id_for_update = AsyncMock(return_value=completed)
        use_case = ConfirmPaymentUseCase(uow=fake_uow, audit_logger=audit_logger)

        booking = await use_case.execute(booking_id=10, payment_ref='ch_demo_1')

        assert booking is completed
        fake_uow.booking_command_repo.update_status.assert_not_called()
        assert fake_uow.committed == 0
        audit_logger.record.assert_not_called()

    async def test_other_users_booking(
        self, fake_uow: Any, audit_logger: AsyncMock, pending_booking: Booking
    ) -> None:
        fake_uow.booking_command_repo.get_by_id_for_update = AsyncMock(
            return_value=pending_booking
        )
        use_case = ConfirmPaymentUseCase(uow=fake_uow, audit_logger=audit_logger)

        with pytest.raises(ForbiddenError):
            await use_case.execute(booking_id=10, payment_ref='ch_demo_1', user_id=3)


@pytest.mark.unit
class TestCancelBooking:
    @pytest.fixture
    def use_case(
        self, fake_uow: Any, audit_logger: AsyncMock, pending_booking: Booking
    ) -> CancelBookingUseCase:
        fake_uow.booking_command_repo.get_by_id_for_update = AsyncMock(
            return_value=pending_booking
        )
        fake_uow.booking_command_repo.update_status = AsyncMock(side_effect=_echo)
        fake_uow.booking_command_repo.release_seats = AsyncMock(return_value=2)
        return CancelBookingUseCase(uow=fake_uow, audit_logger=audit_logger)

    async def test_owner_cancels_and_seats_are_released(
        self, use_case: CancelBookingUseCase, fake_uow: Any, audit_logger: AsyncMock
    ) -> None:
        booking = await use_case.execute(booking_id=10, actor_id=2)

        assert booking.status == BookingStatus.CANCELLED
        fake_uow.booking_command_repo.release_seats.assert_awaited_once_with(booking_id=10)
        assert fake_uow.committed == 1
        kwargs = audit_logger.record.call_args.kwargs
        assert kwargs['category'] == LogCategory.BOOKING
        assert kwargs['details'] == {'booking_id': 10, 'released_seats': 2}

    async def test_admin_cancel_is_audited_as_admin(
        self, use_case: CancelBookingUseCase, audit_logger: AsyncMock
    ) -> None:
        await use_case.execute(booking_id=10, actor_id=1, is_admin=True)
        assert audit_logger.record.call_args.kwargs['category'] == LogCategory.ADMIN

    async def test_cancelling_twice_is_noop(
        self, use_case: CancelBookingUseCase, fake_uow: Any, pending_booking: Booking
    ) -> None:
        cancelled = pending_booking.cancel()
        fake_uow.booking_command_repo.get_by_id_for_update = AsyncMock(return_value=cancelled)

        booking = await use_case.execute(booking_id=10, actor_id=2)

        assert booking is cancelled
        fake_uow.booking_command_repo.release_seats.assert_not_called()
        assert fake_uow.committed == 0

    async def test_paid_booking_needs_admin(
        self, use_case: CancelBookingUseCase, fake_uow: Any, pending_booking: Booking
    ) -> None:
        fake_uow.booking_command_repo.get_by_id_for_update = AsyncMock(
            return_value=pending_booking.confirm(payment_ref='ch_demo_1')
        )
        with pytest.raises(DomainError):
            await use_case.execute(booking_id=10, actor_id=2)

    async def test_missing_booking(self, use_case: CancelBookingUseCase, fake_uow: Any) -> None:
        fake_uow.booking_command_repo.get_by_id_for_update = AsyncMock(return_value=None)
        with pytest.raises(BookingNotFoundError):
            await use_case.execute(booking_id=404, actor_id=2)


@pytest.mark.unit
class TestDeleteShowtime:
    @pytest.fixture
    def use_case(self, fake_uow: Any, audit_logger: AsyncMock) -> DeleteShowtimeUseCase:
        fake_uow.showtime_command_repo.get_detail_for_update = AsyncMock(
            return_value=ShowtimeDetail(
                showtime=Showtime(
                    id=1,
                    movie_id=1,
                    theater_id=1,
                    show_date=date(2030, 5, 17),
                    show_time=time(19, 0),
                    price=Decimal('12.99'),
                ),
                movie_title='The Long Night',
                duration_minutes=120,
                theater_name='Hall 1',
                rows_count=5,
                seats_per_row=8,
            )
        )
        return DeleteShowtimeUseCase(uow=fake_uow, audit_logger=audit_logger)

    async def test_refused_while_bookings_exist(
        self, use_case: DeleteShowtimeUseCase, fake_uow: Any
    ) -> None:
        """
        Given: one booking (of any status) references the showtime
        When: an admin deletes it
        Then: HasBookingsError and the showtime stays
        """
        fake_uow.booking_query_repo.count_by_showtime = AsyncMock(return_value=1)

        with pytest.raises(HasBookingsError) as exc_info:
            await use_case.execute(showtime_id=1, admin_id=1)

        assert exc_info.value.message == 'Cannot delete showtime - 1 booking(s) exist.'
        assert exc_info.value.status_code == 409
        fake_uow.showtime_command_repo.delete.assert_not_called()

    async def test_deletes_unbooked_showtime(
        self, use_case: DeleteShowtimeUseCase, fake_uow: Any, audit_logger: AsyncMock
    ) -> None:
        fake_uow.booking_query_repo.count_by_showtime = AsyncMock(return_value=0)

        await use_case.execute(showtime_id=1, admin_id=1)

        fake_uow.showtime_command_repo.delete.assert_awaited_once_with(showtime_id=1)
        assert fake_uow.committed == 1
        assert audit_logger.record.call_args.kwargs['action'] == 'Deleted showtime ID: 1'
