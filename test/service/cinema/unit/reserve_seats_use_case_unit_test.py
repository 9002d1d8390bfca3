"""
Unit tests for ReserveSeatsUseCase

Test Focus:
1. Seats are claimed in one transaction after the showtime row lock
2. The stored total is the server-computed one
3. Fail Fast: unknown showtime, started showtime, bad seats, stale quote, taken seats
4. A unique-index race names only the seats actually held
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock

import attrs
import pytest

from src.service.cinema.app.command.reserve_seats_use_case import ReserveSeatsUseCase
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.entity.showtime_entity import Showtime, ShowtimeDetail
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.domain.exception.booking_exceptions import (
    BookingReferenceCollisionError,
    InvalidSeatError,
    PriceMismatchError,
    SeatConflictError,
    ShowtimeNotBookableError,
    ShowtimeNotFoundError,
)


def build_detail(*, show_date: date | None = None, is_active: bool = True) -> ShowtimeDetail:
    return ShowtimeDetail(
        showtime=Showtime(
            id=1,
            movie_id=1,
            theater_id=1,
            show_date=show_date or date.today() + timedelta(days=1),
            show_time=time(19, 0),
            price=Decimal('12.99'),
            is_active=is_active,
        ),
        movie_title='The Long Night',
        duration_minutes=120,
        theater_name='Hall 1',
        rows_count=5,
        seats_per_row=8,
    )


async def _persist(*, booking: Booking) -> Booking:
    return attrs.evolve(booking, id=10)


@pytest.mark.unit
class TestReserveSeats:
    @pytest.fixture
    def use_case(self, fake_uow: Any, audit_logger: AsyncMock) -> ReserveSeatsUseCase:
        fake_uow.showtime_command_repo.get_detail_for_update = AsyncMock(
            return_value=build_detail()
        )
        fake_uow.booking_query_repo.list_claimed_seats = AsyncMock(return_value=set())
        fake_uow.booking_command_repo.create_with_seats = AsyncMock(side_effect=_persist)
        return ReserveSeatsUseCase(uow=fake_uow, audit_logger=audit_logger)

    async def test_reserve_two_seats(
        self, use_case: ReserveSeatsUseCase, fake_uow: Any, audit_logger: AsyncMock
    ) -> None:
        """
        Given: a bookable 5x8 showtime at 12.99 with no claimed seats
        When: C3 and C4 are reserved with the quoted 27.48
        Then: a pending booking is committed and audited
        """
        booking = await use_case.execute(
            user_id=2, showtime_id=1, seat_ids=['c3', 'C4'], quoted_amount=Decimal('27.48')
        )

        assert booking.id == 10
        assert booking.seat_ids == ['C3', 'C4']
        assert booking.total_amount == Decimal('27.48')
        assert booking.status == BookingStatus.PENDING
        assert booking.reference.startswith('CM-')
        assert fake_uow.committed == 1
        fake_uow.showtime_command_repo.get_detail_for_update.assert_awaited_once_with(
            showtime_id=1
        )

        audit_logger.record.assert_awaited_once()
        details = audit_logger.record.call_args.kwargs['details']
        assert details['seats'] == ['C3', 'C4']
        assert details['total_amount'] == '27.48'

    async def test_stored_total_is_server_computed(
        self, use_case: ReserveSeatsUseCase
    ) -> None:
        booking = await use_case.execute(
            user_id=2, showtime_id=1, seat_ids=['C3', 'C4'], quoted_amount=Decimal('27.47')
        )
        assert booking.total_amount == Decimal('27.48')

    async def test_completed_status_carries_payment_ref(
        self, use_case: ReserveSeatsUseCase
    ) -> None:
        booking = await use_case.execute(
            user_id=2,
            showtime_id=1,
            seat_ids=['A1'],
            quoted_amount=Decimal('14.49'),
            status=BookingStatus.COMPLETED,
            payment_ref='ch_demo_1',
        )
        assert booking.status == BookingStatus.COMPLETED
        assert booking.payment_ref == 'ch_demo_1'

    async def test_unknown_showtime(self, use_case: ReserveSeatsUseCase, fake_uow: Any) -> None:
        fake_uow.showtime_command_repo.get_detail_for_update = AsyncMock(return_value=None)
        with pytest.raises(ShowtimeNotFoundError):
            await use_case.execute(
                user_id=2, showtime_id=99, seat_ids=['A1'], quoted_amount=Decimal('14.49')
            )
        assert fake_uow.committed == 0

    async def test_past_showtime_is_not_bookable(
        self, use_case: ReserveSeatsUseCase, fake_uow: Any
    ) -> None:
        fake_uow.showtime_command_repo.get_detail_for_update = AsyncMock(
            return_value=build_detail(show_date=datetime.now().date() - timedelta(days=1))
        )
        with pytest.raises(ShowtimeNotBookableError, match='already started'):
            await use_case.execute(
                user_id=2, showtime_id=1, seat_ids=['A1'], quoted_amount=Decimal('14.49')
            )

    async def test_inactive_showtime_is_not_bookable(
        self, use_case: ReserveSeatsUseCase, fake_uow: Any
    ) -> None:
        fake_uow.showtime_command_repo.get_detail_for_update = AsyncMock(
            return_value=build_detail(is_active=False)
        )
        with pytest.raises(ShowtimeNotBookableError, match='inactive'):
            await use_case.execute(
                user_id=2, showtime_id=1, seat_ids=['A1'], quoted_amount=Decimal('14.49')
            )

    async def test_seat_outside_theater(
        self, use_case: ReserveSeatsUseCase, fake_uow: Any
    ) -> None:
        with pytest.raises(InvalidSeatError):
            await use_case.execute(
                user_id=2, showtime_id=1, seat_ids=['Z1'], quoted_amount=Decimal('14.49')
            )
        fake_uow.booking_command_repo.create_with_seats.assert_not_called()

    async def test_stale_quote(self, use_case: ReserveSeatsUseCase, fake_uow: Any) -> None:
        with pytest.raises(PriceMismatchError):
            await use_case.execute(
                user_id=2, showtime_id=1, seat_ids=['C3', 'C4'], quoted_amount=Decimal('20.00')
            )
        fake_uow.booking_command_repo.create_with_seats.assert_not_called()

    async def test_already_claimed_seats_are_named(
        self, use_case: ReserveSeatsUseCase, fake_uow: Any, audit_logger: AsyncMock
    ) -> None:
        """
        Given: C4 is held by another booking
        When: C4 and C5 are requested
        Then: SeatConflictError lists only C4 and nothing is written
        """
        fake_uow.booking_query_repo.list_claimed_seats = AsyncMock(return_value={'C3', 'C4'})

        with pytest.raises(SeatConflictError) as exc_info:
            await use_case.execute(
                user_id=3, showtime_id=1, seat_ids=['C4', 'C5'], quoted_amount=Decimal('27.48')
            )

        assert exc_info.value.seats == ['C4']
        assert exc_info.value.extra == {'seats': ['C4']}
        fake_uow.booking_command_repo.create_with_seats.assert_not_called()
        audit_logger.record.assert_not_called()

    async def test_unique_index_race_names_held_seats(
        self, use_case: ReserveSeatsUseCase, fake_uow: Any
    ) -> None:
        # Free at check time, claimed by a concurrent commit before the insert
        fake_uow.booking_query_repo.list_claimed_seats = AsyncMock(side_effect=[set(), {'C5'}])
        fake_uow.booking_command_repo.create_with_seats = AsyncMock(
            side_effect=SeatConflictError(['C4', 'C5'])
        )

        with pytest.raises(SeatConflictError) as exc_info:
            await use_case.execute(
                user_id=3, showtime_id=1, seat_ids=['C4', 'C5'], quoted_amount=Decimal('27.48')
            )
        assert exc_info.value.seats == ['C5']
        assert fake_uow.committed == 0

    async def test_reference_collision_is_retried(
        self, use_case: ReserveSeatsUseCase, fake_uow: Any
    ) -> None:
        stored = attrs.evolve(
            Booking.create(
                user_id=2,
                showtime_id=1,
                seat_ids=['A1'],
                total_amount=Decimal('14.49'),
                reference='CM-BBBBBBBBBB',
            ),
            id=11,
        )
        fake_uow.booking_command_repo.create_with_seats = AsyncMock(
            side_effect=[BookingReferenceCollisionError('CM-AAAAAAAAAA'), stored]
        )

        booking = await use_case.execute(
            user_id=2, showtime_id=1, seat_ids=['A1'], quoted_amount=Decimal('14.49')
        )
        assert booking.id == 11
        assert fake_uow.booking_command_repo.create_with_seats.await_count == 2

    async def test_reference_collision_gives_up_after_three_attempts(
        self, use_case: ReserveSeatsUseCase, fake_uow: Any
    ) -> None:
        fake_uow.booking_command_repo.create_with_seats = AsyncMock(
            side_effect=BookingReferenceCollisionError('CM-AAAAAAAAAA')
        )
        with pytest.raises(BookingReferenceCollisionError):
            await use_case.execute(
                user_id=2, showtime_id=1, seat_ids=['A1'], quoted_amount=Decimal('14.49')
            )
        assert (
            fake_uow.booking_command_repo.create_with_seats.await_count
            == ReserveSeatsUseCase.MAX_REFERENCE_ATTEMPTS
        )


@pytest.mark.unit
class TestReserveSeatsWithFailingAuditTrail:
    async def test_audit_failure_keeps_the_booking(self, fake_uow: Any) -> None:
        """
        Given: the audit log store rejects every write
        When: C3 and C4 are reserved
        Then: the booking is still returned and committed exactly once
        """
        audit_log_repo = AsyncMock()
        audit_log_repo.create = AsyncMock(side_effect=RuntimeError('audit store down'))
        fake_uow.showtime_command_repo.get_detail_for_update = AsyncMock(
            return_value=build_detail()
        )
        fake_uow.booking_query_repo.list_claimed_seats = AsyncMock(return_value=set())
        fake_uow.booking_command_repo.create_with_seats = AsyncMock(side_effect=_persist)
        use_case = ReserveSeatsUseCase(
            uow=fake_uow, audit_logger=AuditLogger(audit_log_repo=audit_log_repo)
        )

        booking = await use_case.execute(
            user_id=2, showtime_id=1, seat_ids=['C3', 'C4'], quoted_amount=Decimal('27.48')
        )

        assert booking.id == 10
        assert booking.seat_ids == ['C3', 'C4']
        assert fake_uow.committed == 1
        audit_log_repo.create.assert_awaited_once()
