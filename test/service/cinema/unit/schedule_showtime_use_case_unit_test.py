from datetime import date, datetime, time
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock

import attrs
import pytest

from src.platform.exception.exceptions import DomainError
from src.service.cinema.app.command.schedule_showtime_use_case import ScheduleShowtimeUseCase
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.showtime_entity import Showtime, ShowtimeSlot
from src.service.cinema.domain.entity.theater_entity import Theater
from src.service.cinema.domain.exception.booking_exceptions import (
    MovieNotFoundError,
    SchedulingConflictError,
)


SHOW_DATE = date(2030, 5, 17)


async def _assign_id(*, showtime: Showtime) -> Showtime:
    return attrs.evolve(showtime, id=2)


@pytest.mark.unit
class TestScheduleShowtime:
    @pytest.fixture
    def use_case(self, fake_uow: Any, audit_logger: AsyncMock) -> ScheduleShowtimeUseCase:
        fake_uow.movie_repo.get_by_id = AsyncMock(
            return_value=Movie(
                id=1, title='The Long Night', duration_minutes=120, release_date=date(2025, 1, 1)
            )
        )
        fake_uow.theater_repo.get_for_update = AsyncMock(
            return_value=Theater(id=1, name='Hall 1', rows_count=5, seats_per_row=8)
        )
        fake_uow.showtime_command_repo.list_slots = AsyncMock(
            return_value=[
                ShowtimeSlot(
                    showtime_id=1,
                    movie_title='The Long Night',
                    starts_at=datetime.combine(SHOW_DATE, time(18, 0)),
                    duration_minutes=120,
                )
            ]
        )
        fake_uow.showtime_command_repo.create = AsyncMock(side_effect=_assign_id)
        return ScheduleShowtimeUseCase(uow=fake_uow, audit_logger=audit_logger)

    async def _schedule(self, use_case: ScheduleShowtimeUseCase, start: time) -> Showtime:
        return await use_case.execute(
            movie_id=1,
            theater_id=1,
            show_date=SHOW_DATE,
            show_time=start,
            price=Decimal('12.99'),
            admin_id=1,
        )

    async def test_overlap_with_evening_screening(
        self, use_case: ScheduleShowtimeUseCase, fake_uow: Any
    ) -> None:
        """
        Given: an 18:00 screening of a 120 minute movie with a 20 minute buffer
        When: 19:00 is scheduled in the same theater
        Then: SchedulingConflictError and nothing is created
        """
        with pytest.raises(SchedulingConflictError) as exc_info:
            await self._schedule(use_case, time(19, 0))

        assert exc_info.value.conflicting.showtime_id == 1
        fake_uow.showtime_command_repo.create.assert_not_called()
        assert fake_uow.committed == 0

    async def test_after_buffer_is_scheduled(
        self, use_case: ScheduleShowtimeUseCase, fake_uow: Any, audit_logger: AsyncMock
    ) -> None:
        showtime = await self._schedule(use_case, time(20, 30))

        assert showtime.id == 2
        assert fake_uow.committed == 1
        fake_uow.theater_repo.get_for_update.assert_awaited_once_with(theater_id=1)
        assert audit_logger.record.call_args.kwargs['action'] == 'Added showtime for movie ID: 1'

    async def test_unknown_movie(self, use_case: ScheduleShowtimeUseCase, fake_uow: Any) -> None:
        fake_uow.movie_repo.get_by_id = AsyncMock(return_value=None)
        with pytest.raises(MovieNotFoundError):
            await self._schedule(use_case, time(10, 0))

    async def test_inactive_theater(
        self, use_case: ScheduleShowtimeUseCase, fake_uow: Any
    ) -> None:
        fake_uow.theater_repo.get_for_update = AsyncMock(
            return_value=Theater(id=1, name='Hall 1', rows_count=5, seats_per_row=8, is_active=False)
        )
        with pytest.raises(DomainError, match='not active'):
            await self._schedule(use_case, time(10, 0))

    async def test_non_positive_price_is_rejected(
        self, use_case: ScheduleShowtimeUseCase
    ) -> None:
        with pytest.raises(DomainError, match='Price must be greater than 0'):
            await use_case.execute(
                movie_id=1,
                theater_id=1,
                show_date=SHOW_DATE,
                show_time=time(10, 0),
                price=Decimal('0'),
                admin_id=1,
            )
