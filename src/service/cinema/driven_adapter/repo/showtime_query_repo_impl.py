from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import and_, func, or_, select

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_showtime_query_repo import IShowtimeQueryRepo
from src.service.cinema.domain.entity.showtime_entity import ShowtimeDetail
from src.service.cinema.driven_adapter.model.booking_model import SeatAssignmentModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.cinema.driven_adapter.model.theater_model import TheaterModel
from src.service.cinema.driven_adapter.repo.model_mapper import showtime_row_to_detail
from src.service.cinema.driven_adapter.repo.session_scoped_repo import SessionScopedRepo
from src.service.cinema.driven_adapter.repo.showtime_command_repo_impl import (
    showtime_detail_query,
)


def _booked_seats_subquery():
    return (
        select(
            SeatAssignmentModel.showtime_id,
            func.count(SeatAssignmentModel.id).label('booked_seats'),
        )
        .group_by(SeatAssignmentModel.showtime_id)
        .subquery()
    )


class ShowtimeQueryRepoImpl(SessionScopedRepo, IShowtimeQueryRepo):
    @Logger.io
    async def get_detail(self, *, showtime_id: int) -> ShowtimeDetail | None:
        async with self._get_session() as session:
            result = await session.execute(
                showtime_detail_query().where(ShowtimeModel.id == showtime_id)
            )
            row = result.first()
            return showtime_row_to_detail(row) if row else None

    @Logger.io
    async def list_upcoming_by_movie(
        self, *, movie_id: int, now: datetime, show_date: Optional[date] = None
    ) -> List[ShowtimeDetail]:
        booked = _booked_seats_subquery()
        query = (
            showtime_detail_query()
            .add_columns(func.coalesce(booked.c.booked_seats, 0).label('booked_seats'))
            .outerjoin(booked, booked.c.showtime_id == ShowtimeModel.id)
            .where(
                ShowtimeModel.movie_id == movie_id,
                ShowtimeModel.is_active.is_(True),
                TheaterModel.is_active.is_(True),
                or_(
                    ShowtimeModel.show_date > now.date(),
                    and_(
                        ShowtimeModel.show_date == now.date(),
                        ShowtimeModel.show_time > now.time(),
                    ),
                ),
            )
        )
        if show_date:
            query = query.where(ShowtimeModel.show_date == show_date)

        async with self._get_session() as session:
            result = await session.execute(
                query.order_by(ShowtimeModel.show_date, ShowtimeModel.show_time)
            )
            return [
                showtime_row_to_detail(row, booked_seats=row.booked_seats) for row in result.all()
            ]

    @Logger.io
    async def list_showtimes(
        self,
        *,
        show_date: Optional[date] = None,
        movie_id: Optional[int] = None,
        theater_id: Optional[int] = None,
    ) -> List[ShowtimeDetail]:
        booked = _booked_seats_subquery()
        query = (
            showtime_detail_query()
            .add_columns(func.coalesce(booked.c.booked_seats, 0).label('booked_seats'))
            .outerjoin(booked, booked.c.showtime_id == ShowtimeModel.id)
        )
        if show_date:
            query = query.where(ShowtimeModel.show_date == show_date)
        if movie_id:
            query = query.where(ShowtimeModel.movie_id == movie_id)
        if theater_id:
            query = query.where(ShowtimeModel.theater_id == theater_id)

        async with self._get_session() as session:
            result = await session.execute(
                query.order_by(ShowtimeModel.show_date.desc(), ShowtimeModel.show_time)
            )
            return [
                showtime_row_to_detail(row, booked_seats=row.booked_seats) for row in result.all()
            ]
