from datetime import date
from typing import List, Optional

from sqlalchemy import Date, Select, cast, func, or_, select

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema.domain.entity.booking_entity import Booking, BookingDetail
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.driven_adapter.model.booking_model import BookingModel, SeatAssignmentModel
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.cinema.driven_adapter.model.theater_model import TheaterModel
from src.service.cinema.driven_adapter.model.user_model import UserModel
from src.service.cinema.driven_adapter.repo.model_mapper import (
    booking_row_to_detail,
    booking_to_entity,
)
from src.service.cinema.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


def booking_detail_query() -> Select:
    return (
        select(
            BookingModel,
            MovieModel.title.label('movie_title'),
            TheaterModel.name.label('theater_name'),
            ShowtimeModel.show_date,
            ShowtimeModel.show_time,
            UserModel.email.label('user_email'),
            UserModel.name.label('user_name'),
            MovieModel.poster_url,
        )
        .join(ShowtimeModel, ShowtimeModel.id == BookingModel.showtime_id)
        .join(MovieModel, MovieModel.id == ShowtimeModel.movie_id)
        .join(TheaterModel, TheaterModel.id == ShowtimeModel.theater_id)
        .join(UserModel, UserModel.id == BookingModel.user_id)
    )


class BookingQueryRepoImpl(SessionScopedRepo, IBookingQueryRepo):
    @Logger.io
    async def get_by_id(self, *, booking_id: int) -> Booking | None:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).where(BookingModel.id == booking_id)
            )
            db_booking = result.scalar_one_or_none()
            if not db_booking:
                return None
            return booking_to_entity(db_booking)

    @Logger.io
    async def get_detail(self, *, booking_id: int) -> BookingDetail | None:
        async with self._get_session() as session:
            result = await session.execute(
                booking_detail_query().where(BookingModel.id == booking_id)
            )
            row = result.first()
            return booking_row_to_detail(row) if row else None

    @Logger.io
    async def get_detail_by_reference(self, *, reference: str) -> BookingDetail | None:
        async with self._get_session() as session:
            result = await session.execute(
                booking_detail_query().where(BookingModel.reference == reference.upper())
            )
            row = result.first()
            return booking_row_to_detail(row) if row else None

    @Logger.io
    async def list_claimed_seats(self, *, showtime_id: int) -> set[str]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SeatAssignmentModel.seat_number)
                .join(BookingModel, BookingModel.id == SeatAssignmentModel.booking_id)
                .where(
                    SeatAssignmentModel.showtime_id == showtime_id,
                    BookingModel.status != BookingStatus.CANCELLED.value,
                )
            )
            return set(result.scalars().all())

    @Logger.io
    async def count_by_showtime(self, *, showtime_id: int) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                select(func.count(BookingModel.id)).where(BookingModel.showtime_id == showtime_id)
            )
            return result.scalar_one()

    @Logger.io
    async def count_by_user(self, *, user_id: int) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                select(func.count(BookingModel.id)).where(BookingModel.user_id == user_id)
            )
            return result.scalar_one()

    @Logger.io
    async def list_by_user(self, *, user_id: int) -> List[BookingDetail]:
        async with self._get_session() as session:
            result = await session.execute(
                booking_detail_query()
                .where(BookingModel.user_id == user_id)
                .order_by(BookingModel.created_at.desc())
            )
            return [booking_row_to_detail(row) for row in result.all()]

    @Logger.io
    async def list_for_admin(
        self,
        *,
        status: Optional[BookingStatus] = None,
        booking_date: Optional[date] = None,
        search: Optional[str] = None,
        limit: int = 500,
    ) -> List[BookingDetail]:
        query = booking_detail_query()
        if status:
            query = query.where(BookingModel.status == status.value)
        if booking_date:
            query = query.where(cast(BookingModel.created_at, Date) == booking_date)
        if search:
            term = f'%{search}%'
            query = query.where(
                or_(
                    BookingModel.reference.ilike(term),
                    UserModel.email.ilike(term),
                    MovieModel.title.ilike(term),
                )
            )

        async with self._get_session() as session:
            result = await session.execute(
                query.order_by(BookingModel.created_at.desc()).limit(limit)
            )
            return [booking_row_to_detail(row) for row in result.all()]
