from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Select, delete, select
from sqlalchemy.exc import IntegrityError

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_showtime_command_repo import IShowtimeCommandRepo
from src.service.cinema.domain.entity.showtime_entity import Showtime, ShowtimeDetail, ShowtimeSlot
from src.service.cinema.domain.exception.booking_exceptions import SchedulingConflictError
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.cinema.driven_adapter.model.theater_model import TheaterModel
from src.service.cinema.driven_adapter.repo.model_mapper import (
    showtime_row_to_detail,
    showtime_to_entity,
)
from src.service.cinema.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


SLOT_UNIQUE_CONSTRAINT = 'uq_showtime_theater_slot'


def showtime_detail_query() -> Select:
    return (
        select(
            ShowtimeModel,
            MovieModel.title.label('movie_title'),
            MovieModel.duration_minutes,
            MovieModel.poster_url,
            TheaterModel.name.label('theater_name'),
            TheaterModel.rows_count,
            TheaterModel.seats_per_row,
        )
        .join(MovieModel, MovieModel.id == ShowtimeModel.movie_id)
        .join(TheaterModel, TheaterModel.id == ShowtimeModel.theater_id)
    )


class ShowtimeCommandRepoImpl(SessionScopedRepo, IShowtimeCommandRepo):
    @Logger.io
    async def get_detail_for_update(self, *, showtime_id: int) -> ShowtimeDetail | None:
        async with self._get_session() as session:
            result = await session.execute(
                showtime_detail_query()
                .where(ShowtimeModel.id == showtime_id)
                .with_for_update(of=ShowtimeModel)
                .execution_options(populate_existing=True)
            )
            row = result.first()
            return showtime_row_to_detail(row) if row else None

    @Logger.io
    async def list_slots(self, *, theater_id: int, show_date: date) -> List[ShowtimeSlot]:
        async with self._get_session() as session:
            result = await session.execute(
                select(
                    ShowtimeModel.id,
                    MovieModel.title,
                    ShowtimeModel.show_date,
                    ShowtimeModel.show_time,
                    MovieModel.duration_minutes,
                )
                .join(MovieModel, MovieModel.id == ShowtimeModel.movie_id)
                .where(
                    ShowtimeModel.theater_id == theater_id,
                    ShowtimeModel.show_date == show_date,
                )
                .order_by(ShowtimeModel.show_time)
            )
            return [
                ShowtimeSlot(
                    showtime_id=row.id,
                    movie_title=row.title,
                    starts_at=datetime.combine(row.show_date, row.show_time),
                    duration_minutes=row.duration_minutes,
                )
                for row in result.all()
            ]

    @Logger.io
    async def create(self, *, showtime: Showtime) -> Showtime:
        async with self._get_session() as session:
            db_showtime = ShowtimeModel(
                movie_id=showtime.movie_id,
                theater_id=showtime.theater_id,
                show_date=showtime.show_date,
                show_time=showtime.show_time,
                price=showtime.price,
                is_active=showtime.is_active,
            )
            try:
                async with session.begin_nested():
                    session.add(db_showtime)
                    await session.flush()
            except IntegrityError as e:
                if SLOT_UNIQUE_CONSTRAINT in str(e.orig):
                    raise SchedulingConflictError() from e
                raise

            await session.refresh(db_showtime)
            return showtime_to_entity(db_showtime)

    @Logger.io
    async def update(
        self,
        *,
        showtime_id: int,
        price: Optional[Decimal] = None,
        is_active: Optional[bool] = None,
    ) -> Showtime | None:
        async with self._get_session() as session:
            db_showtime = await session.get(ShowtimeModel, showtime_id)
            if not db_showtime:
                return None
            if price is not None:
                db_showtime.price = price
            if is_active is not None:
                db_showtime.is_active = is_active
            await self._save(session)
            await session.refresh(db_showtime)
            return showtime_to_entity(db_showtime)

    @Logger.io
    async def delete(self, *, showtime_id: int) -> None:
        async with self._get_session() as session:
            try:
                async with session.begin_nested():
                    await session.execute(
                        delete(ShowtimeModel).where(ShowtimeModel.id == showtime_id)
                    )
            except IntegrityError as e:
                raise ConflictError('Cannot delete showtime - bookings exist.') from e
            await self._save(session)
