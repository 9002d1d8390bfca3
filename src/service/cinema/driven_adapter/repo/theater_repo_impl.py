from typing import List

from sqlalchemy import select

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_theater_repo import ITheaterRepo
from src.service.cinema.domain.entity.theater_entity import Theater
from src.service.cinema.domain.exception.booking_exceptions import TheaterNotFoundError
from src.service.cinema.driven_adapter.model.theater_model import TheaterModel
from src.service.cinema.driven_adapter.repo.model_mapper import theater_to_entity
from src.service.cinema.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


class TheaterRepoImpl(SessionScopedRepo, ITheaterRepo):
    @Logger.io
    async def get_by_id(self, *, theater_id: int) -> Theater | None:
        async with self._get_session() as session:
            db_theater = await session.get(TheaterModel, theater_id)
            return theater_to_entity(db_theater) if db_theater else None

    @Logger.io
    async def get_for_update(self, *, theater_id: int) -> Theater | None:
        async with self._get_session() as session:
            result = await session.execute(
                select(TheaterModel).where(TheaterModel.id == theater_id).with_for_update()
            )
            db_theater = result.scalar_one_or_none()
            return theater_to_entity(db_theater) if db_theater else None

    @Logger.io
    async def list_theaters(self, *, active_only: bool = True) -> List[Theater]:
        query = select(TheaterModel).order_by(TheaterModel.name)
        if active_only:
            query = query.where(TheaterModel.is_active.is_(True))
        async with self._get_session() as session:
            result = await session.execute(query)
            return [theater_to_entity(t) for t in result.scalars().all()]

    @Logger.io
    async def create(self, *, theater: Theater) -> Theater:
        async with self._get_session() as session:
            db_theater = TheaterModel(
                name=theater.name,
                rows_count=theater.rows_count,
                seats_per_row=theater.seats_per_row,
                is_active=theater.is_active,
            )
            session.add(db_theater)
            await self._save(session)
            await session.refresh(db_theater)
            return theater_to_entity(db_theater)

    @Logger.io
    async def update(self, *, theater: Theater) -> Theater:
        async with self._get_session() as session:
            db_theater = await session.get(TheaterModel, theater.id)
            if not db_theater:
                raise TheaterNotFoundError(theater.id or 0)
            db_theater.name = theater.name
            db_theater.rows_count = theater.rows_count
            db_theater.seats_per_row = theater.seats_per_row
            db_theater.is_active = theater.is_active
            await self._save(session)
            return theater_to_entity(db_theater)
