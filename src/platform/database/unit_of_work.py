"""
Unit of Work Pattern - one database session and transaction shared by repositories

Architecture:
- UoW owns the session lifecycle and commit/rollback
- Repositories get the shared session from the UoW
- Use cases coordinate several repositories through the UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.db_setting import get_async_session


if TYPE_CHECKING:
    from src.service.cinema.app.interface.i_booking_command_repo import IBookingCommandRepo
    from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
    from src.service.cinema.app.interface.i_movie_repo import IMovieRepo
    from src.service.cinema.app.interface.i_showtime_command_repo import IShowtimeCommandRepo
    from src.service.cinema.app.interface.i_theater_repo import ITheaterRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the cinema service

    Usage:
        async with uow:
            booking = await uow.booking_command_repo.create_with_seats(booking=...)
            await uow.commit()

    Leaving the block without commit() rolls everything back.
    """

    # Booking repositories
    booking_command_repo: IBookingCommandRepo
    booking_query_repo: IBookingQueryRepo

    # Catalog repositories
    showtime_command_repo: IShowtimeCommandRepo
    movie_repo: IMovieRepo
    theater_repo: ITheaterRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        from src.service.cinema.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.cinema.driven_adapter.repo.booking_query_repo_impl import (
            BookingQueryRepoImpl,
        )
        from src.service.cinema.driven_adapter.repo.movie_repo_impl import MovieRepoImpl
        from src.service.cinema.driven_adapter.repo.showtime_command_repo_impl import (
            ShowtimeCommandRepoImpl,
        )
        from src.service.cinema.driven_adapter.repo.theater_repo_impl import TheaterRepoImpl

        # Create repositories with shared session
        self.booking_command_repo = BookingCommandRepoImpl()
        self.booking_command_repo.session = self.session
        self.booking_query_repo = BookingQueryRepoImpl()
        self.booking_query_repo.session = self.session

        self.showtime_command_repo = ShowtimeCommandRepoImpl()
        self.showtime_command_repo.session = self.session
        self.movie_repo = MovieRepoImpl()
        self.movie_repo.session = self.session
        self.theater_repo = TheaterRepoImpl()
        self.theater_repo.session = self.session

        return await super().__aenter__()

    async def __aexit__(self, *args):
        await super().__aexit__(*args)
        # Note: session cleanup handled by get_async_session context manager

    async def _commit(self):
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


def get_unit_of_work(
    session: AsyncSession = Depends(get_async_session),
) -> AbstractUnitOfWork:
    """
    FastAPI dependency for Unit of Work

    Usage:
        async def cancel(uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
            async with uow:
                ...
                await uow.commit()
    """
    return SqlAlchemyUnitOfWork(session)
