from datetime import date, datetime
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_repo import IMovieRepo
from src.service.cinema.app.interface.i_showtime_query_repo import IShowtimeQueryRepo
from src.service.cinema.domain.entity.showtime_entity import ShowtimeDetail
from src.service.cinema.domain.exception.booking_exceptions import (
    MovieNotFoundError,
    ShowtimeNotFoundError,
)


class ListShowtimesUseCase:
    def __init__(self, *, showtime_query_repo: IShowtimeQueryRepo, movie_repo: IMovieRepo) -> None:
        self.showtime_query_repo = showtime_query_repo
        self.movie_repo = movie_repo

    @classmethod
    @inject
    def depends(
        cls,
        showtime_query_repo: IShowtimeQueryRepo = Depends(
            Provide[Container.showtime_query_repo]
        ),
        movie_repo: IMovieRepo = Depends(Provide[Container.movie_repo]),
    ) -> Self:
        return cls(showtime_query_repo=showtime_query_repo, movie_repo=movie_repo)

    @Logger.io
    async def list_upcoming_for_movie(
        self, *, movie_id: int, show_date: Optional[date] = None
    ) -> List[ShowtimeDetail]:
        if not await self.movie_repo.get_by_id(movie_id=movie_id):
            raise MovieNotFoundError(movie_id)
        # Showtime starts are naive local wall-clock times
        return await self.showtime_query_repo.list_upcoming_by_movie(
            movie_id=movie_id, now=datetime.now(), show_date=show_date
        )

    @Logger.io
    async def get_showtime(self, *, showtime_id: int) -> ShowtimeDetail:
        detail = await self.showtime_query_repo.get_detail(showtime_id=showtime_id)
        if not detail:
            raise ShowtimeNotFoundError(showtime_id)
        return detail

    @Logger.io
    async def list_all(
        self,
        *,
        show_date: Optional[date] = None,
        movie_id: Optional[int] = None,
        theater_id: Optional[int] = None,
    ) -> List[ShowtimeDetail]:
        return await self.showtime_query_repo.list_showtimes(
            show_date=show_date, movie_id=movie_id, theater_id=theater_id
        )
