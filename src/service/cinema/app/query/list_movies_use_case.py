from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_repo import IMovieRepo
from src.service.cinema.domain.entity.movie_entity import Genre, Movie
from src.service.cinema.domain.enum.movie_status import MovieStatus
from src.service.cinema.domain.exception.booking_exceptions import MovieNotFoundError


class ListMoviesUseCase:
    def __init__(self, *, movie_repo: IMovieRepo) -> None:
        self.movie_repo = movie_repo

    @classmethod
    @inject
    def depends(cls, movie_repo: IMovieRepo = Depends(Provide[Container.movie_repo])) -> Self:
        return cls(movie_repo=movie_repo)

    @Logger.io
    async def list_movies(
        self, *, status: Optional[MovieStatus] = None, limit: Optional[int] = None
    ) -> List[Movie]:
        return await self.movie_repo.list_movies(status=status, limit=limit)

    @Logger.io
    async def get_movie(self, *, movie_id: int) -> Movie:
        movie = await self.movie_repo.get_by_id(movie_id=movie_id)
        if not movie:
            raise MovieNotFoundError(movie_id)
        return movie

    @Logger.io
    async def search(self, *, query: str) -> List[Movie]:
        if not query.strip():
            return []
        return await self.movie_repo.search(query=query.strip())

    @Logger.io
    async def list_by_genre(self, *, genre_id: int) -> List[Movie]:
        return await self.movie_repo.list_by_genre(genre_id=genre_id)

    @Logger.io
    async def list_genres(self) -> List[Genre]:
        return await self.movie_repo.list_genres()
