from typing import List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError, DomainError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_repo import IMovieRepo
from src.service.cinema.domain.entity.movie_entity import Genre, Movie
from src.service.cinema.domain.enum.movie_status import MovieStatus
from src.service.cinema.domain.exception.booking_exceptions import MovieNotFoundError
from src.service.cinema.driven_adapter.model.movie_model import (
    GenreModel,
    MovieModel,
    movie_genre_table,
)
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.cinema.driven_adapter.repo.model_mapper import genre_to_entity, movie_to_entity
from src.service.cinema.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


class MovieRepoImpl(SessionScopedRepo, IMovieRepo):
    @staticmethod
    async def _load_genres(session: AsyncSession, genre_ids: List[int]) -> List[GenreModel]:
        if not genre_ids:
            return []
        result = await session.execute(select(GenreModel).where(GenreModel.id.in_(genre_ids)))
        genres = list(result.scalars().all())
        missing = set(genre_ids) - {genre.id for genre in genres}
        if missing:
            raise DomainError(f'Unknown genre id(s): {", ".join(map(str, sorted(missing)))}')
        return genres

    @Logger.io
    async def get_by_id(self, *, movie_id: int) -> Movie | None:
        async with self._get_session() as session:
            db_movie = await session.get(MovieModel, movie_id)
            return movie_to_entity(db_movie) if db_movie else None

    @Logger.io
    async def list_movies(
        self, *, status: Optional[MovieStatus] = None, limit: Optional[int] = None
    ) -> List[Movie]:
        query = select(MovieModel).order_by(MovieModel.release_date.desc())
        if status:
            query = query.where(MovieModel.status == status.value)
        if limit:
            query = query.limit(limit)

        async with self._get_session() as session:
            result = await session.execute(query)
            return [movie_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def search(self, *, query: str) -> List[Movie]:
        term = f'%{query}%'
        genre_match = (
            select(movie_genre_table.c.movie_id)
            .join(GenreModel, GenreModel.id == movie_genre_table.c.genre_id)
            .where(GenreModel.name.ilike(term))
        )
        async with self._get_session() as session:
            result = await session.execute(
                select(MovieModel)
                .where(or_(MovieModel.title.ilike(term), MovieModel.id.in_(genre_match)))
                .order_by(
                    (MovieModel.status == MovieStatus.NOW_SHOWING.value).desc(),
                    MovieModel.release_date.desc(),
                )
            )
            return [movie_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def list_by_genre(self, *, genre_id: int) -> List[Movie]:
        async with self._get_session() as session:
            result = await session.execute(
                select(MovieModel)
                .join(movie_genre_table, movie_genre_table.c.movie_id == MovieModel.id)
                .where(movie_genre_table.c.genre_id == genre_id)
                .order_by(MovieModel.release_date.desc())
            )
            return [movie_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def list_genres(self) -> List[Genre]:
        async with self._get_session() as session:
            result = await session.execute(select(GenreModel).order_by(GenreModel.name))
            return [genre_to_entity(g) for g in result.scalars().all()]

    @Logger.io
    async def create_genre(self, *, genre: Genre) -> Genre:
        async with self._get_session() as session:
            db_genre = GenreModel(name=genre.name.strip())
            try:
                async with session.begin_nested():
                    session.add(db_genre)
                    await session.flush()
            except IntegrityError as e:
                raise ConflictError(f'Genre {genre.name} already exists') from e
            await self._save(session)
            return genre_to_entity(db_genre)

    @Logger.io
    async def create(self, *, movie: Movie, genre_ids: List[int]) -> Movie:
        async with self._get_session() as session:
            db_movie = MovieModel(
                title=movie.title,
                description=movie.description,
                duration_minutes=movie.duration_minutes,
                release_date=movie.release_date,
                poster_url=movie.poster_url,
                trailer_url=movie.trailer_url,
                rating=movie.rating,
                status=movie.status.value,
                genres=await self._load_genres(session, genre_ids),
            )
            session.add(db_movie)
            await self._save(session)
            await session.refresh(db_movie)
            return movie_to_entity(db_movie)

    @Logger.io
    async def update(self, *, movie: Movie, genre_ids: Optional[List[int]] = None) -> Movie:
        async with self._get_session() as session:
            db_movie = await session.get(MovieModel, movie.id)
            if not db_movie:
                raise MovieNotFoundError(movie.id or 0)

            db_movie.title = movie.title
            db_movie.description = movie.description
            db_movie.duration_minutes = movie.duration_minutes
            db_movie.release_date = movie.release_date
            db_movie.poster_url = movie.poster_url
            db_movie.trailer_url = movie.trailer_url
            db_movie.rating = movie.rating
            db_movie.status = movie.status.value
            if genre_ids is not None:
                db_movie.genres = await self._load_genres(session, genre_ids)

            await self._save(session)
            await session.refresh(db_movie)
            return movie_to_entity(db_movie)

    @Logger.io
    async def delete(self, *, movie_id: int) -> None:
        async with self._get_session() as session:
            try:
                async with session.begin_nested():
                    await session.execute(delete(MovieModel).where(MovieModel.id == movie_id))
            except IntegrityError as e:
                raise ConflictError('Cannot delete a movie that has showtimes') from e
            await self._save(session)

    @Logger.io
    async def count_showtimes(self, *, movie_id: int) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                select(func.count(ShowtimeModel.id)).where(ShowtimeModel.movie_id == movie_id)
            )
            return result.scalar_one()
