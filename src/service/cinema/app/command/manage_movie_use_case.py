from datetime import date
from decimal import Decimal
from typing import Any, List, Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_repo import IMovieRepo
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.entity.movie_entity import Genre, Movie
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.domain.enum.movie_status import MovieStatus
from src.service.cinema.domain.exception.booking_exceptions import MovieNotFoundError


class ManageMovieUseCase:
    def __init__(self, *, movie_repo: IMovieRepo, audit_logger: AuditLogger) -> None:
        self.movie_repo = movie_repo
        self.audit_logger = audit_logger

    @classmethod
    @inject
    def depends(
        cls,
        movie_repo: IMovieRepo = Depends(Provide[Container.movie_repo]),
        audit_logger: AuditLogger = Depends(Provide[Container.audit_logger]),
    ) -> Self:
        return cls(movie_repo=movie_repo, audit_logger=audit_logger)

    @Logger.io
    async def create_movie(
        self,
        *,
        admin_id: int,
        title: str,
        duration_minutes: int,
        release_date: date,
        description: str = '',
        poster_url: Optional[str] = None,
        trailer_url: Optional[str] = None,
        rating: Decimal = Decimal('0'),
        status: MovieStatus = MovieStatus.COMING_SOON,
        genre_ids: Optional[List[int]] = None,
    ) -> Movie:
        movie = Movie(
            title=title.strip(),
            duration_minutes=duration_minutes,
            release_date=release_date,
            description=description,
            poster_url=poster_url,
            trailer_url=trailer_url,
            rating=rating,
            status=status,
        )
        created = await self.movie_repo.create(movie=movie, genre_ids=genre_ids or [])
        await self.audit_logger.record(
            action=f'Added movie: {created.title}',
            category=LogCategory.ADMIN,
            user_id=admin_id,
            details={'movie_id': created.id},
        )
        return created

    @Logger.io
    async def update_movie(
        self,
        *,
        movie_id: int,
        admin_id: int,
        genre_ids: Optional[List[int]] = None,
        **changes: Any,
    ) -> Movie:
        """Apply the non-None fields in `changes`; genres are replaced only when given."""
        movie = await self.movie_repo.get_by_id(movie_id=movie_id)
        if not movie:
            raise MovieNotFoundError(movie_id)

        fields = {key: value for key, value in changes.items() if value is not None}
        if 'title' in fields:
            fields['title'] = fields['title'].strip()
        # evolve re-runs the attrs validators
        updated = await self.movie_repo.update(
            movie=attrs.evolve(movie, **fields), genre_ids=genre_ids
        )
        await self.audit_logger.record(
            action=f'Updated movie: {updated.title}',
            category=LogCategory.ADMIN,
            user_id=admin_id,
            details={'movie_id': movie_id, 'fields': sorted(fields)},
        )
        return updated

    @Logger.io
    async def set_status(self, *, movie_id: int, status: MovieStatus, admin_id: int) -> Movie:
        return await self.update_movie(movie_id=movie_id, admin_id=admin_id, status=status)

    @Logger.io
    async def delete_movie(self, *, movie_id: int, admin_id: int) -> None:
        movie = await self.movie_repo.get_by_id(movie_id=movie_id)
        if not movie:
            raise MovieNotFoundError(movie_id)

        count = await self.movie_repo.count_showtimes(movie_id=movie_id)
        if count:
            raise ConflictError(f'Cannot delete movie - {count} showtime(s) exist.')

        await self.movie_repo.delete(movie_id=movie_id)
        await self.audit_logger.record(
            action=f'Deleted movie: {movie.title}',
            category=LogCategory.ADMIN,
            user_id=admin_id,
            details={'movie_id': movie_id},
        )

    @Logger.io
    async def create_genre(self, *, name: str, admin_id: int) -> Genre:
        genre = await self.movie_repo.create_genre(genre=Genre(name=name.strip()))
        await self.audit_logger.record(
            action=f'Added genre: {genre.name}',
            category=LogCategory.ADMIN,
            user_id=admin_id,
        )
        return genre
