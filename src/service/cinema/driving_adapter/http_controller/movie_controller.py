from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.manage_movie_use_case import ManageMovieUseCase
from src.service.cinema.app.query.list_movies_use_case import ListMoviesUseCase
from src.service.cinema.app.query.list_showtimes_use_case import ListShowtimesUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.domain.enum.movie_status import MovieStatus
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.cinema.driving_adapter.http_controller.schema.catalog_schema import (
    GenreCreateRequest,
    GenreResponse,
    MovieCreateRequest,
    MovieResponse,
    MovieStatusUpdateRequest,
    MovieUpdateRequest,
    ShowtimeResponse,
)


router = APIRouter()


@router.get('', response_model=List[MovieResponse])
@Logger.io
async def list_movies(
    movie_status: Optional[MovieStatus] = None,
    limit: Optional[int] = None,
    use_case: ListMoviesUseCase = Depends(ListMoviesUseCase.depends),
) -> List[MovieResponse]:
    movies = await use_case.list_movies(status=movie_status, limit=limit)
    return [MovieResponse.from_entity(movie) for movie in movies]


@router.get('/search', response_model=List[MovieResponse])
@Logger.io
async def search_movies(
    q: str = '',
    use_case: ListMoviesUseCase = Depends(ListMoviesUseCase.depends),
) -> List[MovieResponse]:
    """Title or genre name, case-insensitive; now-showing titles first."""
    movies = await use_case.search(query=q)
    return [MovieResponse.from_entity(movie) for movie in movies]


@router.get('/genre', response_model=List[GenreResponse])
@Logger.io
async def list_genres(
    use_case: ListMoviesUseCase = Depends(ListMoviesUseCase.depends),
) -> List[GenreResponse]:
    return [GenreResponse.from_entity(genre) for genre in await use_case.list_genres()]


@router.post('/genre', response_model=GenreResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_genre(
    request: GenreCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: ManageMovieUseCase = Depends(ManageMovieUseCase.depends),
) -> GenreResponse:
    genre = await use_case.create_genre(name=request.name, admin_id=current_user.id or 0)
    return GenreResponse.from_entity(genre)


@router.get('/genre/{genre_id}', response_model=List[MovieResponse])
@Logger.io
async def list_movies_by_genre(
    genre_id: int,
    use_case: ListMoviesUseCase = Depends(ListMoviesUseCase.depends),
) -> List[MovieResponse]:
    movies = await use_case.list_by_genre(genre_id=genre_id)
    return [MovieResponse.from_entity(movie) for movie in movies]


@router.get('/{movie_id}', response_model=MovieResponse)
@Logger.io
async def get_movie(
    movie_id: int,
    use_case: ListMoviesUseCase = Depends(ListMoviesUseCase.depends),
) -> MovieResponse:
    return MovieResponse.from_entity(await use_case.get_movie(movie_id=movie_id))


@router.get('/{movie_id}/showtimes', response_model=List[ShowtimeResponse])
@Logger.io
async def list_movie_showtimes(
    movie_id: int,
    show_date: Optional[date] = None,
    use_case: ListShowtimesUseCase = Depends(ListShowtimesUseCase.depends),
) -> List[ShowtimeResponse]:
    details = await use_case.list_upcoming_for_movie(movie_id=movie_id, show_date=show_date)
    return [ShowtimeResponse.from_detail(detail) for detail in details]


# ============================ Admin ============================


@router.post('', response_model=MovieResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_movie(
    request: MovieCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: ManageMovieUseCase = Depends(ManageMovieUseCase.depends),
) -> MovieResponse:
    movie = await use_case.create_movie(admin_id=current_user.id or 0, **request.model_dump())
    return MovieResponse.from_entity(movie)


@router.patch('/{movie_id}', response_model=MovieResponse)
@Logger.io
async def update_movie(
    movie_id: int,
    request: MovieUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: ManageMovieUseCase = Depends(ManageMovieUseCase.depends),
) -> MovieResponse:
    movie = await use_case.update_movie(
        movie_id=movie_id, admin_id=current_user.id or 0, **request.model_dump()
    )
    return MovieResponse.from_entity(movie)


@router.patch('/{movie_id}/status', response_model=MovieResponse)
@Logger.io
async def update_movie_status(
    movie_id: int,
    request: MovieStatusUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: ManageMovieUseCase = Depends(ManageMovieUseCase.depends),
) -> MovieResponse:
    movie = await use_case.set_status(
        movie_id=movie_id, status=request.status, admin_id=current_user.id or 0
    )
    return MovieResponse.from_entity(movie)


@router.delete('/{movie_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_movie(
    movie_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: ManageMovieUseCase = Depends(ManageMovieUseCase.depends),
) -> None:
    await use_case.delete_movie(movie_id=movie_id, admin_id=current_user.id or 0)
