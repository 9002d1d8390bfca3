from datetime import date, time
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.cinema.domain.entity.movie_entity import Genre, Movie
from src.service.cinema.domain.entity.showtime_entity import ShowtimeDetail
from src.service.cinema.domain.entity.theater_entity import Theater
from src.service.cinema.domain.enum.movie_status import MovieStatus


# ============================ Genre ============================


class GenreCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)


class GenreResponse(BaseModel):
    id: int
    name: str

    @classmethod
    def from_entity(cls, genre: Genre) -> 'GenreResponse':
        return cls(id=genre.id or 0, name=genre.name)


# ============================ Movie ============================


class MovieCreateRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'title': 'The Long Night',
                'description': 'A heist gone wrong.',
                'duration_minutes': 120,
                'release_date': '2025-03-01',
                'rating': 7.8,
                'status': 'now_showing',
                'genre_ids': [1, 2],
            }
        }
    }

    title: str = Field(..., min_length=1, max_length=200)
    description: str = ''
    duration_minutes: int = Field(..., gt=0)
    release_date: date
    poster_url: Optional[str] = None
    trailer_url: Optional[str] = None
    rating: Decimal = Field(default=Decimal('0'), ge=0, le=10)
    status: MovieStatus = MovieStatus.COMING_SOON
    genre_ids: List[int] = []


class MovieUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    release_date: Optional[date] = None
    poster_url: Optional[str] = None
    trailer_url: Optional[str] = None
    rating: Optional[Decimal] = Field(default=None, ge=0, le=10)
    status: Optional[MovieStatus] = None
    genre_ids: Optional[List[int]] = None


class MovieStatusUpdateRequest(BaseModel):
    status: MovieStatus


class MovieResponse(BaseModel):
    id: int
    title: str
    description: str
    duration_minutes: int
    release_date: date
    poster_url: Optional[str] = None
    trailer_url: Optional[str] = None
    rating: Decimal
    status: MovieStatus
    genres: List[str]

    @classmethod
    def from_entity(cls, movie: Movie) -> 'MovieResponse':
        return cls(
            id=movie.id or 0,
            title=movie.title,
            description=movie.description,
            duration_minutes=movie.duration_minutes,
            release_date=movie.release_date,
            poster_url=movie.poster_url,
            trailer_url=movie.trailer_url,
            rating=movie.rating,
            status=movie.status,
            genres=movie.genres,
        )


# ============================ Theater ============================


class TheaterCreateRequest(BaseModel):
    model_config = {
        'json_schema_extra': {'example': {'name': 'Hall 1', 'rows_count': 5, 'seats_per_row': 8}}
    }

    name: str = Field(..., min_length=1, max_length=100)
    rows_count: int = Field(..., gt=0, le=100)
    seats_per_row: int = Field(..., gt=0, le=100)


class TheaterUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    rows_count: Optional[int] = Field(default=None, gt=0, le=100)
    seats_per_row: Optional[int] = Field(default=None, gt=0, le=100)
    is_active: Optional[bool] = None


class TheaterResponse(BaseModel):
    id: int
    name: str
    rows_count: int
    seats_per_row: int
    total_seats: int
    is_active: bool

    @classmethod
    def from_entity(cls, theater: Theater) -> 'TheaterResponse':
        return cls(
            id=theater.id or 0,
            name=theater.name,
            rows_count=theater.rows_count,
            seats_per_row=theater.seats_per_row,
            total_seats=theater.total_seats,
            is_active=theater.is_active,
        )


# ============================ Showtime ============================


class ShowtimeCreateRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'movie_id': 1,
                'theater_id': 1,
                'show_date': '2025-06-01',
                'show_time': '18:00',
                'price': 12.99,
            }
        }
    }

    movie_id: int
    theater_id: int
    show_date: date
    show_time: time
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)


class ShowtimeUpdateRequest(BaseModel):
    price: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    is_active: Optional[bool] = None


class ShowtimeResponse(BaseModel):
    id: int
    movie_id: int
    movie_title: str
    duration_minutes: int
    poster_url: Optional[str] = None
    theater_id: int
    theater_name: str
    show_date: date
    show_time: time
    price: Decimal
    is_active: bool
    rows_count: int
    seats_per_row: int
    total_seats: int
    available_seats: Optional[int] = None

    @classmethod
    def from_detail(cls, detail: ShowtimeDetail) -> 'ShowtimeResponse':
        showtime = detail.showtime
        return cls(
            id=showtime.id or 0,
            movie_id=showtime.movie_id,
            movie_title=detail.movie_title,
            duration_minutes=detail.duration_minutes,
            poster_url=detail.poster_url,
            theater_id=showtime.theater_id,
            theater_name=detail.theater_name,
            show_date=showtime.show_date,
            show_time=showtime.show_time,
            price=showtime.price,
            is_active=showtime.is_active,
            rows_count=detail.rows_count,
            seats_per_row=detail.seats_per_row,
            total_seats=detail.total_seats,
            available_seats=detail.available_seats,
        )


class ShowtimeCreatedResponse(BaseModel):
    id: int
    movie_id: int
    theater_id: int
    show_date: date
    show_time: time
    price: Decimal
    is_active: bool


class SeatMapResponse(BaseModel):
    """Seat ids are row letter + seat number, e.g. `C7`."""

    showtime: ShowtimeResponse
    all_seats: List[str]
    booked: List[str]
    available: List[str]


class QuoteRequest(BaseModel):
    seat_ids: List[str] = Field(..., min_length=1)

    model_config = {'json_schema_extra': {'example': {'seat_ids': ['C3', 'C4']}}}


class QuoteResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'seat_count': 2,
                'unit_price': '12.99',
                'booking_fee': '1.50',
                'total': '27.48',
            }
        }
    }

    seat_count: int
    unit_price: Decimal
    booking_fee: Decimal
    total: Decimal
