"""Model -> entity conversion shared by the command and query repositories"""

from decimal import Decimal
from typing import Any

from src.service.cinema.domain.entity.audit_log_entity import AuditLog
from src.service.cinema.domain.entity.booking_entity import Booking, BookingDetail
from src.service.cinema.domain.entity.movie_entity import Genre, Movie
from src.service.cinema.domain.entity.showtime_entity import Showtime, ShowtimeDetail
from src.service.cinema.domain.entity.theater_entity import Theater
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.domain.enum.movie_status import MovieStatus
from src.service.cinema.domain.enum.user_role import UserRole
from src.service.cinema.driven_adapter.model.audit_log_model import AuditLogModel
from src.service.cinema.driven_adapter.model.booking_model import BookingModel
from src.service.cinema.driven_adapter.model.movie_model import GenreModel, MovieModel
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.cinema.driven_adapter.model.theater_model import TheaterModel
from src.service.cinema.driven_adapter.model.user_model import UserModel


def booking_to_entity(db_booking: BookingModel) -> Booking:
    return Booking(
        id=db_booking.id,
        reference=db_booking.reference,
        user_id=db_booking.user_id,
        showtime_id=db_booking.showtime_id,
        seat_ids=[seat.seat_number for seat in db_booking.seats],
        seat_count=db_booking.seat_count,
        total_amount=Decimal(db_booking.total_amount),
        status=BookingStatus(db_booking.status),
        payment_ref=db_booking.payment_ref,
        created_at=db_booking.created_at,
        updated_at=db_booking.updated_at,
    )


def booking_row_to_detail(row: Any) -> BookingDetail:
    """Row shape: (BookingModel, movie_title, theater_name, show_date, show_time,
    user_email, user_name, poster_url)"""
    return BookingDetail(
        booking=booking_to_entity(row[0]),
        movie_title=row.movie_title,
        theater_name=row.theater_name,
        show_date=row.show_date,
        show_time=row.show_time,
        user_email=row.user_email,
        user_name=row.user_name,
        poster_url=row.poster_url,
    )


def showtime_to_entity(db_showtime: ShowtimeModel) -> Showtime:
    return Showtime(
        id=db_showtime.id,
        movie_id=db_showtime.movie_id,
        theater_id=db_showtime.theater_id,
        show_date=db_showtime.show_date,
        show_time=db_showtime.show_time,
        price=Decimal(db_showtime.price),
        is_active=db_showtime.is_active,
        created_at=db_showtime.created_at,
    )


def showtime_row_to_detail(row: Any, *, booked_seats: int | None = None) -> ShowtimeDetail:
    """Row shape: (ShowtimeModel, movie_title, duration_minutes, poster_url,
    theater_name, rows_count, seats_per_row)"""
    detail = ShowtimeDetail(
        showtime=showtime_to_entity(row[0]),
        movie_title=row.movie_title,
        duration_minutes=row.duration_minutes,
        poster_url=row.poster_url,
        theater_name=row.theater_name,
        rows_count=row.rows_count,
        seats_per_row=row.seats_per_row,
    )
    if booked_seats is not None:
        detail.available_seats = max(detail.total_seats - booked_seats, 0)
    return detail


def genre_to_entity(db_genre: GenreModel) -> Genre:
    return Genre(id=db_genre.id, name=db_genre.name)


def movie_to_entity(db_movie: MovieModel) -> Movie:
    return Movie(
        id=db_movie.id,
        title=db_movie.title,
        description=db_movie.description,
        duration_minutes=db_movie.duration_minutes,
        release_date=db_movie.release_date,
        poster_url=db_movie.poster_url,
        trailer_url=db_movie.trailer_url,
        rating=Decimal(db_movie.rating),
        status=MovieStatus(db_movie.status),
        genres=[genre.name for genre in db_movie.genres],
        created_at=db_movie.created_at,
    )


def theater_to_entity(db_theater: TheaterModel) -> Theater:
    return Theater(
        id=db_theater.id,
        name=db_theater.name,
        rows_count=db_theater.rows_count,
        seats_per_row=db_theater.seats_per_row,
        is_active=db_theater.is_active,
    )


def user_to_entity(user_model: UserModel) -> UserEntity:
    return UserEntity(
        id=user_model.id,
        email=user_model.email,
        name=user_model.name,
        hashed_password=user_model.hashed_password,
        role=UserRole(user_model.role),
        is_verified=user_model.is_verified,
        verification_token=user_model.verification_token,
        verification_expires_at=user_model.verification_expires_at,
        reset_token=user_model.reset_token,
        reset_expires_at=user_model.reset_expires_at,
        remember_token_hash=user_model.remember_token_hash,
        remember_token_expires_at=user_model.remember_token_expires_at,
        created_at=user_model.created_at,
    )


def audit_log_to_entity(db_log: AuditLogModel, *, user_name: str | None = None) -> AuditLog:
    return AuditLog(
        id=db_log.id,
        user_id=db_log.user_id,
        action=db_log.action,
        category=LogCategory(db_log.category),
        details=db_log.details or {},
        ip_address=db_log.ip_address,
        user_agent=db_log.user_agent,
        created_at=db_log.created_at,
        user_name=user_name,
    )
