"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.cinema.driven_adapter.model.audit_log_model import AuditLogModel
from src.service.cinema.driven_adapter.model.booking_model import BookingModel, SeatAssignmentModel
from src.service.cinema.driven_adapter.model.login_attempt_model import LoginAttemptModel
from src.service.cinema.driven_adapter.model.movie_model import (
    GenreModel,
    MovieModel,
    movie_genre_table,
)
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.cinema.driven_adapter.model.theater_model import TheaterModel
from src.service.cinema.driven_adapter.model.user_model import UserModel

__all__ = [
    'AuditLogModel',
    'BookingModel',
    'GenreModel',
    'LoginAttemptModel',
    'MovieModel',
    'SeatAssignmentModel',
    'ShowtimeModel',
    'TheaterModel',
    'UserModel',
    'movie_genre_table',
]
