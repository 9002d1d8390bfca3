"""Cinema Domain Enums"""

from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.domain.enum.movie_status import MovieStatus
from src.service.cinema.domain.enum.user_role import UserRole

__all__ = ['BookingStatus', 'LogCategory', 'MovieStatus', 'UserRole']
