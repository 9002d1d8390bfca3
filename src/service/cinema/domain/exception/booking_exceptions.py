from decimal import Decimal
from typing import TYPE_CHECKING, Any, Iterable, Optional

from src.platform.exception.exceptions import (
    ConflictError,
    CustomBaseError,
    DomainError,
    NotFoundError,
)


if TYPE_CHECKING:
    from src.service.cinema.domain.entity.showtime_entity import ShowtimeSlot


class ShowtimeNotFoundError(NotFoundError):
    def __init__(self, showtime_id: int) -> None:
        self.showtime_id = showtime_id
        super().__init__(f'Showtime {showtime_id} not found')


class BookingNotFoundError(NotFoundError):
    def __init__(self, booking_id: int | str) -> None:
        self.booking_id = booking_id
        super().__init__(f'Booking {booking_id} not found')


class MovieNotFoundError(NotFoundError):
    def __init__(self, movie_id: int) -> None:
        self.movie_id = movie_id
        super().__init__(f'Movie {movie_id} not found')


class TheaterNotFoundError(NotFoundError):
    def __init__(self, theater_id: int) -> None:
        self.theater_id = theater_id
        super().__init__(f'Theater {theater_id} not found')


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(f'User {user_id} not found')


class SeatConflictError(ConflictError):
    """Raised when requested seats are already claimed by another booking.

    `seats` names the offending seat ids so the client can deselect them and retry.
    """

    def __init__(self, seats: Iterable[str]) -> None:
        # Request order, first occurrence wins
        self.seats = list(dict.fromkeys(seats))
        joined = ', '.join(self.seats) if self.seats else 'Selected seats'
        super().__init__(f'Seat(s) {joined} already booked. Please choose different seats.')

    @property
    def extra(self) -> dict[str, Any]:
        return {'seats': self.seats}


class PriceMismatchError(DomainError):
    # The recomputed total stays server-side; only the quoted one is kept for logging
    def __init__(self, quoted: Decimal) -> None:
        self.quoted = quoted
        super().__init__('Price verification failed.')


class SchedulingConflictError(ConflictError):
    def __init__(
        self, conflicting: Optional['ShowtimeSlot'] = None, *, buffer_minutes: int = 0
    ) -> None:
        self.conflicting = conflicting
        if conflicting is None:
            super().__init__('Another showtime already starts at that time in this theater.')
            return
        window = conflicting.window(buffer_minutes=buffer_minutes)
        super().__init__(
            f'Scheduling conflict with showtime {conflicting.showtime_id} '
            f'({conflicting.movie_title}, {window}).'
        )


class HasBookingsError(ConflictError):
    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f'Cannot delete showtime - {count} booking(s) exist.')


class PaymentFailedError(CustomBaseError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f'Payment failed: {reason}', 402)


class InvalidSeatError(DomainError):
    def __init__(self, seats: Iterable[str], reason: str = 'Invalid seat selection') -> None:
        self.seats = list(seats)
        detail = f': {", ".join(self.seats)}' if self.seats else ''
        super().__init__(f'{reason}{detail}')


class ShowtimeNotBookableError(DomainError):
    def __init__(self, showtime_id: int, reason: str) -> None:
        self.showtime_id = showtime_id
        super().__init__(f'Showtime {showtime_id} is not bookable: {reason}')


class BookingReferenceCollisionError(ConflictError):
    """Generated booking reference already exists; the caller retries with a fresh one."""

    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__(f'Booking reference {reference} already exists')
