from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.cinema.domain.value_object.playback_window import PlaybackWindow
from src.service.cinema.domain.value_object.seat import SeatGrid


def _validate_positive_price(instance: object, attribute: attrs.Attribute, value: Decimal) -> None:
    if value is None or Decimal(value) <= 0:
        raise DomainError('Price must be greater than 0')


@attrs.define
class Showtime:
    movie_id: int
    theater_id: int
    show_date: date
    show_time: time
    price: Decimal = attrs.field(validator=_validate_positive_price)
    is_active: bool = True
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        movie_id: int,
        theater_id: int,
        show_date: date,
        show_time: time,
        price: Decimal,
    ) -> 'Showtime':
        if show_date is None or show_time is None:
            raise DomainError('Show date and time are required')
        return cls(
            movie_id=movie_id,
            theater_id=theater_id,
            show_date=show_date,
            show_time=show_time,
            price=Decimal(price),
            created_at=datetime.now(timezone.utc),
        )

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.show_date, self.show_time)


@attrs.define
class ShowtimeDetail:
    """Showtime with the movie and theater facts the booking engine needs."""

    showtime: Showtime
    movie_title: str
    duration_minutes: int
    theater_name: str
    rows_count: int
    seats_per_row: int
    poster_url: Optional[str] = None
    available_seats: Optional[int] = None

    @property
    def grid(self) -> SeatGrid:
        return SeatGrid(rows=self.rows_count, seats_per_row=self.seats_per_row)

    @property
    def total_seats(self) -> int:
        return self.grid.capacity

    def bookable_reason(self, *, now: datetime) -> Optional[str]:
        """None when bookable, otherwise why not"""
        if not self.showtime.is_active:
            return 'showtime is inactive'
        if self.showtime.starts_at <= now:
            return 'showtime has already started'
        return None


@attrs.frozen
class ShowtimeSlot:
    """An existing screening in a theater, as seen by the scheduling conflict check."""

    showtime_id: int
    movie_title: str
    starts_at: datetime
    duration_minutes: int

    def window(self, *, buffer_minutes: int) -> PlaybackWindow:
        return PlaybackWindow.of(
            start=self.starts_at,
            duration_minutes=self.duration_minutes,
            buffer_minutes=buffer_minutes,
        )
