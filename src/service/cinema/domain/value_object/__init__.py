"""Cinema Domain Value Objects"""

from src.service.cinema.domain.value_object.booking_reference import BookingReference
from src.service.cinema.domain.value_object.playback_window import PlaybackWindow
from src.service.cinema.domain.value_object.pricing import PriceQuote
from src.service.cinema.domain.value_object.seat import SeatGrid, SeatId

__all__ = ['BookingReference', 'PlaybackWindow', 'PriceQuote', 'SeatGrid', 'SeatId']
