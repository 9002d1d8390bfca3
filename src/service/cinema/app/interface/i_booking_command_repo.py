"""
Booking Command Repository Interface

Write side of the booking engine. Every method runs on the unit-of-work session,
so the caller owns the transaction boundary.
"""

from abc import ABC, abstractmethod

from src.service.cinema.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create_with_seats(self, *, booking: Booking) -> Booking:
        """
        Insert the booking row and one seat-assignment row per seat.

        Runs inside a savepoint so a failed insert leaves the outer transaction usable.

        Raises:
            SeatConflictError: the store rejected a seat already claimed for the showtime
            BookingReferenceCollisionError: the booking reference already exists
        """
        pass

    @abstractmethod
    async def get_by_id_for_update(self, *, booking_id: int) -> Booking | None:
        """Load a booking with its seats and lock the booking row."""
        pass

    @abstractmethod
    async def update_status(self, *, booking: Booking) -> Booking:
        """Persist status, payment_ref and updated_at."""
        pass

    @abstractmethod
    async def release_seats(self, *, booking_id: int) -> int:
        """Delete the seat-assignment rows of a booking. Returns how many were deleted."""
        pass
