from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from src.service.cinema.domain.entity.booking_entity import Booking, BookingDetail
from src.service.cinema.domain.enum.booking_status import BookingStatus


class IBookingQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, booking_id: int) -> Booking | None:
        pass

    @abstractmethod
    async def get_detail(self, *, booking_id: int) -> BookingDetail | None:
        pass

    @abstractmethod
    async def get_detail_by_reference(self, *, reference: str) -> BookingDetail | None:
        pass

    @abstractmethod
    async def list_claimed_seats(self, *, showtime_id: int) -> set[str]:
        """Seat ids held by non-cancelled bookings. Always a live read."""
        pass

    @abstractmethod
    async def count_by_showtime(self, *, showtime_id: int) -> int:
        """Bookings in any status, cancelled included."""
        pass

    @abstractmethod
    async def count_by_user(self, *, user_id: int) -> int:
        pass

    @abstractmethod
    async def list_by_user(self, *, user_id: int) -> List[BookingDetail]:
        pass

    @abstractmethod
    async def list_for_admin(
        self,
        *,
        status: Optional[BookingStatus] = None,
        booking_date: Optional[date] = None,
        search: Optional[str] = None,
        limit: int = 500,
    ) -> List[BookingDetail]:
        pass
