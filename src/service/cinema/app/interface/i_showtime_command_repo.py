from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import List, Optional

from src.service.cinema.domain.entity.showtime_entity import Showtime, ShowtimeDetail, ShowtimeSlot


class IShowtimeCommandRepo(ABC):
    @abstractmethod
    async def get_detail_for_update(self, *, showtime_id: int) -> ShowtimeDetail | None:
        """Load a showtime with its grid and lock the showtime row until commit."""
        pass

    @abstractmethod
    async def list_slots(self, *, theater_id: int, show_date: date) -> List[ShowtimeSlot]:
        pass

    @abstractmethod
    async def create(self, *, showtime: Showtime) -> Showtime:
        """
        Raises:
            SchedulingConflictError: another showtime starts at the same slot in the theater
        """
        pass

    @abstractmethod
    async def update(
        self,
        *,
        showtime_id: int,
        price: Optional[Decimal] = None,
        is_active: Optional[bool] = None,
    ) -> Showtime | None:
        pass

    @abstractmethod
    async def delete(self, *, showtime_id: int) -> None:
        """
        Raises:
            ConflictError: the store still holds bookings referencing the showtime
        """
        pass
