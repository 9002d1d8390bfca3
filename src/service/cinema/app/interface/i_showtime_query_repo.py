from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import List, Optional

from src.service.cinema.domain.entity.showtime_entity import ShowtimeDetail


class IShowtimeQueryRepo(ABC):
    @abstractmethod
    async def get_detail(self, *, showtime_id: int) -> ShowtimeDetail | None:
        pass

    @abstractmethod
    async def list_upcoming_by_movie(
        self, *, movie_id: int, now: datetime, show_date: Optional[date] = None
    ) -> List[ShowtimeDetail]:
        """Active showtimes starting after `now`, with available seat counts."""
        pass

    @abstractmethod
    async def list_showtimes(
        self,
        *,
        show_date: Optional[date] = None,
        movie_id: Optional[int] = None,
        theater_id: Optional[int] = None,
    ) -> List[ShowtimeDetail]:
        pass
