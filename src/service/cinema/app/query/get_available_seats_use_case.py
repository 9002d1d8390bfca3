from typing import List, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema.app.interface.i_showtime_query_repo import IShowtimeQueryRepo
from src.service.cinema.domain.entity.showtime_entity import ShowtimeDetail
from src.service.cinema.domain.exception.booking_exceptions import ShowtimeNotFoundError


@attrs.define
class SeatMap:
    showtime: ShowtimeDetail
    all_seats: List[str]
    booked: List[str]
    available: List[str]


class GetAvailableSeatsUseCase:
    """
    Seat availability is grid minus seats claimed by non-cancelled bookings.
    Reads are not locked; a stale answer is caught at reservation time.
    """

    def __init__(
        self, *, showtime_query_repo: IShowtimeQueryRepo, booking_query_repo: IBookingQueryRepo
    ) -> None:
        self.showtime_query_repo = showtime_query_repo
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        showtime_query_repo: IShowtimeQueryRepo = Depends(
            Provide[Container.showtime_query_repo]
        ),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(showtime_query_repo=showtime_query_repo, booking_query_repo=booking_query_repo)

    @Logger.io
    async def get_seat_map(self, *, showtime_id: int) -> SeatMap:
        detail = await self.showtime_query_repo.get_detail(showtime_id=showtime_id)
        if not detail:
            raise ShowtimeNotFoundError(showtime_id)

        all_seats = detail.grid.all_seat_ids()
        claimed = await self.booking_query_repo.list_claimed_seats(showtime_id=showtime_id)
        detail.available_seats = len(all_seats) - len(claimed)
        return SeatMap(
            showtime=detail,
            all_seats=all_seats,
            booked=[seat for seat in all_seats if seat in claimed],
            available=[seat for seat in all_seats if seat not in claimed],
        )

    @Logger.io
    async def execute(self, *, showtime_id: int) -> set[str]:
        seat_map = await self.get_seat_map(showtime_id=showtime_id)
        return set(seat_map.available)
