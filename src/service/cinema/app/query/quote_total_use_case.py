from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_showtime_query_repo import IShowtimeQueryRepo
from src.service.cinema.domain.exception.booking_exceptions import ShowtimeNotFoundError
from src.service.cinema.domain.value_object.pricing import PriceQuote


class QuoteTotalUseCase:
    """Total = seats x showtime price + flat booking fee, in cents."""

    def __init__(self, *, showtime_query_repo: IShowtimeQueryRepo) -> None:
        self.showtime_query_repo = showtime_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        showtime_query_repo: IShowtimeQueryRepo = Depends(
            Provide[Container.showtime_query_repo]
        ),
    ) -> Self:
        return cls(showtime_query_repo=showtime_query_repo)

    @Logger.io
    async def execute(self, *, showtime_id: int, seat_ids: List[str]) -> PriceQuote:
        detail = await self.showtime_query_repo.get_detail(showtime_id=showtime_id)
        if not detail:
            raise ShowtimeNotFoundError(showtime_id)

        seats = detail.grid.validate(seat_ids)
        return PriceQuote(
            seat_count=len(seats),
            unit_price=detail.showtime.price,
            booking_fee=settings.BOOKING_FEE,
        )
