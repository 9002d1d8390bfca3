from datetime import date
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema.domain.entity.booking_entity import BookingDetail
from src.service.cinema.domain.enum.booking_status import BookingStatus


class ListBookingsUseCase:
    def __init__(self, *, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @Logger.io
    async def list_user_bookings(self, *, user_id: int) -> List[BookingDetail]:
        return await self.booking_query_repo.list_by_user(user_id=user_id)

    @Logger.io
    async def list_all_bookings(
        self,
        *,
        status: Optional[BookingStatus] = None,
        booking_date: Optional[date] = None,
        search: Optional[str] = None,
    ) -> List[BookingDetail]:
        return await self.booking_query_repo.list_for_admin(
            status=status,
            booking_date=booking_date,
            search=search.strip() if search else None,
        )
