from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema.domain.entity.booking_entity import BookingDetail
from src.service.cinema.domain.exception.booking_exceptions import BookingNotFoundError


class GetBookingUseCase:
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
    async def get_booking(self, *, booking_id: int, user_id: int, is_admin: bool) -> BookingDetail:
        detail = await self.booking_query_repo.get_detail(booking_id=booking_id)
        if not detail:
            raise BookingNotFoundError(booking_id)
        if not is_admin:
            detail.booking.validate_owned_by(user_id)
        return detail

    @Logger.io
    async def get_by_reference(
        self, *, reference: str, user_id: int, is_admin: bool
    ) -> BookingDetail:
        detail = await self.booking_query_repo.get_detail_by_reference(
            reference=reference.strip().upper()
        )
        # Someone else's reference looks the same as an unknown one
        if not detail or (not is_admin and detail.booking.user_id != user_id):
            raise BookingNotFoundError(reference)
        return detail
