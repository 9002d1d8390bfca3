from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_theater_repo import ITheaterRepo
from src.service.cinema.domain.entity.theater_entity import Theater
from src.service.cinema.domain.exception.booking_exceptions import TheaterNotFoundError


class ListTheatersUseCase:
    def __init__(self, *, theater_repo: ITheaterRepo) -> None:
        self.theater_repo = theater_repo

    @classmethod
    @inject
    def depends(
        cls, theater_repo: ITheaterRepo = Depends(Provide[Container.theater_repo])
    ) -> Self:
        return cls(theater_repo=theater_repo)

    @Logger.io
    async def list_theaters(self, *, active_only: bool = True) -> List[Theater]:
        return await self.theater_repo.list_theaters(active_only=active_only)

    @Logger.io
    async def get_theater(self, *, theater_id: int) -> Theater:
        theater = await self.theater_repo.get_by_id(theater_id=theater_id)
        if not theater:
            raise TheaterNotFoundError(theater_id)
        return theater
