from abc import ABC, abstractmethod
from typing import List

from src.service.cinema.domain.entity.theater_entity import Theater


class ITheaterRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, theater_id: int) -> Theater | None:
        pass

    @abstractmethod
    async def get_for_update(self, *, theater_id: int) -> Theater | None:
        """Lock the theater row; serializes scheduling within one theater."""
        pass

    @abstractmethod
    async def list_theaters(self, *, active_only: bool = True) -> List[Theater]:
        pass

    @abstractmethod
    async def create(self, *, theater: Theater) -> Theater:
        pass

    @abstractmethod
    async def update(self, *, theater: Theater) -> Theater:
        pass
