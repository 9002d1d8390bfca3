from abc import ABC, abstractmethod

from src.service.cinema.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    """User command repository - write operations"""

    @abstractmethod
    async def create(self, user_entity: UserEntity) -> UserEntity:
        pass

    @abstractmethod
    async def update(self, user_entity: UserEntity) -> UserEntity:
        pass

    @abstractmethod
    async def delete(self, user_id: int) -> None:
        pass
