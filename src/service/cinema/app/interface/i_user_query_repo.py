from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.cinema.domain.entity.user_entity import UserEntity


class IUserQueryRepo(ABC):
    """User query repository - read operations"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        pass

    @abstractmethod
    async def get_by_verification_token(self, token: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def get_by_reset_token(self, token: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def list_users(self) -> List[UserEntity]:
        pass
