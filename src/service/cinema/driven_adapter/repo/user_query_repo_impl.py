from typing import List, Optional

from sqlalchemy import func, select

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driven_adapter.model.user_model import UserModel
from src.service.cinema.driven_adapter.repo.model_mapper import user_to_entity
from src.service.cinema.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


class UserQueryRepoImpl(SessionScopedRepo, IUserQueryRepo):
    async def _get_one(self, *criteria) -> Optional[UserEntity]:
        async with self._get_session() as session:
            result = await session.execute(select(UserModel).where(*criteria))
            user_model = result.scalar_one_or_none()
            return user_to_entity(user_model) if user_model else None

    @Logger.io
    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        return await self._get_one(func.lower(UserModel.email) == email.strip().lower())

    @Logger.io
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        return await self._get_one(UserModel.id == user_id)

    @Logger.io
    async def exists_by_email(self, email: str) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                select(UserModel.id).where(func.lower(UserModel.email) == email.strip().lower())
            )
            return result.scalar_one_or_none() is not None

    @Logger.io
    async def get_by_verification_token(self, token: str) -> Optional[UserEntity]:
        return await self._get_one(UserModel.verification_token == token)

    @Logger.io
    async def get_by_reset_token(self, token: str) -> Optional[UserEntity]:
        return await self._get_one(UserModel.reset_token == token)

    @Logger.io
    async def list_users(self) -> List[UserEntity]:
        async with self._get_session() as session:
            result = await session.execute(select(UserModel).order_by(UserModel.created_at.desc()))
            return [user_to_entity(u) for u in result.scalars().all()]
