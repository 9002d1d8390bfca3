from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.domain.exception.booking_exceptions import UserNotFoundError
from src.service.cinema.driven_adapter.model.user_model import UserModel
from src.service.cinema.driven_adapter.repo.model_mapper import user_to_entity
from src.service.cinema.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


class UserCommandRepoImpl(SessionScopedRepo, IUserCommandRepo):
    @Logger.io
    async def create(self, user_entity: UserEntity) -> UserEntity:
        async with self._get_session() as session:
            user_model = UserModel(
                email=user_entity.email,
                hashed_password=user_entity.hashed_password,
                name=user_entity.name,
                role=user_entity.role.value,
                is_verified=user_entity.is_verified,
                verification_token=user_entity.verification_token,
                verification_expires_at=user_entity.verification_expires_at,
            )
            try:
                async with session.begin_nested():
                    session.add(user_model)
                    await session.flush()
            except IntegrityError as e:
                raise ConflictError('Email already registered') from e

            await self._save(session)
            await session.refresh(user_model)
            return user_to_entity(user_model)

    @Logger.io
    async def update(self, user_entity: UserEntity) -> UserEntity:
        async with self._get_session() as session:
            user_model = await session.get(UserModel, user_entity.id)
            if not user_model:
                raise UserNotFoundError(user_entity.id or 0)

            user_model.name = user_entity.name
            user_model.hashed_password = user_entity.hashed_password
            user_model.role = user_entity.role.value
            user_model.is_verified = user_entity.is_verified
            user_model.verification_token = user_entity.verification_token
            user_model.verification_expires_at = user_entity.verification_expires_at
            user_model.reset_token = user_entity.reset_token
            user_model.reset_expires_at = user_entity.reset_expires_at
            user_model.remember_token_hash = user_entity.remember_token_hash
            user_model.remember_token_expires_at = user_entity.remember_token_expires_at

            await self._save(session)
            return user_to_entity(user_model)

    @Logger.io
    async def delete(self, user_id: int) -> None:
        async with self._get_session() as session:
            try:
                async with session.begin_nested():
                    await session.execute(delete(UserModel).where(UserModel.id == user_id))
            except IntegrityError as e:
                raise ConflictError('Cannot delete a user who has bookings') from e
            await self._save(session)
