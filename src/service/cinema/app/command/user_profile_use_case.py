from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.cinema.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.domain.exception.booking_exceptions import UserNotFoundError


class UserProfileUseCase:
    """Self-service account changes for the signed-in user."""

    def __init__(
        self,
        *,
        user_query_repo: IUserQueryRepo,
        user_command_repo: IUserCommandRepo,
        password_hasher: IPasswordHasher,
        audit_logger: AuditLogger,
    ) -> None:
        self.user_query_repo = user_query_repo
        self.user_command_repo = user_command_repo
        self.password_hasher = password_hasher
        self.audit_logger = audit_logger

    @classmethod
    @inject
    def depends(
        cls,
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
        audit_logger: AuditLogger = Depends(Provide[Container.audit_logger]),
    ) -> Self:
        return cls(
            user_query_repo=user_query_repo,
            user_command_repo=user_command_repo,
            password_hasher=password_hasher,
            audit_logger=audit_logger,
        )

    async def _load(self, user_id: int) -> UserEntity:
        user_entity = await self.user_query_repo.get_by_id(user_id)
        if not user_entity:
            raise UserNotFoundError(user_id)
        return user_entity

    @Logger.io
    async def update_name(self, *, user_id: int, name: str) -> UserEntity:
        if not name.strip():
            raise DomainError('Name is required')
        user_entity = await self._load(user_id)
        user_entity.name = name.strip()
        updated = await self.user_command_repo.update(user_entity)
        await self.audit_logger.record(
            action='Profile updated', category=LogCategory.AUTH, user_id=user_id
        )
        return updated

    @Logger.io
    async def change_password(
        self, *, user_id: int, current_password: SecretStr, new_password: SecretStr
    ) -> None:
        user_entity = await self._load(user_id)
        if not self.password_hasher.verify_password(
            plain_password=current_password, hashed_password=user_entity.hashed_password
        ):
            raise DomainError('Current password is incorrect')

        user_entity.set_password(new_password, self.password_hasher)
        await self.user_command_repo.update(user_entity)
        await self.audit_logger.record(
            action='Password changed', category=LogCategory.AUTH, user_id=user_id
        )
