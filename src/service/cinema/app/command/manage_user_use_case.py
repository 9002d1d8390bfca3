from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, DomainError, ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.cinema.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.domain.exception.booking_exceptions import UserNotFoundError


class ManageUserUseCase:
    """Admin user management"""

    def __init__(
        self,
        *,
        user_query_repo: IUserQueryRepo,
        user_command_repo: IUserCommandRepo,
        booking_query_repo: IBookingQueryRepo,
        audit_logger: AuditLogger,
    ) -> None:
        self.user_query_repo = user_query_repo
        self.user_command_repo = user_command_repo
        self.booking_query_repo = booking_query_repo
        self.audit_logger = audit_logger

    @classmethod
    @inject
    def depends(
        cls,
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        audit_logger: AuditLogger = Depends(Provide[Container.audit_logger]),
    ) -> Self:
        return cls(
            user_query_repo=user_query_repo,
            user_command_repo=user_command_repo,
            booking_query_repo=booking_query_repo,
            audit_logger=audit_logger,
        )

    @Logger.io
    async def update_role(self, *, user_id: int, role: str, admin_id: int) -> UserEntity:
        new_role = UserEntity.validate_role(role)
        user_entity = await self.user_query_repo.get_by_id(user_id)
        if not user_entity:
            raise UserNotFoundError(user_id)
        if user_id == admin_id and new_role != user_entity.role:
            raise DomainError('You cannot remove your own admin role')

        user_entity.role = new_role
        updated = await self.user_command_repo.update(user_entity)
        await self.audit_logger.record(
            action=f'Updated role for user ID: {user_id}',
            category=LogCategory.ADMIN,
            user_id=admin_id,
            details={'role': new_role.value},
        )
        return updated

    @Logger.io
    async def delete_user(self, *, user_id: int, admin_id: int) -> None:
        user_entity = await self.user_query_repo.get_by_id(user_id)
        if not user_entity:
            raise UserNotFoundError(user_id)
        if user_entity.is_admin:
            raise ForbiddenError('Admin accounts cannot be deleted')

        # Bookings keep their owner for history
        count = await self.booking_query_repo.count_by_user(user_id=user_id)
        if count:
            raise ConflictError(f'Cannot delete user - {count} booking(s) exist.')

        await self.user_command_repo.delete(user_id)
        await self.audit_logger.record(
            action=f'Deleted user ID: {user_id}',
            category=LogCategory.ADMIN,
            user_id=admin_id,
            details={'email': user_entity.email},
        )
