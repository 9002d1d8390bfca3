from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.constant.route_constant import USER_RESET_PASSWORD
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_email_sender import IEmailSender
from src.service.cinema.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.cinema.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.enum.log_category import LogCategory


class PasswordResetUseCase:
    def __init__(
        self,
        *,
        user_query_repo: IUserQueryRepo,
        user_command_repo: IUserCommandRepo,
        password_hasher: IPasswordHasher,
        email_sender: IEmailSender,
        audit_logger: AuditLogger,
    ) -> None:
        self.user_query_repo = user_query_repo
        self.user_command_repo = user_command_repo
        self.password_hasher = password_hasher
        self.email_sender = email_sender
        self.audit_logger = audit_logger

    @classmethod
    @inject
    def depends(
        cls,
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
        email_sender: IEmailSender = Depends(Provide[Container.email_sender]),
        audit_logger: AuditLogger = Depends(Provide[Container.audit_logger]),
    ) -> Self:
        return cls(
            user_query_repo=user_query_repo,
            user_command_repo=user_command_repo,
            password_hasher=password_hasher,
            email_sender=email_sender,
            audit_logger=audit_logger,
        )

    @Logger.io
    async def request_reset(self, *, email: str) -> None:
        """Issue a reset link when the account exists. Silent otherwise."""
        user_entity = await self.user_query_repo.get_by_email(email.strip().lower())
        if not user_entity:
            Logger.base.info('🔒 [RESET] Reset requested for unknown email')
            return

        token = user_entity.issue_reset_token(
            expire_hours=settings.RESET_PASSWORD_TOKEN_EXPIRE_HOURS
        )
        await self.user_command_repo.update(user_entity)
        await self.email_sender.send(
            to=user_entity.email,
            subject=f'{settings.PROJECT_NAME} password reset',
            body=(
                f'Hello {user_entity.name},\n\n'
                f'Reset your password here:\n'
                f'{settings.SITE_URL}{USER_RESET_PASSWORD}?token={token}\n\n'
                f'This link expires in {settings.RESET_PASSWORD_TOKEN_EXPIRE_HOURS} hour(s). '
                'If you did not ask for it, ignore this email.'
            ),
        )
        await self.audit_logger.record(
            action='Password reset requested', category=LogCategory.AUTH, user_id=user_entity.id
        )

    @Logger.io
    async def reset_password(self, *, token: str, new_password: SecretStr) -> None:
        user_entity = await self.user_query_repo.get_by_reset_token(token)
        if not user_entity:
            raise DomainError('Invalid or expired reset link')

        user_entity.validate_reset_token(token=token)
        user_entity.set_password(new_password, self.password_hasher)
        user_entity.clear_reset_token()
        user_entity.clear_remember_token()
        await self.user_command_repo.update(user_entity)

        await self.audit_logger.record(
            action='Password reset', category=LogCategory.AUTH, user_id=user_entity.id
        )
