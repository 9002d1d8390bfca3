"""
Account registration and email verification
"""

from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.constant.route_constant import USER_VERIFY_EMAIL
from src.platform.exception.exceptions import ConflictError, DomainError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_email_sender import IEmailSender
from src.service.cinema.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.cinema.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.entity.user_entity import UserEntity, UserRole
from src.service.cinema.domain.enum.log_category import LogCategory


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        user_command_repo: IUserCommandRepo,
        user_query_repo: IUserQueryRepo,
        password_hasher: IPasswordHasher,
        email_sender: IEmailSender,
        audit_logger: AuditLogger,
    ) -> None:
        self.user_command_repo = user_command_repo
        self.user_query_repo = user_query_repo
        self.password_hasher = password_hasher
        self.email_sender = email_sender
        self.audit_logger = audit_logger

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
        email_sender: IEmailSender = Depends(Provide[Container.email_sender]),
        audit_logger: AuditLogger = Depends(Provide[Container.audit_logger]),
    ) -> Self:
        return cls(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=password_hasher,
            email_sender=email_sender,
            audit_logger=audit_logger,
        )

    @Logger.io
    async def register(self, *, email: str, password: SecretStr, name: str) -> UserEntity:
        email = email.strip().lower()
        if await self.user_query_repo.exists_by_email(email):
            raise ConflictError('Email already registered')

        user_entity = UserEntity(email=email, name=name.strip(), role=UserRole.USER)
        user_entity.set_password(password, self.password_hasher)
        token = user_entity.issue_verification_token(
            expire_hours=settings.VERIFICATION_TOKEN_EXPIRE_HOURS
        )
        created = await self.user_command_repo.create(user_entity)

        await self.email_sender.send(
            to=created.email,
            subject=f'Verify your {settings.PROJECT_NAME} account',
            body=(
                f'Hello {created.name},\n\n'
                f'Please verify your email address:\n'
                f'{settings.SITE_URL}{USER_VERIFY_EMAIL}?token={token}\n\n'
                f'This link expires in {settings.VERIFICATION_TOKEN_EXPIRE_HOURS} hours.'
            ),
        )
        Logger.base.info(f'👤 [REGISTER] User {created.id} registered')
        await self.audit_logger.record(
            action='User registered',
            category=LogCategory.AUTH,
            user_id=created.id,
            details={'email': created.email},
        )
        return created

    @Logger.io
    async def verify_email(self, *, token: str) -> UserEntity:
        user_entity = await self.user_query_repo.get_by_verification_token(token)
        if not user_entity:
            raise DomainError('Invalid or already used verification link')

        user_entity.verify_email(token=token)
        verified = await self.user_command_repo.update(user_entity)
        await self.audit_logger.record(
            action='Email verified', category=LogCategory.AUTH, user_id=verified.id
        )
        return verified
