"""
Session Use Cases

Credential check with per-IP lockout, remember-me token issue/restore, logout.
"""

from datetime import datetime, timedelta, timezone
import math
import secrets
from typing import Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import LoginError, TooManyRequestsError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_login_attempt_repo import ILoginAttemptRepo
from src.service.cinema.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.cinema.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.domain.enum.log_category import LogCategory


UNKNOWN_IP = 'unknown'


@attrs.define
class LoginResult:
    user: UserEntity
    remember_cookie: Optional[str] = attrs.field(default=None, repr=False)


class LoginUseCase:
    def __init__(
        self,
        *,
        user_query_repo: IUserQueryRepo,
        user_command_repo: IUserCommandRepo,
        login_attempt_repo: ILoginAttemptRepo,
        password_hasher: IPasswordHasher,
        audit_logger: AuditLogger,
    ) -> None:
        self.user_query_repo = user_query_repo
        self.user_command_repo = user_command_repo
        self.login_attempt_repo = login_attempt_repo
        self.password_hasher = password_hasher
        self.audit_logger = audit_logger

    @classmethod
    @inject
    def depends(
        cls,
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        login_attempt_repo: ILoginAttemptRepo = Depends(Provide[Container.login_attempt_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
        audit_logger: AuditLogger = Depends(Provide[Container.audit_logger]),
    ) -> Self:
        return cls(
            user_query_repo=user_query_repo,
            user_command_repo=user_command_repo,
            login_attempt_repo=login_attempt_repo,
            password_hasher=password_hasher,
            audit_logger=audit_logger,
        )

    async def _check_lockout(self, *, ip_address: str) -> None:
        now = datetime.now(timezone.utc)
        window = timedelta(seconds=settings.LOCKOUT_SECONDS)
        attempts = await self.login_attempt_repo.count_since(
            ip_address=ip_address, since=now - window
        )
        if attempts < settings.MAX_LOGIN_ATTEMPTS:
            return

        latest = await self.login_attempt_repo.latest_attempt_at(ip_address=ip_address)
        remaining_seconds = ((latest + window) - now).total_seconds() if latest else 0
        minutes = max(1, math.ceil(remaining_seconds / 60))
        raise TooManyRequestsError(
            f'Too many failed attempts. Please try again in {minutes} minutes.'
        )

    @Logger.io
    async def login(
        self,
        *,
        email: str,
        password: SecretStr,
        ip_address: Optional[str],
        remember: bool = False,
    ) -> LoginResult:
        ip_address = ip_address or UNKNOWN_IP
        email = email.strip().lower()
        await self._check_lockout(ip_address=ip_address)

        user_entity = await self.user_query_repo.get_by_email(email)
        valid = bool(user_entity) and self.password_hasher.verify_password(
            plain_password=password, hashed_password=user_entity.hashed_password
        )
        if not valid:
            await self._record_failure(ip_address=ip_address, email=email)

        user_entity = UserEntity.validate_user_exists(user_entity)
        user_entity.validate_can_login()

        await self.login_attempt_repo.clear(ip_address=ip_address)

        remember_cookie = None
        if remember:
            remember_cookie = await self._issue_remember_token(user_entity)

        Logger.base.info(f'🔑 [LOGIN] User {user_entity.id} logged in')
        await self.audit_logger.record(
            action='User logged in',
            category=LogCategory.AUTH,
            user_id=user_entity.id,
            details={'remember_me': remember},
        )
        return LoginResult(user=user_entity, remember_cookie=remember_cookie)

    async def _record_failure(self, *, ip_address: str, email: str) -> None:
        await self.login_attempt_repo.record_failure(ip_address=ip_address, email=email)
        attempts = await self.login_attempt_repo.count_since(
            ip_address=ip_address,
            since=datetime.now(timezone.utc) - timedelta(seconds=settings.LOCKOUT_SECONDS),
        )
        await self.audit_logger.record(
            action='Failed login attempt',
            category=LogCategory.AUTH,
            details={'email': email, 'attempts': attempts},
        )

        remaining = settings.MAX_LOGIN_ATTEMPTS - attempts
        if remaining <= 0:
            raise TooManyRequestsError(
                'Account locked due to too many failed attempts. '
                f'Try again in {settings.LOCKOUT_SECONDS // 60} minutes.'
            )
        raise LoginError(f'Invalid email or password. {remaining} attempts remaining.')

    async def _issue_remember_token(self, user_entity: UserEntity) -> str:
        token = secrets.token_hex(32)
        user_entity.set_remember_token(
            token_hash=self.password_hasher.hash_password(plain_password=SecretStr(token)),
            expire_days=settings.REMEMBER_ME_DAYS,
        )
        await self.user_command_repo.update(user_entity)
        return f'{user_entity.id}:{token}'

    @Logger.io
    async def restore_session(self, *, remember_cookie: str) -> Optional[LoginResult]:
        """
        Re-authenticate from a `<user_id>:<token>` remember-me cookie.

        Returns None for anything that does not check out; the token is rotated on success.
        """
        user_id, _, token = remember_cookie.partition(':')
        if not user_id.isdigit() or not token:
            return None

        user_entity = await self.user_query_repo.get_by_id(int(user_id))
        if not user_entity or not user_entity.has_valid_remember_token():
            return None
        if not self.password_hasher.verify_password(
            plain_password=SecretStr(token),
            hashed_password=user_entity.remember_token_hash or '',
        ):
            return None

        remember_cookie = await self._issue_remember_token(user_entity)
        await self.audit_logger.record(
            action='Session restored from remember-me cookie',
            category=LogCategory.AUTH,
            user_id=user_entity.id,
        )
        return LoginResult(user=user_entity, remember_cookie=remember_cookie)

    @Logger.io
    async def logout(self, *, user_id: int) -> None:
        user_entity = await self.user_query_repo.get_by_id(user_id)
        if user_entity and user_entity.remember_token_hash:
            user_entity.clear_remember_token()
            await self.user_command_repo.update(user_entity)

        await self.audit_logger.record(
            action='User logged out', category=LogCategory.AUTH, user_id=user_id
        )
