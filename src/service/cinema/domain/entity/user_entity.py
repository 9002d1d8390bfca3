from datetime import datetime, timedelta, timezone
import secrets
from typing import Optional

import attrs
from pydantic import SecretStr

from src.platform.exception.exceptions import DomainError, ForbiddenError, LoginError
from src.service.cinema.domain.enum.user_role import UserRole


def _new_token() -> str:
    return secrets.token_hex(32)


@attrs.define
class UserEntity:
    email: str = ''
    name: str = ''
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    id: Optional[int] = None
    role: UserRole = UserRole.USER
    is_verified: bool = False
    verification_token: Optional[str] = attrs.field(default=None, repr=False)
    verification_expires_at: Optional[datetime] = None
    reset_token: Optional[str] = attrs.field(default=None, repr=False)
    reset_expires_at: Optional[datetime] = None
    remember_token_hash: Optional[str] = attrs.field(default=None, repr=False)
    remember_token_expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @staticmethod
    def validate_user_exists(user_entity: Optional['UserEntity']) -> 'UserEntity':
        if not user_entity:
            raise LoginError('Invalid email or password')
        return user_entity

    @staticmethod
    def validate_role(role: str) -> UserRole:
        """Validate if the role is valid"""
        valid_roles = [r.value for r in UserRole]
        if role not in valid_roles:
            raise DomainError(f'Invalid role: {role}. Must be one of: {", ".join(valid_roles)}')
        return UserRole(role)

    @staticmethod
    def validate_new_password(password: SecretStr) -> None:
        if len(password.get_secret_value()) < 8:
            raise DomainError('Password must be at least 8 characters long')

    def validate_can_login(self) -> None:
        if not self.is_verified:
            raise ForbiddenError('Please verify your email address before logging in.')

    def set_password(self, plain_password: str | SecretStr, password_hasher) -> None:
        """Set password using provided password hasher"""
        from src.service.cinema.app.interface.i_password_hasher import IPasswordHasher

        if not isinstance(password_hasher, IPasswordHasher):
            raise TypeError('password_hasher must implement PasswordHasher interface')

        secret_password = (
            plain_password if isinstance(plain_password, SecretStr) else SecretStr(plain_password)
        )
        self.validate_new_password(secret_password)
        self.hashed_password = password_hasher.hash_password(plain_password=secret_password)

    def issue_verification_token(self, *, expire_hours: int) -> str:
        self.verification_token = _new_token()
        self.verification_expires_at = datetime.now(timezone.utc) + timedelta(hours=expire_hours)
        return self.verification_token

    def verify_email(self, *, token: str) -> None:
        if self.is_verified or not self.verification_token:
            raise DomainError('Invalid or already used verification link')
        if not secrets.compare_digest(self.verification_token, token):
            raise DomainError('Invalid or already used verification link')
        if self.verification_expires_at and self.verification_expires_at < datetime.now(timezone.utc):
            raise DomainError('Verification link has expired')

        self.is_verified = True
        self.verification_token = None
        self.verification_expires_at = None

    def issue_reset_token(self, *, expire_hours: int) -> str:
        self.reset_token = _new_token()
        self.reset_expires_at = datetime.now(timezone.utc) + timedelta(hours=expire_hours)
        return self.reset_token

    def validate_reset_token(self, *, token: str) -> None:
        if not self.reset_token or not secrets.compare_digest(self.reset_token, token):
            raise DomainError('Invalid or expired reset link')
        if not self.reset_expires_at or self.reset_expires_at < datetime.now(timezone.utc):
            raise DomainError('Invalid or expired reset link')

    def clear_reset_token(self) -> None:
        self.reset_token = None
        self.reset_expires_at = None

    def set_remember_token(self, *, token_hash: str, expire_days: int) -> None:
        self.remember_token_hash = token_hash
        self.remember_token_expires_at = datetime.now(timezone.utc) + timedelta(days=expire_days)

    def clear_remember_token(self) -> None:
        self.remember_token_hash = None
        self.remember_token_expires_at = None

    def has_valid_remember_token(self) -> bool:
        return bool(
            self.remember_token_hash
            and self.remember_token_expires_at
            and self.remember_token_expires_at > datetime.now(timezone.utc)
        )
