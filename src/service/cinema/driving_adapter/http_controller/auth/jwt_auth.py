"""
Session token service

The session is a short-lived JWT in an httponly cookie. Every authenticated request
re-issues it, so the expiry behaves as an idle timeout.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from fastapi import HTTPException, Response, status
import jwt

from src.platform.config.core_setting import settings
from src.service.cinema.domain.entity.user_entity import UserEntity, UserRole


SESSION_COOKIE = 'cinemaauth'
REMEMBER_COOKIE = 'remember_me'


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def create_jwt_token(self, user_entity: UserEntity) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_entity.id),
            'exp': now + timedelta(minutes=self.token_expire_minutes),
            'iat': now,
            'user_id': user_entity.id,
            'email': user_entity.email,
            'name': user_entity.name,
            'role': user_entity.role,
            'is_verified': user_entity.is_verified,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail='Session expired. Please log in again.',
            )
        except jwt.PyJWTError:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid token')

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        if not token:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED, detail='Not authenticated'
            )

        payload = self.decode_jwt_token(token)

        user_id = payload.get('user_id')
        email = payload.get('email')
        name = payload.get('name')
        role = payload.get('role')

        if not user_id or not email or name is None or not role:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid token')

        # Rebuild UserEntity from JWT payload (no DB query)
        return UserEntity(
            id=user_id,
            email=email,
            name=name,
            role=UserRole(role),
            is_verified=bool(payload.get('is_verified', True)),
        )

    def set_session_cookie(self, response: Response, user_entity: UserEntity) -> None:
        response.set_cookie(
            key=SESSION_COOKIE,
            value=self.create_jwt_token(user_entity),
            max_age=self.token_expire_minutes * 60,
            httponly=True,
            samesite='lax',
            secure=settings.COOKIE_SECURE,
        )

    @staticmethod
    def set_remember_cookie(response: Response, value: str) -> None:
        response.set_cookie(
            key=REMEMBER_COOKIE,
            value=value,
            max_age=settings.REMEMBER_ME_DAYS * 24 * 60 * 60,
            httponly=True,
            samesite='lax',
            secure=settings.COOKIE_SECURE,
        )

    @staticmethod
    def clear_cookies(response: Response) -> None:
        response.delete_cookie(key=SESSION_COOKIE)
        response.delete_cookie(key=REMEMBER_COOKIE)
