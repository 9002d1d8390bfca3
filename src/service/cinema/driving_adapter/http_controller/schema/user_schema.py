"""
User API Schemas - Pydantic models for request/response
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, SecretStr

from src.service.cinema.domain.entity.user_entity import UserEntity, UserRole


class RegisterRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {'email': 'user@example.com', 'password': 'P@ssw0rd', 'name': 'Jane Doe'}
        }
    }

    email: EmailStr
    password: SecretStr = Field(
        ...,
        min_length=8,
        max_length=72,
        description='Password must be 8-72 characters (bcrypt limit)',
    )
    name: str = Field(..., min_length=1, max_length=100)


class LoginRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {'email': 'user@example.com', 'password': 'P@ssw0rd', 'remember_me': True}
        }
    }

    email: EmailStr
    password: SecretStr = Field(..., min_length=1, max_length=72)
    remember_me: bool = False


class UpdateProfileRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class ChangePasswordRequest(BaseModel):
    current_password: SecretStr = Field(..., min_length=1, max_length=72)
    new_password: SecretStr = Field(..., min_length=8, max_length=72)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    new_password: SecretStr = Field(..., min_length=8, max_length=72)


class MessageResponse(BaseModel):
    message: str


class UserResponse(BaseModel):
    """User response schema"""

    model_config = {
        'from_attributes': True,
        'json_schema_extra': {
            'example': {
                'id': 1,
                'email': 'user@example.com',
                'name': 'Jane Doe',
                'role': 'user',
                'is_verified': True,
                'created_at': '2025-01-10T10:30:00Z',
            }
        },
    }

    id: int
    email: str
    name: str
    role: UserRole
    is_verified: bool
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user_entity: UserEntity) -> 'UserResponse':
        return cls(
            id=user_entity.id or 0,
            email=user_entity.email,
            name=user_entity.name,
            role=user_entity.role,
            is_verified=user_entity.is_verified,
            created_at=user_entity.created_at,
        )


class UserRoleUpdateRequest(BaseModel):
    role: str

    model_config = {'json_schema_extra': {'example': {'role': 'admin'}}}
