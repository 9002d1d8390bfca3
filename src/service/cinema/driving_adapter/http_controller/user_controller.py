from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Cookie, Depends, HTTPException, Request, Response, status

from src.platform.config.di import Container
from src.platform.context.request_context import client_ip
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.login_use_case import LoginUseCase
from src.service.cinema.app.command.password_reset_use_case import PasswordResetUseCase
from src.service.cinema.app.command.register_user_use_case import RegisterUserUseCase
from src.service.cinema.app.command.user_profile_use_case import UserProfileUseCase
from src.service.cinema.app.query.user_query_use_case import UserQueryUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import (
    REMEMBER_COOKIE,
    SESSION_COOKIE,
    JwtAuth,
)
from src.service.cinema.driving_adapter.http_controller.schema.user_schema import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UpdateProfileRequest,
    UserResponse,
)


FORGOT_PASSWORD_MESSAGE = 'If an account exists with this email, a reset link has been sent.'

# === API Router ===

router = APIRouter()


@inject
async def get_current_user(
    response: Response,
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    login_use_case: LoginUseCase = Depends(LoginUseCase.depends),
    token: Optional[str] = Cookie(None, alias=SESSION_COOKIE),
    remember_cookie: Optional[str] = Cookie(None, alias=REMEMBER_COOKIE),
) -> UserEntity:
    """
    Resolve the signed-in user from the session JWT (no DB query).

    A missing or expired session falls back to the remember-me cookie. The session
    cookie is re-issued on every call, so its expiry acts as an idle timeout.
    """
    try:
        user_entity = jwt_auth.get_current_user_info_from_jwt(token)
    except HTTPException:
        if not remember_cookie:
            raise
        result = await login_use_case.restore_session(remember_cookie=remember_cookie)
        if not result:
            raise
        user_entity = result.user
        if result.remember_cookie:
            jwt_auth.set_remember_cookie(response, result.remember_cookie)

    jwt_auth.set_session_cookie(response, user_entity)
    return user_entity


@router.post('', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def register(
    request: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(RegisterUserUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.register(
        email=request.email, password=request.password, name=request.name
    )
    return UserResponse.from_entity(user_entity)


@router.get('/verify', response_model=MessageResponse)
@Logger.io
async def verify_email(
    token: str,
    use_case: RegisterUserUseCase = Depends(RegisterUserUseCase.depends),
) -> MessageResponse:
    await use_case.verify_email(token=token)
    return MessageResponse(message='Email verified. You can now log in.')


@router.post('/login', response_model=UserResponse)
@Logger.io
@inject
async def login(
    http_request: Request,
    response: Response,
    request: LoginRequest,
    use_case: LoginUseCase = Depends(LoginUseCase.depends),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserResponse:
    result = await use_case.login(
        email=request.email,
        password=request.password,
        ip_address=client_ip(http_request),
        remember=request.remember_me,
    )

    jwt_auth.set_session_cookie(response, result.user)
    if result.remember_cookie:
        jwt_auth.set_remember_cookie(response, result.remember_cookie)

    return UserResponse.from_entity(result.user)


@router.post('/logout', response_model=MessageResponse)
@Logger.io
async def logout(
    response: Response,
    current_user: UserEntity = Depends(get_current_user),
    use_case: LoginUseCase = Depends(LoginUseCase.depends),
) -> MessageResponse:
    await use_case.logout(user_id=current_user.id or 0)
    JwtAuth.clear_cookies(response)
    return MessageResponse(message='Logged out')


@router.get('/me', response_model=UserResponse)
@Logger.io
async def get_me(
    current_user: UserEntity = Depends(get_current_user),
    use_case: UserQueryUseCase = Depends(UserQueryUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.get_user_by_id(user_id=current_user.id or 0)
    return UserResponse.from_entity(user_entity)


@router.patch('/me', response_model=UserResponse)
@Logger.io
async def update_me(
    request: UpdateProfileRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: UserProfileUseCase = Depends(UserProfileUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.update_name(user_id=current_user.id or 0, name=request.name)
    return UserResponse.from_entity(user_entity)


@router.post('/me/password', response_model=MessageResponse)
@Logger.io
async def change_password(
    request: ChangePasswordRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: UserProfileUseCase = Depends(UserProfileUseCase.depends),
) -> MessageResponse:
    await use_case.change_password(
        user_id=current_user.id or 0,
        current_password=request.current_password,
        new_password=request.new_password,
    )
    return MessageResponse(message='Password changed')


@router.post('/forgot_password', response_model=MessageResponse)
@Logger.io
async def forgot_password(
    request: ForgotPasswordRequest,
    use_case: PasswordResetUseCase = Depends(PasswordResetUseCase.depends),
) -> MessageResponse:
    await use_case.request_reset(email=request.email)
    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)


@router.post('/reset_password', response_model=MessageResponse)
@Logger.io
async def reset_password(
    request: ResetPasswordRequest,
    use_case: PasswordResetUseCase = Depends(PasswordResetUseCase.depends),
) -> MessageResponse:
    await use_case.reset_password(token=request.token, new_password=request.new_password)
    return MessageResponse(message='Password has been reset. You can now log in.')
