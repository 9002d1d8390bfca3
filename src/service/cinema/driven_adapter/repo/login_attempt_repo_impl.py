from datetime import datetime
from typing import Optional

from sqlalchemy import delete, func, select

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_login_attempt_repo import ILoginAttemptRepo
from src.service.cinema.driven_adapter.model.login_attempt_model import LoginAttemptModel
from src.service.cinema.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


class LoginAttemptRepoImpl(SessionScopedRepo, ILoginAttemptRepo):
    @Logger.io
    async def record_failure(self, *, ip_address: str, email: Optional[str]) -> None:
        async with self._get_session() as session:
            session.add(LoginAttemptModel(ip_address=ip_address, email=email))
            await self._save(session)

    @Logger.io
    async def count_since(self, *, ip_address: str, since: datetime) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                select(func.count(LoginAttemptModel.id)).where(
                    LoginAttemptModel.ip_address == ip_address,
                    LoginAttemptModel.attempted_at > since,
                )
            )
            return result.scalar_one()

    @Logger.io
    async def latest_attempt_at(self, *, ip_address: str) -> Optional[datetime]:
        async with self._get_session() as session:
            result = await session.execute(
                select(func.max(LoginAttemptModel.attempted_at)).where(
                    LoginAttemptModel.ip_address == ip_address
                )
            )
            return result.scalar_one_or_none()

    @Logger.io
    async def clear(self, *, ip_address: str) -> None:
        async with self._get_session() as session:
            await session.execute(
                delete(LoginAttemptModel).where(LoginAttemptModel.ip_address == ip_address)
            )
            await self._save(session)
