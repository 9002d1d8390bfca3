from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import Date, cast, delete, select

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_audit_log_repo import IAuditLogRepo
from src.service.cinema.domain.entity.audit_log_entity import AuditLog
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.driven_adapter.model.audit_log_model import AuditLogModel
from src.service.cinema.driven_adapter.model.user_model import UserModel
from src.service.cinema.driven_adapter.repo.model_mapper import audit_log_to_entity
from src.service.cinema.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


class AuditLogRepoImpl(SessionScopedRepo, IAuditLogRepo):
    @Logger.io(truncate_content=True)
    async def create(self, *, entry: AuditLog) -> AuditLog:
        async with self._get_session() as session:
            db_log = AuditLogModel(
                user_id=entry.user_id,
                action=entry.action[:255],
                category=entry.category.value,
                details=entry.details,
                ip_address=entry.ip_address,
                user_agent=(entry.user_agent or '')[:255] or None,
            )
            session.add(db_log)
            await self._save(session)
            await session.refresh(db_log)
            return audit_log_to_entity(db_log)

    @Logger.io(truncate_content=True)
    async def list_logs(
        self,
        *,
        category: Optional[LogCategory] = None,
        user_id: Optional[int] = None,
        log_date: Optional[date] = None,
        search: Optional[str] = None,
        limit: int = 500,
    ) -> List[AuditLog]:
        query = select(AuditLogModel, UserModel.name.label('user_name')).outerjoin(
            UserModel, UserModel.id == AuditLogModel.user_id
        )
        if category:
            query = query.where(AuditLogModel.category == category.value)
        if user_id:
            query = query.where(AuditLogModel.user_id == user_id)
        if log_date:
            query = query.where(cast(AuditLogModel.created_at, Date) == log_date)
        if search:
            query = query.where(AuditLogModel.action.ilike(f'%{search}%'))

        async with self._get_session() as session:
            result = await session.execute(
                query.order_by(AuditLogModel.created_at.desc(), AuditLogModel.id.desc()).limit(
                    limit
                )
            )
            return [audit_log_to_entity(row[0], user_name=row.user_name) for row in result.all()]

    @Logger.io
    async def delete_older_than(self, *, cutoff: datetime) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                delete(AuditLogModel).where(AuditLogModel.created_at < cutoff)
            )
            await self._save(session)
            return result.rowcount or 0
