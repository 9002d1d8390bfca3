from datetime import date
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_audit_log_repo import IAuditLogRepo
from src.service.cinema.domain.entity.audit_log_entity import AuditLog
from src.service.cinema.domain.enum.log_category import LogCategory


class ListAuditLogsUseCase:
    def __init__(self, *, audit_log_repo: IAuditLogRepo) -> None:
        self.audit_log_repo = audit_log_repo

    @classmethod
    @inject
    def depends(
        cls, audit_log_repo: IAuditLogRepo = Depends(Provide[Container.audit_log_repo])
    ) -> Self:
        return cls(audit_log_repo=audit_log_repo)

    @Logger.io
    async def execute(
        self,
        *,
        category: Optional[LogCategory] = None,
        user_id: Optional[int] = None,
        log_date: Optional[date] = None,
        search: Optional[str] = None,
    ) -> List[AuditLog]:
        return await self.audit_log_repo.list_logs(
            category=category,
            user_id=user_id,
            log_date=log_date,
            search=search.strip() if search else None,
            limit=settings.AUDIT_LOG_LIST_LIMIT,
        )
