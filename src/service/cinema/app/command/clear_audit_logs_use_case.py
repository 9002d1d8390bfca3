from datetime import datetime, timedelta, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_audit_log_repo import IAuditLogRepo
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.enum.log_category import LogCategory


class ClearAuditLogsUseCase:
    def __init__(self, *, audit_log_repo: IAuditLogRepo, audit_logger: AuditLogger) -> None:
        self.audit_log_repo = audit_log_repo
        self.audit_logger = audit_logger

    @classmethod
    @inject
    def depends(
        cls,
        audit_log_repo: IAuditLogRepo = Depends(Provide[Container.audit_log_repo]),
        audit_logger: AuditLogger = Depends(Provide[Container.audit_logger]),
    ) -> Self:
        return cls(audit_log_repo=audit_log_repo, audit_logger=audit_logger)

    @Logger.io
    async def execute(self, *, older_than_days: int, admin_id: int) -> int:
        if older_than_days < 1:
            raise DomainError('Retention must be at least 1 day')

        cutoff = datetime.now(timezone.utc) - timedelta(days=older_than_days)
        deleted = await self.audit_log_repo.delete_older_than(cutoff=cutoff)

        Logger.base.info(f'🧹 [AUDIT] Cleared {deleted} entries older than {older_than_days} days')
        await self.audit_logger.record(
            action=f'Cleared {deleted} log entries older than {older_than_days} days',
            category=LogCategory.ADMIN,
            user_id=admin_id,
        )
        return deleted
