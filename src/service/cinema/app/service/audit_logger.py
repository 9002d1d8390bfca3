"""
Audit Logger

Appends audit entries outside the business transaction. A failed append is logged
and dropped; it never undoes the booking or account change it describes.
"""

from typing import Any, Dict, Optional

from src.platform.context.request_context import get_request_context
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_audit_log_repo import IAuditLogRepo
from src.service.cinema.domain.entity.audit_log_entity import AuditLog
from src.service.cinema.domain.enum.log_category import LogCategory


class AuditLogger:
    def __init__(self, *, audit_log_repo: IAuditLogRepo) -> None:
        self.audit_log_repo = audit_log_repo

    async def record(
        self,
        *,
        action: str,
        category: LogCategory,
        user_id: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = get_request_context()
        entry = AuditLog(
            action=action,
            category=category,
            user_id=user_id,
            details=details or {},
            ip_address=context.ip_address,
            user_agent=context.user_agent,
        )
        try:
            await self.audit_log_repo.create(entry=entry)
        except Exception as e:
            Logger.base.error(f'❌ [Audit] Failed to record "{action}" ({category}): {e}')
