from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import List, Optional

from src.service.cinema.domain.entity.audit_log_entity import AuditLog
from src.service.cinema.domain.enum.log_category import LogCategory


class IAuditLogRepo(ABC):
    @abstractmethod
    async def create(self, *, entry: AuditLog) -> AuditLog:
        pass

    @abstractmethod
    async def list_logs(
        self,
        *,
        category: Optional[LogCategory] = None,
        user_id: Optional[int] = None,
        log_date: Optional[date] = None,
        search: Optional[str] = None,
        limit: int = 500,
    ) -> List[AuditLog]:
        """Newest first."""
        pass

    @abstractmethod
    async def delete_older_than(self, *, cutoff: datetime) -> int:
        pass
