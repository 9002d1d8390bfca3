from abc import ABC, abstractmethod
from datetime import datetime

from src.service.cinema.domain.entity.dashboard_stats_entity import DashboardStats


class IAdminReportQueryRepo(ABC):
    @abstractmethod
    async def get_dashboard_stats(
        self, *, month_start: datetime, recent_limit: int = 5
    ) -> DashboardStats:
        pass
