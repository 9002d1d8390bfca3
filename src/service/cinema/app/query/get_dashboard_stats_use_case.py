from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_admin_report_query_repo import IAdminReportQueryRepo
from src.service.cinema.domain.entity.dashboard_stats_entity import DashboardStats


class GetDashboardStatsUseCase:
    RECENT_BOOKINGS = 5

    def __init__(self, *, admin_report_query_repo: IAdminReportQueryRepo) -> None:
        self.admin_report_query_repo = admin_report_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        admin_report_query_repo: IAdminReportQueryRepo = Depends(
            Provide[Container.admin_report_query_repo]
        ),
    ) -> Self:
        return cls(admin_report_query_repo=admin_report_query_repo)

    @Logger.io
    async def execute(self) -> DashboardStats:
        month_start = datetime.now(timezone.utc).replace(
            day=1, hour=0, minute=0, second=0, microsecond=0
        )
        return await self.admin_report_query_repo.get_dashboard_stats(
            month_start=month_start, recent_limit=self.RECENT_BOOKINGS
        )
