from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, select

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_admin_report_query_repo import IAdminReportQueryRepo
from src.service.cinema.domain.entity.dashboard_stats_entity import DashboardStats
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.domain.enum.user_role import UserRole
from src.service.cinema.driven_adapter.model.booking_model import BookingModel
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.user_model import UserModel
from src.service.cinema.driven_adapter.repo.booking_query_repo_impl import booking_detail_query
from src.service.cinema.driven_adapter.repo.model_mapper import booking_row_to_detail
from src.service.cinema.driven_adapter.repo.session_scoped_repo import SessionScopedRepo


class AdminReportQueryRepoImpl(SessionScopedRepo, IAdminReportQueryRepo):
    @Logger.io
    async def get_dashboard_stats(
        self, *, month_start: datetime, recent_limit: int = 5
    ) -> DashboardStats:
        async with self._get_session() as session:
            total_users = (
                await session.execute(
                    select(func.count(UserModel.id)).where(UserModel.role == UserRole.USER.value)
                )
            ).scalar_one()
            total_movies = (await session.execute(select(func.count(MovieModel.id)))).scalar_one()
            total_bookings = (
                await session.execute(select(func.count(BookingModel.id)))
            ).scalar_one()
            total_revenue = (
                await session.execute(
                    select(func.coalesce(func.sum(BookingModel.total_amount), 0)).where(
                        BookingModel.status == BookingStatus.COMPLETED.value
                    )
                )
            ).scalar_one()
            bookings_this_month = (
                await session.execute(
                    select(func.count(BookingModel.id)).where(
                        BookingModel.created_at >= month_start
                    )
                )
            ).scalar_one()
            recent = await session.execute(
                booking_detail_query().order_by(BookingModel.created_at.desc()).limit(recent_limit)
            )

            return DashboardStats(
                total_users=total_users,
                total_movies=total_movies,
                total_bookings=total_bookings,
                total_revenue=Decimal(total_revenue),
                bookings_this_month=bookings_this_month,
                recent_bookings=[booking_row_to_detail(row) for row in recent.all()],
            )
