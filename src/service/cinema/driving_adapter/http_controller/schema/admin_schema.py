from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from src.service.cinema.domain.entity.audit_log_entity import AuditLog
from src.service.cinema.domain.entity.dashboard_stats_entity import DashboardStats
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.driving_adapter.http_controller.schema.booking_schema import (
    BookingDetailResponse,
)


class DashboardStatsResponse(BaseModel):
    total_users: int
    total_movies: int
    total_bookings: int
    total_revenue: Decimal
    bookings_this_month: int
    recent_bookings: List[BookingDetailResponse]

    @classmethod
    def from_entity(cls, stats: DashboardStats) -> 'DashboardStatsResponse':
        return cls(
            total_users=stats.total_users,
            total_movies=stats.total_movies,
            total_bookings=stats.total_bookings,
            total_revenue=stats.total_revenue,
            bookings_this_month=stats.bookings_this_month,
            recent_bookings=[
                BookingDetailResponse.from_detail(detail) for detail in stats.recent_bookings
            ],
        )


class AuditLogResponse(BaseModel):
    id: int
    action: str
    category: LogCategory
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    details: Dict[str, Any]
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, entry: AuditLog) -> 'AuditLogResponse':
        return cls(
            id=entry.id or 0,
            action=entry.action,
            category=entry.category,
            user_id=entry.user_id,
            user_name=entry.user_name,
            details=entry.details,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            created_at=entry.created_at,
        )


class ClearLogsResponse(BaseModel):
    deleted: int

    model_config = {'json_schema_extra': {'example': {'deleted': 128}}}
