from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.cinema.app.command.clear_audit_logs_use_case import ClearAuditLogsUseCase
from src.service.cinema.app.command.manage_user_use_case import ManageUserUseCase
from src.service.cinema.app.command.update_booking_status_use_case import (
    UpdateBookingStatusUseCase,
)
from src.service.cinema.app.query.get_dashboard_stats_use_case import GetDashboardStatsUseCase
from src.service.cinema.app.query.list_audit_logs_use_case import ListAuditLogsUseCase
from src.service.cinema.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.cinema.app.query.user_query_use_case import UserQueryUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.cinema.driving_adapter.http_controller.schema.admin_schema import (
    AuditLogResponse,
    ClearLogsResponse,
    DashboardStatsResponse,
)
from src.service.cinema.driving_adapter.http_controller.schema.booking_schema import (
    BookingDetailResponse,
    BookingResponse,
    BookingStatusUpdateRequest,
)
from src.service.cinema.driving_adapter.http_controller.schema.user_schema import (
    UserResponse,
    UserRoleUpdateRequest,
)


# Every route here is admin-only
router = APIRouter(dependencies=[Depends(require_admin)])


@router.get('/dashboard', response_model=DashboardStatsResponse)
@Logger.io
async def get_dashboard(
    use_case: GetDashboardStatsUseCase = Depends(GetDashboardStatsUseCase.depends),
) -> DashboardStatsResponse:
    return DashboardStatsResponse.from_entity(await use_case.execute())


# ============================ Bookings ============================


@router.get('/booking', response_model=List[BookingDetailResponse])
@Logger.io
async def list_bookings(
    booking_status: Optional[BookingStatus] = None,
    booking_date: Optional[date] = None,
    search: Optional[str] = None,
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingDetailResponse]:
    details = await use_case.list_all_bookings(
        status=booking_status, booking_date=booking_date, search=search
    )
    return [BookingDetailResponse.from_detail(detail) for detail in details]


@router.patch('/booking/{booking_id}/status', response_model=BookingResponse)
@Logger.io
async def update_booking_status(
    booking_id: int,
    request: BookingStatusUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateBookingStatusUseCase = Depends(UpdateBookingStatusUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(
        booking_id=booking_id, status=request.status, admin_id=current_user.id or 0
    )
    return BookingResponse.from_entity(booking)


@router.post('/booking/{booking_id}/cancel', response_model=BookingResponse)
@Logger.io
async def cancel_booking(
    booking_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(
        booking_id=booking_id, actor_id=current_user.id or 0, is_admin=True
    )
    return BookingResponse.from_entity(booking)


# ============================ Users ============================


@router.get('/user', response_model=List[UserResponse])
@Logger.io
async def list_users(
    use_case: UserQueryUseCase = Depends(UserQueryUseCase.depends),
) -> List[UserResponse]:
    return [UserResponse.from_entity(user) for user in await use_case.list_users()]


@router.patch('/user/{user_id}/role', response_model=UserResponse)
@Logger.io
async def update_user_role(
    user_id: int,
    request: UserRoleUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: ManageUserUseCase = Depends(ManageUserUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.update_role(
        user_id=user_id, role=request.role, admin_id=current_user.id or 0
    )
    return UserResponse.from_entity(user_entity)


@router.delete('/user/{user_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_user(
    user_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: ManageUserUseCase = Depends(ManageUserUseCase.depends),
) -> None:
    await use_case.delete_user(user_id=user_id, admin_id=current_user.id or 0)


# ============================ Audit logs ============================


@router.get('/log', response_model=List[AuditLogResponse])
@Logger.io
async def list_logs(
    category: Optional[LogCategory] = None,
    user_id: Optional[int] = None,
    log_date: Optional[date] = None,
    search: Optional[str] = None,
    use_case: ListAuditLogsUseCase = Depends(ListAuditLogsUseCase.depends),
) -> List[AuditLogResponse]:
    entries = await use_case.execute(
        category=category, user_id=user_id, log_date=log_date, search=search
    )
    return [AuditLogResponse.from_entity(entry) for entry in entries]


@router.delete('/log', response_model=ClearLogsResponse)
@Logger.io
async def clear_logs(
    older_than_days: int = 30,
    current_user: UserEntity = Depends(require_admin),
    use_case: ClearAuditLogsUseCase = Depends(ClearAuditLogsUseCase.depends),
) -> ClearLogsResponse:
    deleted = await use_case.execute(
        older_than_days=older_than_days, admin_id=current_user.id or 0
    )
    return ClearLogsResponse(deleted=deleted)
