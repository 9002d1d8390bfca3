from typing import List

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.cinema.app.command.checkout_use_case import CheckoutUseCase
from src.service.cinema.app.command.pay_booking_use_case import PayBookingUseCase
from src.service.cinema.app.command.reserve_seats_use_case import ReserveSeatsUseCase
from src.service.cinema.app.query.get_booking_use_case import GetBookingUseCase
from src.service.cinema.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import (
    RoleAuthStrategy,
    get_current_user,
)
from src.service.cinema.driving_adapter.http_controller.schema.booking_schema import (
    BookingDetailResponse,
    BookingResponse,
    CheckoutRequest,
    ConfirmPaymentRequest,
    ReserveSeatsRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('/my_booking', response_model=List[BookingDetailResponse])
@Logger.io
async def list_my_bookings(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingDetailResponse]:
    details = await use_case.list_user_bookings(user_id=current_user.id or 0)
    return [BookingDetailResponse.from_detail(detail) for detail in details]


@router.post('', response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def reserve_seats(
    request: ReserveSeatsRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ReserveSeatsUseCase = Depends(ReserveSeatsUseCase.depends),
) -> BookingResponse:
    """Hold seats as a pending booking; pay later through /{booking_id}/confirm."""
    with tracer.start_as_current_span('controller.reserve_seats') as span:
        span.set_attribute('showtime_id', request.showtime_id)
        span.set_attribute('user_id', current_user.id or 0)

        booking = await use_case.execute(
            user_id=current_user.id or 0,
            showtime_id=request.showtime_id,
            seat_ids=request.seat_ids,
            quoted_amount=request.quoted_total,
        )
        span.set_attribute('booking.reference', booking.reference)
        return BookingResponse.from_entity(booking)


@router.post('/checkout', response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def checkout(
    request: CheckoutRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CheckoutUseCase = Depends(CheckoutUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(
        user_id=current_user.id or 0,
        showtime_id=request.showtime_id,
        seat_ids=request.seat_ids,
        quoted_total=request.quoted_total,
        payment_token=request.payment_token,
    )
    return BookingResponse.from_entity(booking)


@router.get('/reference/{reference}', response_model=BookingDetailResponse)
@Logger.io
async def get_booking_by_reference(
    reference: str,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingDetailResponse:
    detail = await use_case.get_by_reference(
        reference=reference,
        user_id=current_user.id or 0,
        is_admin=RoleAuthStrategy.is_admin(current_user),
    )
    return BookingDetailResponse.from_detail(detail)


@router.get('/{booking_id}', response_model=BookingDetailResponse)
@Logger.io
async def get_booking(
    booking_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingDetailResponse:
    detail = await use_case.get_booking(
        booking_id=booking_id,
        user_id=current_user.id or 0,
        is_admin=RoleAuthStrategy.is_admin(current_user),
    )
    return BookingDetailResponse.from_detail(detail)


@router.post('/{booking_id}/confirm', response_model=BookingResponse)
@Logger.io
async def confirm_booking(
    booking_id: int,
    request: ConfirmPaymentRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: PayBookingUseCase = Depends(PayBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(
        booking_id=booking_id,
        user_id=current_user.id or 0,
        payment_token=request.payment_token,
    )
    return BookingResponse.from_entity(booking)


@router.post('/{booking_id}/cancel', response_model=BookingResponse)
@Logger.io
async def cancel_booking(
    booking_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(
        booking_id=booking_id,
        actor_id=current_user.id or 0,
        is_admin=RoleAuthStrategy.is_admin(current_user),
    )
    return BookingResponse.from_entity(booking)
