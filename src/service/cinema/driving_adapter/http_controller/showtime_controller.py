from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.delete_showtime_use_case import DeleteShowtimeUseCase
from src.service.cinema.app.command.schedule_showtime_use_case import ScheduleShowtimeUseCase
from src.service.cinema.app.command.update_showtime_use_case import UpdateShowtimeUseCase
from src.service.cinema.app.query.get_available_seats_use_case import GetAvailableSeatsUseCase
from src.service.cinema.app.query.list_showtimes_use_case import ListShowtimesUseCase
from src.service.cinema.app.query.quote_total_use_case import QuoteTotalUseCase
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.cinema.driving_adapter.http_controller.schema.catalog_schema import (
    QuoteRequest,
    QuoteResponse,
    SeatMapResponse,
    ShowtimeCreatedResponse,
    ShowtimeCreateRequest,
    ShowtimeResponse,
    ShowtimeUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


def _created_response(showtime: Showtime) -> ShowtimeCreatedResponse:
    return ShowtimeCreatedResponse(
        id=showtime.id or 0,
        movie_id=showtime.movie_id,
        theater_id=showtime.theater_id,
        show_date=showtime.show_date,
        show_time=showtime.show_time,
        price=showtime.price,
        is_active=showtime.is_active,
    )


@router.get('', response_model=List[ShowtimeResponse])
@Logger.io
async def list_showtimes(
    show_date: Optional[date] = None,
    movie_id: Optional[int] = None,
    theater_id: Optional[int] = None,
    current_user: UserEntity = Depends(require_admin),
    use_case: ListShowtimesUseCase = Depends(ListShowtimesUseCase.depends),
) -> List[ShowtimeResponse]:
    details = await use_case.list_all(show_date=show_date, movie_id=movie_id, theater_id=theater_id)
    return [ShowtimeResponse.from_detail(detail) for detail in details]


@router.get('/{showtime_id}', response_model=ShowtimeResponse)
@Logger.io
async def get_showtime(
    showtime_id: int,
    use_case: GetAvailableSeatsUseCase = Depends(GetAvailableSeatsUseCase.depends),
) -> ShowtimeResponse:
    seat_map = await use_case.get_seat_map(showtime_id=showtime_id)
    return ShowtimeResponse.from_detail(seat_map.showtime)


@router.get('/{showtime_id}/seats', response_model=SeatMapResponse)
@Logger.io
async def get_seat_map(
    showtime_id: int,
    use_case: GetAvailableSeatsUseCase = Depends(GetAvailableSeatsUseCase.depends),
) -> SeatMapResponse:
    seat_map = await use_case.get_seat_map(showtime_id=showtime_id)
    return SeatMapResponse(
        showtime=ShowtimeResponse.from_detail(seat_map.showtime),
        all_seats=seat_map.all_seats,
        booked=seat_map.booked,
        available=seat_map.available,
    )


@router.post('/{showtime_id}/quote', response_model=QuoteResponse)
@Logger.io
async def quote_total(
    showtime_id: int,
    request: QuoteRequest,
    use_case: QuoteTotalUseCase = Depends(QuoteTotalUseCase.depends),
) -> QuoteResponse:
    quote = await use_case.execute(showtime_id=showtime_id, seat_ids=request.seat_ids)
    return QuoteResponse(
        seat_count=quote.seat_count,
        unit_price=quote.unit_price,
        booking_fee=quote.booking_fee,
        total=quote.total,
    )


# ============================ Admin ============================


@router.post('', response_model=ShowtimeCreatedResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def schedule_showtime(
    request: ShowtimeCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: ScheduleShowtimeUseCase = Depends(ScheduleShowtimeUseCase.depends),
) -> ShowtimeCreatedResponse:
    with tracer.start_as_current_span('controller.schedule_showtime') as span:
        span.set_attribute('movie_id', request.movie_id)
        span.set_attribute('theater_id', request.theater_id)

        showtime = await use_case.execute(
            movie_id=request.movie_id,
            theater_id=request.theater_id,
            show_date=request.show_date,
            show_time=request.show_time,
            price=request.price,
            admin_id=current_user.id or 0,
        )
        return _created_response(showtime)


@router.patch('/{showtime_id}', response_model=ShowtimeCreatedResponse)
@Logger.io
async def update_showtime(
    showtime_id: int,
    request: ShowtimeUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateShowtimeUseCase = Depends(UpdateShowtimeUseCase.depends),
) -> ShowtimeCreatedResponse:
    showtime = await use_case.execute(
        showtime_id=showtime_id,
        admin_id=current_user.id or 0,
        price=request.price,
        is_active=request.is_active,
    )
    return _created_response(showtime)


@router.delete('/{showtime_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_showtime(
    showtime_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: DeleteShowtimeUseCase = Depends(DeleteShowtimeUseCase.depends),
) -> None:
    await use_case.execute(showtime_id=showtime_id, admin_id=current_user.id or 0)
