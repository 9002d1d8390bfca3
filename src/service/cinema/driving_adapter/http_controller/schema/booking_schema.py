from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.cinema.domain.entity.booking_entity import Booking, BookingDetail
from src.service.cinema.domain.enum.booking_status import BookingStatus


class ReserveSeatsRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {'showtime_id': 1, 'seat_ids': ['C3', 'C4'], 'quoted_total': 27.48}
        }
    }

    showtime_id: int
    seat_ids: List[str] = Field(..., min_length=1)
    quoted_total: Decimal = Field(..., ge=0)


class CheckoutRequest(ReserveSeatsRequest):
    model_config = {
        'json_schema_extra': {
            'example': {
                'showtime_id': 1,
                'seat_ids': ['C3', 'C4'],
                'quoted_total': 27.48,
                'payment_token': 'tok_visa',
            }
        }
    }

    payment_token: str = Field(..., min_length=1)


class ConfirmPaymentRequest(BaseModel):
    payment_token: str = Field(..., min_length=1)

    model_config = {'json_schema_extra': {'example': {'payment_token': 'tok_visa'}}}


class BookingStatusUpdateRequest(BaseModel):
    status: BookingStatus

    model_config = {'json_schema_extra': {'example': {'status': 'completed'}}}


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': 1,
                'reference': 'CM-3F9A1C07B2',
                'user_id': 2,
                'showtime_id': 1,
                'seat_ids': ['C3', 'C4'],
                'seat_count': 2,
                'total_amount': '27.48',
                'status': 'pending',
                'payment_ref': None,
                'created_at': '2025-01-10T10:30:00Z',
            }
        },
    }

    id: int
    reference: str
    user_id: int
    showtime_id: int
    seat_ids: List[str]
    seat_count: int = 0
    total_amount: Decimal
    status: BookingStatus
    payment_ref: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id or 0,
            reference=booking.reference,
            user_id=booking.user_id,
            showtime_id=booking.showtime_id,
            seat_ids=booking.seat_ids,
            seat_count=booking.seat_count,
            total_amount=booking.total_amount,
            status=booking.status,
            payment_ref=booking.payment_ref,
            created_at=booking.created_at,
        )


class BookingDetailResponse(BookingResponse):
    """Booking with the movie, theater and customer shown on receipts and admin lists"""

    movie_title: str
    theater_name: str
    show_date: date
    show_time: time
    poster_url: Optional[str] = None
    user_email: str = ''
    user_name: str = ''

    @classmethod
    def from_detail(cls, detail: BookingDetail) -> 'BookingDetailResponse':
        return cls(
            **BookingResponse.from_entity(detail.booking).model_dump(),
            movie_title=detail.movie_title,
            theater_name=detail.theater_name,
            show_date=detail.show_date,
            show_time=detail.show_time,
            poster_url=detail.poster_url,
            user_email=detail.user_email,
            user_name=detail.user_name,
        )
