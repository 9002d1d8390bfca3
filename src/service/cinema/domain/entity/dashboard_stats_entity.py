from decimal import Decimal
from typing import List

import attrs

from src.service.cinema.domain.entity.booking_entity import BookingDetail


@attrs.define
class DashboardStats:
    total_users: int
    total_movies: int
    total_bookings: int
    total_revenue: Decimal
    bookings_this_month: int
    recent_bookings: List[BookingDetail] = attrs.field(factory=list)
