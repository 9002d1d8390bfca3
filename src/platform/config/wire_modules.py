"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.cinema.app.command import (
    cancel_booking_use_case,
    checkout_use_case,
    clear_audit_logs_use_case,
    confirm_payment_use_case,
    delete_showtime_use_case,
    login_use_case,
    manage_movie_use_case,
    manage_theater_use_case,
    manage_user_use_case,
    password_reset_use_case,
    pay_booking_use_case,
    register_user_use_case,
    reserve_seats_use_case,
    schedule_showtime_use_case,
    update_booking_status_use_case,
    update_showtime_use_case,
    user_profile_use_case,
)
from src.service.cinema.app.query import (
    get_available_seats_use_case,
    get_booking_use_case,
    get_dashboard_stats_use_case,
    list_audit_logs_use_case,
    list_bookings_use_case,
    list_movies_use_case,
    list_showtimes_use_case,
    list_theaters_use_case,
    quote_total_use_case,
    user_query_use_case,
)
from src.service.cinema.driving_adapter.http_controller import user_controller


WIRE_MODULES: list[ModuleType] = [
    # Booking
    reserve_seats_use_case,
    checkout_use_case,
    confirm_payment_use_case,
    pay_booking_use_case,
    cancel_booking_use_case,
    update_booking_status_use_case,
    get_booking_use_case,
    list_bookings_use_case,
    get_available_seats_use_case,
    quote_total_use_case,
    # Catalog
    schedule_showtime_use_case,
    update_showtime_use_case,
    delete_showtime_use_case,
    list_showtimes_use_case,
    manage_movie_use_case,
    list_movies_use_case,
    manage_theater_use_case,
    list_theaters_use_case,
    # Users
    register_user_use_case,
    login_use_case,
    password_reset_use_case,
    user_profile_use_case,
    manage_user_use_case,
    user_query_use_case,
    user_controller,
    # Admin
    get_dashboard_stats_use_case,
    list_audit_logs_use_case,
    clear_audit_logs_use_case,
]
