API_PREFIX = '/api'

# User / account
USER_BASE = f'{API_PREFIX}/user'
USER_REGISTER = USER_BASE
USER_LOGIN = f'{USER_BASE}/login'
USER_LOGOUT = f'{USER_BASE}/logout'
USER_ME = f'{USER_BASE}/me'
USER_VERIFY_EMAIL = f'{USER_BASE}/verify'
USER_FORGOT_PASSWORD = f'{USER_BASE}/forgot_password'
USER_RESET_PASSWORD = f'{USER_BASE}/reset_password'
USER_CHANGE_PASSWORD = f'{USER_BASE}/me/password'

# Catalog
MOVIE_BASE = f'{API_PREFIX}/movie'
MOVIE_SEARCH = f'{MOVIE_BASE}/search'
MOVIE_GENRES = f'{MOVIE_BASE}/genre'
THEATER_BASE = f'{API_PREFIX}/theater'
SHOWTIME_BASE = f'{API_PREFIX}/showtime'

# Booking
BOOKING_BASE = f'{API_PREFIX}/booking'
BOOKING_CHECKOUT = f'{BOOKING_BASE}/checkout'
BOOKING_MY = f'{BOOKING_BASE}/my_booking'

# Admin
ADMIN_BASE = f'{API_PREFIX}/admin'
ADMIN_DASHBOARD = f'{ADMIN_BASE}/dashboard'
ADMIN_BOOKINGS = f'{ADMIN_BASE}/booking'
ADMIN_USERS = f'{ADMIN_BASE}/user'
ADMIN_LOGS = f'{ADMIN_BASE}/log'


def showtime_seats(showtime_id: int) -> str:
    return f'{SHOWTIME_BASE}/{showtime_id}/seats'


def showtime_quote(showtime_id: int) -> str:
    return f'{SHOWTIME_BASE}/{showtime_id}/quote'


def booking_detail(booking_id: int) -> str:
    return f'{BOOKING_BASE}/{booking_id}'


def booking_confirm(booking_id: int) -> str:
    return f'{BOOKING_BASE}/{booking_id}/confirm'


def booking_cancel(booking_id: int) -> str:
    return f'{BOOKING_BASE}/{booking_id}/cancel'


def booking_by_reference(reference: str) -> str:
    return f'{BOOKING_BASE}/reference/{reference}'


def showtime_detail(showtime_id: int) -> str:
    return f'{SHOWTIME_BASE}/{showtime_id}'


def movie_detail(movie_id: int) -> str:
    return f'{MOVIE_BASE}/{movie_id}'


def movie_showtimes(movie_id: int) -> str:
    return f'{MOVIE_BASE}/{movie_id}/showtimes'


def admin_booking_status(booking_id: int) -> str:
    return f'{ADMIN_BOOKINGS}/{booking_id}/status'


def admin_booking_cancel(booking_id: int) -> str:
    return f'{ADMIN_BOOKINGS}/{booking_id}/cancel'


def admin_user_role(user_id: int) -> str:
    return f'{ADMIN_USERS}/{user_id}/role'


def admin_user(user_id: int) -> str:
    return f'{ADMIN_USERS}/{user_id}'
