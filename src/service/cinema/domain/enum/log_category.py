from enum import StrEnum


class LogCategory(StrEnum):
    """Audit log categories (action_type)"""

    AUTH = 'auth'
    BOOKING = 'booking'
    PAYMENT = 'payment'
    API = 'api'
    ADMIN = 'admin'
    ERROR = 'error'
