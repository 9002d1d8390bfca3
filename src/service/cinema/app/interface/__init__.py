"""Application layer interfaces (Ports)"""

from src.service.cinema.app.interface.i_admin_report_query_repo import IAdminReportQueryRepo
from src.service.cinema.app.interface.i_audit_log_repo import IAuditLogRepo
from src.service.cinema.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema.app.interface.i_email_sender import IEmailSender
from src.service.cinema.app.interface.i_login_attempt_repo import ILoginAttemptRepo
from src.service.cinema.app.interface.i_movie_repo import IMovieRepo
from src.service.cinema.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema.app.interface.i_payment_gateway import IPaymentGateway, PaymentResult
from src.service.cinema.app.interface.i_showtime_command_repo import IShowtimeCommandRepo
from src.service.cinema.app.interface.i_showtime_query_repo import IShowtimeQueryRepo
from src.service.cinema.app.interface.i_theater_repo import ITheaterRepo
from src.service.cinema.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.cinema.app.interface.i_user_query_repo import IUserQueryRepo

__all__ = [
    'IAdminReportQueryRepo',
    'IAuditLogRepo',
    'IBookingCommandRepo',
    'IBookingQueryRepo',
    'IEmailSender',
    'ILoginAttemptRepo',
    'IMovieRepo',
    'IPasswordHasher',
    'IPaymentGateway',
    'IShowtimeCommandRepo',
    'IShowtimeQueryRepo',
    'ITheaterRepo',
    'IUserCommandRepo',
    'IUserQueryRepo',
    'PaymentResult',
]
