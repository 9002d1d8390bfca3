"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.db_setting import Database
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.driven_adapter.email.log_file_email_sender_impl import (
    LogFileEmailSenderImpl,
)
from src.service.cinema.driven_adapter.payment.mock_payment_gateway_impl import (
    MockPaymentGatewayImpl,
)
from src.service.cinema.driven_adapter.repo.admin_report_query_repo_impl import (
    AdminReportQueryRepoImpl,
)
from src.service.cinema.driven_adapter.repo.audit_log_repo_impl import AuditLogRepoImpl
from src.service.cinema.driven_adapter.repo.booking_query_repo_impl import BookingQueryRepoImpl
from src.service.cinema.driven_adapter.repo.login_attempt_repo_impl import LoginAttemptRepoImpl
from src.service.cinema.driven_adapter.repo.movie_repo_impl import MovieRepoImpl
from src.service.cinema.driven_adapter.repo.showtime_command_repo_impl import (
    ShowtimeCommandRepoImpl,
)
from src.service.cinema.driven_adapter.repo.showtime_query_repo_impl import (
    ShowtimeQueryRepoImpl,
)
from src.service.cinema.driven_adapter.repo.theater_repo_impl import TheaterRepoImpl
from src.service.cinema.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl
from src.service.cinema.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.cinema.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager with settings from core_setting)
    database = providers.Singleton(Database)

    # Repositories (stateless - use session_factory per call; a UoW injects its own session)
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )
    showtime_command_repo = providers.Singleton(
        ShowtimeCommandRepoImpl, session_factory=database.provided.session
    )
    showtime_query_repo = providers.Singleton(
        ShowtimeQueryRepoImpl, session_factory=database.provided.session
    )
    movie_repo = providers.Singleton(MovieRepoImpl, session_factory=database.provided.session)
    theater_repo = providers.Singleton(TheaterRepoImpl, session_factory=database.provided.session)
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl, session_factory=database.provided.session
    )
    login_attempt_repo = providers.Singleton(
        LoginAttemptRepoImpl, session_factory=database.provided.session
    )
    audit_log_repo = providers.Singleton(
        AuditLogRepoImpl, session_factory=database.provided.session
    )
    admin_report_query_repo = providers.Singleton(
        AdminReportQueryRepoImpl, session_factory=database.provided.session
    )

    # Outbound adapters
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    payment_gateway = providers.Singleton(MockPaymentGatewayImpl)
    email_sender = providers.Singleton(LogFileEmailSenderImpl)

    # Best-effort audit trail (own session, never part of the business transaction)
    audit_logger = providers.Singleton(AuditLogger, audit_log_repo=audit_log_repo)

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
