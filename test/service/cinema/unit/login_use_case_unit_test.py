"""
Unit tests for LoginUseCase

Test Focus:
1. Failed attempts are counted per client IP and report what is left
2. The attempt that reaches the limit locks the IP, later attempts report minutes remaining
3. Unverified accounts cannot log in
4. Remember-me tokens are issued as `<user_id>:<token>` and rotated on restore
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

from pydantic import SecretStr
import pytest

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import ForbiddenError, LoginError, TooManyRequestsError
from src.service.cinema.app.command.login_use_case import LoginUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity


IP = '203.0.113.7'


@pytest.mark.unit
class TestLogin:
    @pytest.fixture
    def user(self) -> UserEntity:
        return UserEntity(
            id=2, email='buyer@test.com', name='Buyer', hashed_password='hashed', is_verified=True
        )

    @pytest.fixture
    def user_query_repo(self, user: UserEntity) -> AsyncMock:
        repo = AsyncMock()
        repo.get_by_email = AsyncMock(return_value=user)
        repo.get_by_id = AsyncMock(return_value=user)
        return repo

    @pytest.fixture
    def login_attempt_repo(self) -> AsyncMock:
        repo = AsyncMock()
        repo.count_since = AsyncMock(return_value=0)
        return repo

    @pytest.fixture
    def password_hasher(self) -> MagicMock:
        hasher = MagicMock()
        hasher.verify_password = MagicMock(return_value=True)
        hasher.hash_password = MagicMock(return_value='token-hash')
        return hasher

    @pytest.fixture
    def use_case(
        self,
        user_query_repo: AsyncMock,
        login_attempt_repo: AsyncMock,
        password_hasher: MagicMock,
        audit_logger: AsyncMock,
    ) -> LoginUseCase:
        return LoginUseCase(
            user_query_repo=user_query_repo,
            user_command_repo=AsyncMock(),
            login_attempt_repo=login_attempt_repo,
            password_hasher=password_hasher,
            audit_logger=audit_logger,
        )

    async def test_successful_login_clears_attempts(
        self, use_case: LoginUseCase, login_attempt_repo: AsyncMock
    ) -> None:
        result = await use_case.login(
            email='Buyer@Test.com ', password=SecretStr('P@ssw0rd'), ip_address=IP
        )

        assert result.user.id == 2
        assert result.remember_cookie is None
        login_attempt_repo.clear.assert_awaited_once_with(ip_address=IP)

    async def test_wrong_password_reports_remaining_attempts(
        self,
        use_case: LoginUseCase,
        password_hasher: MagicMock,
        login_attempt_repo: AsyncMock,
    ) -> None:
        password_hasher.verify_password = MagicMock(return_value=False)
        # Before the attempt: 2 failures; after recording: 3
        login_attempt_repo.count_since = AsyncMock(side_effect=[2, 3])

        with pytest.raises(LoginError) as exc_info:
            await use_case.login(email='buyer@test.com', password=SecretStr('nope'), ip_address=IP)

        remaining = settings.MAX_LOGIN_ATTEMPTS - 3
        assert exc_info.value.message == (
            f'Invalid email or password. {remaining} attempts remaining.'
        )
        login_attempt_repo.record_failure.assert_awaited_once_with(
            ip_address=IP, email='buyer@test.com'
        )

    async def test_unknown_email_counts_as_failure(
        self,
        use_case: LoginUseCase,
        user_query_repo: AsyncMock,
        login_attempt_repo: AsyncMock,
    ) -> None:
        user_query_repo.get_by_email = AsyncMock(return_value=None)
        login_attempt_repo.count_since = AsyncMock(side_effect=[0, 1])

        with pytest.raises(LoginError):
            await use_case.login(email='ghost@test.com', password=SecretStr('x'), ip_address=IP)
        login_attempt_repo.record_failure.assert_awaited_once()

    async def test_last_allowed_failure_locks_the_ip(
        self,
        use_case: LoginUseCase,
        password_hasher: MagicMock,
        login_attempt_repo: AsyncMock,
    ) -> None:
        password_hasher.verify_password = MagicMock(return_value=False)
        login_attempt_repo.count_since = AsyncMock(
            side_effect=[settings.MAX_LOGIN_ATTEMPTS - 1, settings.MAX_LOGIN_ATTEMPTS]
        )

        with pytest.raises(TooManyRequestsError, match='Account locked'):
            await use_case.login(email='buyer@test.com', password=SecretStr('nope'), ip_address=IP)

    async def test_locked_ip_is_refused_before_password_check(
        self,
        use_case: LoginUseCase,
        password_hasher: MagicMock,
        login_attempt_repo: AsyncMock,
    ) -> None:
        """
        Given: the IP hit the limit 10 minutes ago
        When: the correct password is sent
        Then: 429 with the minutes left in the lockout window
        """
        login_attempt_repo.count_since = AsyncMock(return_value=settings.MAX_LOGIN_ATTEMPTS)
        login_attempt_repo.latest_attempt_at = AsyncMock(
            return_value=datetime.now(timezone.utc) - timedelta(minutes=10)
        )

        with pytest.raises(TooManyRequestsError) as exc_info:
            await use_case.login(
                email='buyer@test.com', password=SecretStr('P@ssw0rd'), ip_address=IP
            )

        expected_minutes = settings.LOCKOUT_SECONDS // 60 - 10
        assert f'try again in {expected_minutes} minutes' in exc_info.value.message
        password_hasher.verify_password.assert_not_called()

    async def test_unverified_account(self, use_case: LoginUseCase, user: UserEntity) -> None:
        user.is_verified = False
        with pytest.raises(ForbiddenError, match='verify your email'):
            await use_case.login(
                email='buyer@test.com', password=SecretStr('P@ssw0rd'), ip_address=IP
            )

    async def test_remember_me_issues_cookie_value(
        self, use_case: LoginUseCase, user: UserEntity
    ) -> None:
        result = await use_case.login(
            email='buyer@test.com', password=SecretStr('P@ssw0rd'), ip_address=IP, remember=True
        )

        user_id, _, token = (result.remember_cookie or '').partition(':')
        assert user_id == '2'
        assert len(token) == 64
        assert user.remember_token_hash == 'token-hash'

    async def test_restore_session_rotates_token(
        self, use_case: LoginUseCase, user: UserEntity
    ) -> None:
        user.set_remember_token(token_hash='old-hash', expire_days=30)

        result = await use_case.restore_session(remember_cookie='2:' + 'a' * 64)

        assert result is not None
        assert result.remember_cookie != '2:' + 'a' * 64
        assert user.remember_token_hash == 'token-hash'

    async def test_restore_session_rejects_garbage(self, use_case: LoginUseCase) -> None:
        assert await use_case.restore_session(remember_cookie='not-a-cookie') is None
