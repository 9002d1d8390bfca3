"""
User API: registration, email verification, login lockout messages and sessions
"""

from typing import Any, Callable

from fastapi.testclient import TestClient
import pytest

from src.platform.constant.route_constant import (
    USER_FORGOT_PASSWORD,
    USER_LOGIN,
    USER_LOGOUT,
    USER_ME,
    USER_REGISTER,
    USER_VERIFY_EMAIL,
)
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import (
    REMEMBER_COOKIE,
    SESSION_COOKIE,
)
from test.shared.utils import assert_response_status, login_user
from test.util_constant import DEFAULT_PASSWORD, TEST_BUYER_EMAIL


NEW_EMAIL = 'new.viewer@example.com'


@pytest.mark.integration
class TestRegistration:
    def test_register_verify_then_login(
        self, client: TestClient, execute_sql_statement: Callable[..., Any]
    ) -> None:
        """
        Given: a new visitor
        When: they register, try to log in, verify, then log in again
        Then: login is refused until the emailed token is used
        """
        response = client.post(
            USER_REGISTER,
            json={'email': NEW_EMAIL, 'password': DEFAULT_PASSWORD, 'name': 'New Viewer'},
        )
        assert_response_status(response, 201)
        assert response.json()['is_verified'] is False
        assert response.json()['role'] == 'user'

        refused = client.post(USER_LOGIN, json={'email': NEW_EMAIL, 'password': DEFAULT_PASSWORD})
        assert_response_status(refused, 403)

        rows = execute_sql_statement(
            'SELECT verification_token FROM "user" WHERE email = :email',
            {'email': NEW_EMAIL},
            fetch=True,
        )
        verified = client.get(USER_VERIFY_EMAIL, params={'token': rows[0]['verification_token']})
        assert_response_status(verified, 200)

        login_user(client, NEW_EMAIL)
        assert client.get(USER_ME).json()['email'] == NEW_EMAIL

    def test_duplicate_email_is_rejected(
        self, client: TestClient, buyer_user: dict[str, Any]
    ) -> None:
        response = client.post(
            USER_REGISTER,
            json={'email': TEST_BUYER_EMAIL, 'password': DEFAULT_PASSWORD, 'name': 'Again'},
        )
        assert_response_status(response, 409)

    def test_unknown_verification_token_is_rejected(self, client: TestClient) -> None:
        assert_response_status(client.get(USER_VERIFY_EMAIL, params={'token': 'nope'}), 400)


@pytest.mark.integration
class TestLogin:
    def test_login_me_logout(self, client: TestClient, buyer_user: dict[str, Any]) -> None:
        response = login_user(client, TEST_BUYER_EMAIL)
        assert SESSION_COOKIE in response.cookies

        me = client.get(USER_ME)
        assert_response_status(me, 200)
        assert me.json()['id'] == buyer_user['id']

        assert_response_status(client.post(USER_LOGOUT), 200)
        client.cookies.clear()
        assert_response_status(client.get(USER_ME), 401)

    def test_wrong_password_reports_remaining_attempts(
        self, client: TestClient, buyer_user: dict[str, Any]
    ) -> None:
        response = client.post(USER_LOGIN, json={'email': TEST_BUYER_EMAIL, 'password': 'wrong'})
        assert_response_status(response, 400)
        assert response.json()['detail'] == 'Invalid email or password. 6 attempts remaining.'

    def test_remember_me_sets_cookie(self, client: TestClient, buyer_user: dict[str, Any]) -> None:
        response = client.post(
            USER_LOGIN,
            json={'email': TEST_BUYER_EMAIL, 'password': DEFAULT_PASSWORD, 'remember_me': True},
        )
        assert_response_status(response, 200)
        assert response.cookies[REMEMBER_COOKIE].startswith(f'{buyer_user["id"]}:')

    def test_forgot_password_does_not_reveal_accounts(self, client: TestClient) -> None:
        response = client.post(USER_FORGOT_PASSWORD, json={'email': 'nobody@example.com'})
        assert_response_status(response, 200)
        assert response.json()['message'] == (
            'If an account exists with this email, a reset link has been sent.'
        )
