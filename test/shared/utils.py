from typing import Any

from fastapi.testclient import TestClient

from src.platform.constant.route_constant import USER_LOGIN
from test.util_constant import DEFAULT_PASSWORD


def assert_response_status(response: Any, expected_status: int, message: str | None = None) -> None:
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def login_user(client: TestClient, email: str, password: str = DEFAULT_PASSWORD) -> Any:
    """Log in and keep the session cookie on the client."""
    client.cookies.clear()
    login_response = client.post(USER_LOGIN, json={'email': email, 'password': password})
    assert_response_status(login_response, 200, f'Login failed: {login_response.text}')
    return login_response
