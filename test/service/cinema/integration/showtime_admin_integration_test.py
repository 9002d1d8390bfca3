"""
Admin catalog operations: scheduling conflicts and the showtime delete guard
"""

from datetime import time
from typing import Any, Callable

from fastapi.testclient import TestClient
import pytest

from src.platform.constant.route_constant import (
    ADMIN_DASHBOARD,
    ADMIN_LOGS,
    BOOKING_BASE,
    MOVIE_BASE,
    SHOWTIME_BASE,
    THEATER_BASE,
    admin_booking_cancel,
    booking_cancel,
    showtime_detail,
)
from test.shared.utils import assert_response_status, login_user
from test.util_constant import TEST_ADMIN_EMAIL, TEST_BUYER_EMAIL, tomorrow


def _schedule(client: TestClient, ids: dict[str, Any], start: str) -> Any:
    return client.post(
        SHOWTIME_BASE,
        json={
            'movie_id': ids['movie_id'],
            'theater_id': ids['theater_id'],
            'show_date': tomorrow().isoformat(),
            'show_time': start,
            'price': '12.99',
        },
    )


@pytest.mark.integration
class TestScheduleShowtime:
    def test_overlap_is_rejected_and_later_slot_accepted(
        self,
        client: TestClient,
        admin_user: dict[str, Any],
        create_showtime: Callable[..., dict[str, Any]],
    ) -> None:
        """
        Given: an 18:00 screening of a 120 minute movie (20 minute buffer)
        When: the admin schedules 19:00 then 20:30 in the same theater
        Then: 19:00 conflicts, 20:30 is created
        """
        ids = create_showtime(show_time=time(18, 0))
        login_user(client, TEST_ADMIN_EMAIL)

        conflict = _schedule(client, ids, '19:00:00')
        assert_response_status(conflict, 409)
        assert 'Scheduling conflict with showtime' in conflict.json()['detail']

        created = _schedule(client, ids, '20:30:00')
        assert_response_status(created, 201)
        assert created.json()['show_time'] == '20:30:00'
        assert created.json()['price'] == '12.99'

    def test_non_admin_cannot_schedule(
        self,
        client: TestClient,
        buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
    ) -> None:
        login_user(client, TEST_BUYER_EMAIL)
        assert_response_status(_schedule(client, bookable_showtime, '10:00:00'), 403)

    def test_admin_creates_movie_and_theater(
        self, client: TestClient, admin_user: dict[str, Any]
    ) -> None:
        login_user(client, TEST_ADMIN_EMAIL)

        movie = client.post(
            MOVIE_BASE,
            json={
                'title': 'Short Feature',
                'duration_minutes': 95,
                'release_date': '2025-03-01',
                'status': 'now_showing',
            },
        )
        assert_response_status(movie, 201)
        assert movie.json()['genres'] == []

        theater = client.post(
            THEATER_BASE, json={'name': 'Hall 2', 'rows_count': 6, 'seats_per_row': 10}
        )
        assert_response_status(theater, 201)
        assert theater.json()['total_seats'] == 60


@pytest.mark.integration
class TestDeleteShowtime:
    def test_delete_guard(
        self,
        client: TestClient,
        admin_user: dict[str, Any],
        buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
    ) -> None:
        """
        Given: a showtime with one booking
        When: the admin deletes it, before and after the booking is cancelled
        Then: both attempts fail with 409, cancelled bookings still count
        """
        showtime_id = bookable_showtime['showtime_id']
        login_user(client, TEST_BUYER_EMAIL)
        booking = client.post(
            BOOKING_BASE,
            json={'showtime_id': showtime_id, 'seat_ids': ['A1'], 'quoted_total': '14.49'},
        ).json()

        login_user(client, TEST_ADMIN_EMAIL)
        response = client.delete(showtime_detail(showtime_id))
        assert_response_status(response, 409)
        assert response.json()['detail'] == 'Cannot delete showtime - 1 booking(s) exist.'

        assert_response_status(client.post(admin_booking_cancel(booking['id'])), 200)
        assert_response_status(client.delete(showtime_detail(showtime_id)), 409)
        assert_response_status(client.get(showtime_detail(showtime_id)), 200)

    def test_unbooked_showtime_is_deleted(
        self,
        client: TestClient,
        admin_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
    ) -> None:
        showtime_id = bookable_showtime['showtime_id']
        login_user(client, TEST_ADMIN_EMAIL)

        assert_response_status(client.delete(showtime_detail(showtime_id)), 204)
        assert_response_status(client.get(showtime_detail(showtime_id)), 404)


@pytest.mark.integration
class TestAdminConsole:
    def test_dashboard_and_audit_trail(
        self,
        client: TestClient,
        admin_user: dict[str, Any],
        buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
    ) -> None:
        login_user(client, TEST_BUYER_EMAIL)
        booking = client.post(
            BOOKING_BASE,
            json={
                'showtime_id': bookable_showtime['showtime_id'],
                'seat_ids': ['C3', 'C4'],
                'quoted_total': '27.48',
            },
        ).json()
        client.post(booking_cancel(booking['id']))

        login_user(client, TEST_ADMIN_EMAIL)
        dashboard = client.get(ADMIN_DASHBOARD)
        assert_response_status(dashboard, 200)
        assert dashboard.json()['total_bookings'] == 1

        logs = client.get(ADMIN_LOGS, params={'category': 'booking'})
        assert_response_status(logs, 200)
        actions = [entry['action'] for entry in logs.json()]
        assert f'Cancelled booking {booking["reference"]}' in actions
        assert 'Booked 2 seat(s) for showtime 1' in actions

    def test_admin_routes_require_admin(
        self, client: TestClient, buyer_user: dict[str, Any]
    ) -> None:
        login_user(client, TEST_BUYER_EMAIL)
        assert_response_status(client.get(ADMIN_DASHBOARD), 403)
