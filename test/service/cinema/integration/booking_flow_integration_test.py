"""
Booking flow against a real database through the HTTP API

Showtime fixture: 5 rows x 8 seats, 12.99 per seat, 1.50 booking fee, tomorrow 19:00.
"""

from typing import Any

from fastapi.testclient import TestClient
import pytest

from src.platform.constant.route_constant import (
    BOOKING_BASE,
    BOOKING_CHECKOUT,
    BOOKING_MY,
    booking_by_reference,
    booking_cancel,
    booking_confirm,
    booking_detail,
    showtime_quote,
    showtime_seats,
)
from test.shared.utils import assert_response_status, login_user
from test.util_constant import (
    ANOTHER_BUYER_EMAIL,
    DECLINED_PAYMENT_TOKEN,
    PAYMENT_TOKEN,
    TEST_BUYER_EMAIL,
    TWO_SEAT_TOTAL,
)


def _reserve(client: TestClient, showtime_id: int, seats: list[str], total: str) -> Any:
    return client.post(
        BOOKING_BASE,
        json={'showtime_id': showtime_id, 'seat_ids': seats, 'quoted_total': total},
    )


@pytest.mark.integration
class TestReserveSeats:
    def test_quote_reserve_and_seat_map(
        self,
        client: TestClient,
        buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
    ) -> None:
        """
        Given: a fresh 40-seat showtime at 12.99
        When: the buyer quotes and reserves C3 + C4
        Then: total is 27.48, booking is pending, 38 seats remain
        """
        showtime_id = bookable_showtime['showtime_id']
        login_user(client, TEST_BUYER_EMAIL)

        quote = client.post(showtime_quote(showtime_id), json={'seat_ids': ['C3', 'C4']})
        assert_response_status(quote, 200)
        assert quote.json()['total'] == str(TWO_SEAT_TOTAL)

        response = _reserve(client, showtime_id, ['C3', 'C4'], quote.json()['total'])
        assert_response_status(response, 201)
        booking = response.json()
        assert booking['status'] == 'pending'
        assert booking['seat_ids'] == ['C3', 'C4']
        assert booking['total_amount'] == '27.48'
        assert booking['user_id'] == buyer_user['id']
        assert booking['reference'].startswith('CM-')

        seat_map = client.get(showtime_seats(showtime_id))
        assert_response_status(seat_map, 200)
        body = seat_map.json()
        assert len(body['all_seats']) == 40
        assert body['booked'] == ['C3', 'C4']
        assert len(body['available']) == 38
        assert body['showtime']['available_seats'] == 38

    def test_second_user_gets_conflict_naming_taken_seat(
        self,
        client: TestClient,
        buyer_user: dict[str, Any],
        another_buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
    ) -> None:
        showtime_id = bookable_showtime['showtime_id']
        login_user(client, TEST_BUYER_EMAIL)
        assert_response_status(_reserve(client, showtime_id, ['C3', 'C4'], '27.48'), 201)

        login_user(client, ANOTHER_BUYER_EMAIL)
        response = _reserve(client, showtime_id, ['C4', 'C5'], '27.48')

        assert_response_status(response, 409)
        assert response.json()['seats'] == ['C4']
        assert 'C4' in response.json()['detail']

        seat_map = client.get(showtime_seats(showtime_id)).json()
        assert seat_map['booked'] == ['C3', 'C4']

    def test_stale_quote_is_rejected(
        self,
        client: TestClient,
        buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
    ) -> None:
        login_user(client, TEST_BUYER_EMAIL)
        response = _reserve(client, bookable_showtime['showtime_id'], ['C3', 'C4'], '20.00')

        assert_response_status(response, 400)
        assert response.json()['detail'] == 'Price verification failed.'

    def test_seat_outside_theater_is_rejected(
        self,
        client: TestClient,
        buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
    ) -> None:
        login_user(client, TEST_BUYER_EMAIL)
        response = _reserve(client, bookable_showtime['showtime_id'], ['F1'], '14.49')
        assert_response_status(response, 400)

    def test_reservation_requires_login(
        self, client: TestClient, bookable_showtime: dict[str, Any]
    ) -> None:
        response = _reserve(client, bookable_showtime['showtime_id'], ['A1'], '14.49')
        assert_response_status(response, 401)


@pytest.mark.integration
class TestPayAndCancel:
    def test_confirm_payment_is_idempotent(
        self,
        client: TestClient,
        buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
    ) -> None:
        login_user(client, TEST_BUYER_EMAIL)
        booking = _reserve(client, bookable_showtime['showtime_id'], ['C3', 'C4'], '27.48').json()

        first = client.post(booking_confirm(booking['id']), json={'payment_token': PAYMENT_TOKEN})
        assert_response_status(first, 200)
        assert first.json()['status'] == 'completed'
        assert first.json()['payment_ref'].startswith('ch_demo_')

        second = client.post(booking_confirm(booking['id']), json={'payment_token': PAYMENT_TOKEN})
        assert_response_status(second, 200)
        assert second.json()['payment_ref'] == first.json()['payment_ref']

    def test_declined_payment_leaves_booking_pending(
        self,
        client: TestClient,
        buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
    ) -> None:
        login_user(client, TEST_BUYER_EMAIL)
        booking = _reserve(client, bookable_showtime['showtime_id'], ['A1'], '14.49').json()

        response = client.post(
            booking_confirm(booking['id']), json={'payment_token': DECLINED_PAYMENT_TOKEN}
        )

        assert_response_status(response, 402)
        assert client.get(booking_detail(booking['id'])).json()['status'] == 'pending'

    def test_checkout_books_completed(
        self,
        client: TestClient,
        buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
    ) -> None:
        showtime_id = bookable_showtime['showtime_id']
        login_user(client, TEST_BUYER_EMAIL)

        response = client.post(
            BOOKING_CHECKOUT,
            json={
                'showtime_id': showtime_id,
                'seat_ids': ['E7', 'E8'],
                'quoted_total': '27.48',
                'payment_token': PAYMENT_TOKEN,
            },
        )

        assert_response_status(response, 201)
        assert response.json()['status'] == 'completed'
        assert client.get(showtime_seats(showtime_id)).json()['booked'] == ['E7', 'E8']

    def test_declined_checkout_books_nothing(
        self,
        client: TestClient,
        buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
    ) -> None:
        showtime_id = bookable_showtime['showtime_id']
        login_user(client, TEST_BUYER_EMAIL)

        response = client.post(
            BOOKING_CHECKOUT,
            json={
                'showtime_id': showtime_id,
                'seat_ids': ['E7', 'E8'],
                'quoted_total': '27.48',
                'payment_token': DECLINED_PAYMENT_TOKEN,
            },
        )

        assert_response_status(response, 402)
        assert client.get(showtime_seats(showtime_id)).json()['booked'] == []

    def test_cancel_releases_seats(
        self,
        client: TestClient,
        buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
    ) -> None:
        showtime_id = bookable_showtime['showtime_id']
        login_user(client, TEST_BUYER_EMAIL)
        booking = _reserve(client, showtime_id, ['C3', 'C4'], '27.48').json()

        response = client.post(booking_cancel(booking['id']))
        assert_response_status(response, 200)
        assert response.json()['status'] == 'cancelled'

        # Second cancel is a no-op
        assert_response_status(client.post(booking_cancel(booking['id'])), 200)
        assert len(client.get(showtime_seats(showtime_id)).json()['available']) == 40

        # Released seats can be booked again
        assert_response_status(_reserve(client, showtime_id, ['C3', 'C4'], '27.48'), 201)

        # History still shows how many seats the cancelled booking held
        history = client.get(booking_detail(booking['id'])).json()
        assert history['status'] == 'cancelled'
        assert history['seat_ids'] == []
        assert history['seat_count'] == 2

    def test_paid_booking_cannot_be_cancelled_by_owner(
        self,
        client: TestClient,
        buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
    ) -> None:
        login_user(client, TEST_BUYER_EMAIL)
        booking = _reserve(client, bookable_showtime['showtime_id'], ['A1'], '14.49').json()
        client.post(booking_confirm(booking['id']), json={'payment_token': PAYMENT_TOKEN})

        assert_response_status(client.post(booking_cancel(booking['id'])), 400)


@pytest.mark.integration
class TestBookingQueries:
    def test_my_bookings_and_lookup_by_reference(
        self,
        client: TestClient,
        buyer_user: dict[str, Any],
        another_buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
    ) -> None:
        login_user(client, TEST_BUYER_EMAIL)
        booking = _reserve(client, bookable_showtime['showtime_id'], ['B1'], '14.49').json()

        mine = client.get(BOOKING_MY)
        assert_response_status(mine, 200)
        assert [b['reference'] for b in mine.json()] == [booking['reference']]
        assert mine.json()[0]['movie_title'] == 'The Long Night'
        assert mine.json()[0]['theater_name'] == 'Hall 1'

        by_ref = client.get(booking_by_reference(booking['reference']))
        assert_response_status(by_ref, 200)
        assert by_ref.json()['id'] == booking['id']

        # Another user's reference looks like it does not exist
        login_user(client, ANOTHER_BUYER_EMAIL)
        assert_response_status(client.get(booking_by_reference(booking['reference'])), 404)
        assert_response_status(client.get(booking_detail(booking['id'])), 403)
