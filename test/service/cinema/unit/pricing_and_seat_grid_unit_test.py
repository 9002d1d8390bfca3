from decimal import Decimal

import pytest

from src.service.cinema.domain.exception.booking_exceptions import (
    InvalidSeatError,
    PriceMismatchError,
)
from src.service.cinema.domain.value_object.pricing import PriceQuote
from src.service.cinema.domain.value_object.seat import SeatGrid, SeatId, row_index, row_label


@pytest.mark.unit
class TestPriceQuote:
    def test_two_seats_plus_booking_fee(self) -> None:
        total = PriceQuote.quote_total(
            seat_count=2, price=Decimal('12.99'), booking_fee=Decimal('1.50')
        )
        assert total == Decimal('27.48')

    def test_total_rounds_half_up_to_cents(self) -> None:
        total = PriceQuote.quote_total(
            seat_count=3, price=Decimal('0.335'), booking_fee=Decimal('0')
        )
        assert total == Decimal('1.01')

    def test_quote_total_property_matches_static_helper(self) -> None:
        quote = PriceQuote(seat_count=4, unit_price=Decimal('9.50'), booking_fee=Decimal('1.50'))
        assert quote.total == Decimal('39.50')

    def test_verify_accepts_a_cent_of_drift(self) -> None:
        PriceQuote.verify(
            quoted=Decimal('27.47'), expected=Decimal('27.48'), tolerance=Decimal('0.01')
        )

    def test_verify_rejects_a_stale_quote(self) -> None:
        """
        Given: the client quoted an old price
        When: the server recomputes the total
        Then: PriceMismatchError, carrying only the quoted amount
        """
        with pytest.raises(PriceMismatchError, match='Price verification failed') as exc_info:
            PriceQuote.verify(
                quoted=Decimal('25.00'), expected=Decimal('27.48'), tolerance=Decimal('0.01')
            )
        assert exc_info.value.quoted == Decimal('25.00')
        assert exc_info.value.status_code == 400


@pytest.mark.unit
class TestSeatGrid:
    @pytest.fixture
    def grid(self) -> SeatGrid:
        return SeatGrid(rows=5, seats_per_row=8)

    def test_row_labels_roll_over_after_z(self) -> None:
        assert row_label(0) == 'A'
        assert row_label(25) == 'Z'
        assert row_label(26) == 'AA'
        assert row_index('AA') == 26

    def test_all_seat_ids_in_row_major_order(self, grid: SeatGrid) -> None:
        seats = grid.all_seat_ids()
        assert grid.capacity == 40
        assert len(seats) == 40
        assert seats[:3] == ['A1', 'A2', 'A3']
        assert seats[-1] == 'E8'

    def test_validate_normalizes_case_and_keeps_order(self, grid: SeatGrid) -> None:
        assert grid.validate(['c4', ' C3 ']) == ['C4', 'C3']

    def test_validate_rejects_seats_outside_grid(self, grid: SeatGrid) -> None:
        with pytest.raises(InvalidSeatError) as exc_info:
            grid.validate(['A1', 'F1', 'A9'])
        assert exc_info.value.seats == ['F1', 'A9']

    def test_validate_rejects_malformed_and_zero_numbered_seats(self, grid: SeatGrid) -> None:
        with pytest.raises(InvalidSeatError) as exc_info:
            grid.validate(['1A', 'A0'])
        assert exc_info.value.seats == ['1A', 'A0']

    def test_validate_rejects_duplicates(self, grid: SeatGrid) -> None:
        with pytest.raises(InvalidSeatError, match='Duplicate seats in request: B2'):
            grid.validate(['B2', 'b2'])

    def test_validate_rejects_empty_selection(self, grid: SeatGrid) -> None:
        with pytest.raises(InvalidSeatError, match='No seats selected'):
            grid.validate([])

    def test_seat_id_round_trips_through_str(self) -> None:
        assert str(SeatId.parse('h12')) == 'H12'
