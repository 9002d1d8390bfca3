from decimal import ROUND_HALF_UP, Decimal

import attrs

from src.service.cinema.domain.exception.booking_exceptions import PriceMismatchError


CENT = Decimal('0.01')


@attrs.frozen
class PriceQuote:
    seat_count: int
    unit_price: Decimal
    booking_fee: Decimal

    @property
    def total(self) -> Decimal:
        return self.quote_total(
            seat_count=self.seat_count, price=self.unit_price, booking_fee=self.booking_fee
        )

    @staticmethod
    def quote_total(*, seat_count: int, price: Decimal, booking_fee: Decimal) -> Decimal:
        total = Decimal(seat_count) * Decimal(price) + Decimal(booking_fee)
        return total.quantize(CENT, rounding=ROUND_HALF_UP)

    @staticmethod
    def verify(*, quoted: Decimal, expected: Decimal, tolerance: Decimal) -> None:
        if abs(Decimal(quoted) - Decimal(expected)) > tolerance:
            raise PriceMismatchError(quoted=Decimal(quoted))
