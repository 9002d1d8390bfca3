from prometheus_client import Counter, Histogram


class BookingMetrics:
    """
    Cinema booking business metrics

    Tracks seat reservation outcomes, payment results and admin scheduling
    rejections. Exposed at /metrics by the app factory.
    """

    def __init__(self):
        # ========== Seat Reservation ==========
        self.seat_reservation_requests = Counter(
            'cinema_seat_reservation_requests_total',
            'Seat reservation attempts',
            ['result'],  # success / seat_conflict / price_mismatch / invalid / error
        )

        self.seats_reserved = Counter(
            'cinema_seats_reserved_total',
            'Seats claimed by successful reservations',
        )

        self.seat_reservation_duration = Histogram(
            'cinema_seat_reservation_duration_seconds',
            'Seat reservation transaction time',
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
        )

        self.seats_released = Counter(
            'cinema_seats_released_total',
            'Seats released by booking cancellation',
        )

        # ========== Payment ==========
        self.payments = Counter(
            'cinema_payments_total',
            'Payment gateway charges',
            ['result'],  # succeeded / declined / charged_not_booked
        )

        self.payment_confirmations = Counter(
            'cinema_payment_confirmations_total',
            'Booking payment confirmations',
            ['result'],  # confirmed / duplicate
        )

        # ========== Scheduling ==========
        self.showtime_schedule_requests = Counter(
            'cinema_showtime_schedule_requests_total',
            'Showtime scheduling attempts',
            ['result'],  # scheduled / conflict
        )

    # ========== Helper Methods ==========

    def record_seat_reservation(self, *, result: str, duration: float, seat_count: int = 0):
        self.seat_reservation_requests.labels(result=result).inc()
        self.seat_reservation_duration.observe(duration)
        if seat_count:
            self.seats_reserved.inc(seat_count)

    def record_seats_released(self, *, seat_count: int):
        if seat_count:
            self.seats_released.inc(seat_count)

    def record_payment(self, *, result: str):
        self.payments.labels(result=result).inc()

    def record_payment_confirmation(self, *, result: str):
        self.payment_confirmations.labels(result=result).inc()

    def record_showtime_schedule(self, *, result: str):
        self.showtime_schedule_requests.labels(result=result).inc()


# Global metrics instance
metrics = BookingMetrics()
