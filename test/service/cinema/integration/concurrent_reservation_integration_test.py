"""
Concurrent reservations against a real database

Each request gets its own engine connection, AsyncSession and unit of work, so the
showtime row lock is the only thing ordering them.
"""

import asyncio
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.cinema.app.command.reserve_seats_use_case import ReserveSeatsUseCase
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.exception.booking_exceptions import SeatConflictError
from test.util_constant import TWO_SEAT_TOTAL


async def _reserve_concurrently(
    *, database_url: str, showtime_id: int, requests: list[tuple[int, list[str]]]
) -> list[Any]:
    engine = create_async_engine(database_url, pool_size=len(requests))
    session_maker = async_sessionmaker(engine, expire_on_commit=False)

    async def _reserve(user_id: int, seats: list[str]) -> Booking:
        async with session_maker() as session:
            use_case = ReserveSeatsUseCase(
                uow=SqlAlchemyUnitOfWork(session), audit_logger=AsyncMock()
            )
            return await use_case.execute(
                user_id=user_id,
                showtime_id=showtime_id,
                seat_ids=seats,
                quoted_amount=Decimal(TWO_SEAT_TOTAL),
            )

    try:
        return await asyncio.gather(
            *(_reserve(user_id, seats) for user_id, seats in requests),
            return_exceptions=True,
        )
    finally:
        await engine.dispose()


@pytest.mark.integration
class TestConcurrentReservations:
    def test_overlapping_requests_yield_one_booking(
        self,
        database_url: str,
        buyer_user: dict[str, Any],
        another_buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
        execute_sql_statement: Any,
    ) -> None:
        """
        Given: two buyers in separate sessions
        When: they reserve C3+C4 and C4+C5 for the same showtime at the same time
        Then: one booking is created and the other request fails naming only C4
        """
        results = asyncio.run(
            _reserve_concurrently(
                database_url=database_url,
                showtime_id=bookable_showtime['showtime_id'],
                requests=[
                    (buyer_user['id'], ['C3', 'C4']),
                    (another_buyer_user['id'], ['C4', 'C5']),
                ],
            )
        )

        bookings = [r for r in results if isinstance(r, Booking)]
        conflicts = [r for r in results if isinstance(r, SeatConflictError)]
        assert len(bookings) == 1
        assert len(conflicts) == 1
        assert conflicts[0].seats == ['C4']

        rows = execute_sql_statement(
            'SELECT seat_number FROM seat_assignment WHERE showtime_id = :id '
            'ORDER BY seat_number',
            {'id': bookable_showtime['showtime_id']},
            fetch=True,
        )
        assert [row['seat_number'] for row in rows] == sorted(bookings[0].seat_ids)

    def test_disjoint_requests_both_succeed(
        self,
        database_url: str,
        buyer_user: dict[str, Any],
        another_buyer_user: dict[str, Any],
        bookable_showtime: dict[str, Any],
        execute_sql_statement: Any,
    ) -> None:
        results = asyncio.run(
            _reserve_concurrently(
                database_url=database_url,
                showtime_id=bookable_showtime['showtime_id'],
                requests=[
                    (buyer_user['id'], ['C3', 'C4']),
                    (another_buyer_user['id'], ['D3', 'D4']),
                ],
            )
        )

        assert all(isinstance(r, Booking) for r in results), results
        assert len({r.reference for r in results}) == 2

        rows = execute_sql_statement(
            'SELECT COUNT(*) AS claimed FROM seat_assignment WHERE showtime_id = :id',
            {'id': bookable_showtime['showtime_id']},
            fetch=True,
        )
        assert rows[0]['claimed'] == 4
