"""
Conftest for pure unit tests - no external dependencies.

Override fixtures that would otherwise reach the database or the HTTP app.
"""

from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.platform.database.unit_of_work import AbstractUnitOfWork


@pytest.fixture(scope='session')
def client() -> Generator[MagicMock, None, None]:
    """Mock client for unit tests - no FastAPI app needed"""
    yield MagicMock()


@pytest.fixture
def clean_database() -> None:
    return None


class FakeUnitOfWork(AbstractUnitOfWork):
    """Repositories are AsyncMocks; commit/rollback are counted."""

    def __init__(self) -> None:
        self.booking_command_repo = AsyncMock()
        self.booking_query_repo = AsyncMock()
        self.showtime_command_repo = AsyncMock()
        self.movie_repo = AsyncMock()
        self.theater_repo = AsyncMock()
        self.committed = 0
        self.rolled_back = 0

    async def _commit(self) -> None:
        self.committed += 1

    async def rollback(self) -> None:
        self.rolled_back += 1


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def audit_logger() -> AsyncMock:
    return AsyncMock()
