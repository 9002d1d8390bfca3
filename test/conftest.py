"""
Test Configuration and Fixtures

This module provides:
- Test database creation, schema reset and Alembic migrations
- Per-test table cleanup for integration tests
- Fixtures for verified users, an admin and a bookable showtime

Architecture:
- Unit tests (test/**/unit/): Override fixtures with mocks in their own conftest.py
- Integration tests: Use a real PostgreSQL database through the FastAPI TestClient
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings read POSTGRES_DB and TEST_LOG_DIR at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    os.environ['POSTGRES_DB'] = os.environ.get('TEST_POSTGRES_DB', 'cinemaster_test_db')

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ.setdefault('EMAIL_LOG_FILE', str(test_log_dir / 'email_log.txt'))

    os.environ.setdefault('DB_POOL_SIZE', '2')
    os.environ.setdefault('DB_POOL_MAX_OVERFLOW', '2')


_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import Callable, Generator  # noqa: E402
from datetime import date, time  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Any  # noqa: E402

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
import bcrypt  # noqa: E402
from dotenv import load_dotenv  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from test.util_constant import (  # noqa: E402
    ANOTHER_BUYER_EMAIL,
    ANOTHER_BUYER_NAME,
    DEFAULT_MOVIE_DURATION,
    DEFAULT_MOVIE_TITLE,
    DEFAULT_PASSWORD,
    DEFAULT_PRICE,
    DEFAULT_ROWS,
    DEFAULT_SEATS_PER_ROW,
    DEFAULT_SHOW_TIME,
    DEFAULT_THEATER_NAME,
    TEST_ADMIN_EMAIL,
    TEST_ADMIN_NAME,
    TEST_BUYER_EMAIL,
    TEST_BUYER_NAME,
    tomorrow,
)


# =============================================================================
# Pytest Hooks: Detect test type and setup accordingly
# =============================================================================
def _is_unit_test_only_run(config: pytest.Config) -> bool:
    markexpr = config.getoption('markexpr', default='')
    if markexpr and 'unit' in str(markexpr) and 'not unit' not in str(markexpr):
        return True

    args = config.args or []
    test_paths = [arg for arg in args if arg and not arg.startswith('-')]
    return bool(test_paths and all('/unit/' in path or '\\unit\\' in path for path in test_paths))


def pytest_sessionstart(session: pytest.Session) -> None:
    if _is_unit_test_only_run(session.config):
        return
    asyncio.run(_create_test_database())
    _run_migrations()


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            # First, so data fixtures see empty tables
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Configuration
# =============================================================================
def _get_db_config() -> dict[str, str]:
    env_file = '.env' if Path('.env').exists() else '.env.example'
    load_dotenv(env_file)

    return {
        'user': os.getenv('POSTGRES_USER', 'postgres'),
        'password': os.getenv('POSTGRES_PASSWORD', 'postgres'),
        'host': os.getenv('POSTGRES_SERVER', 'localhost'),
        'port': os.getenv('POSTGRES_PORT', '5432'),
        'test_db': os.environ['POSTGRES_DB'],
    }


def _get_test_database_url() -> str:
    cfg = _get_db_config()
    return (
        f'postgresql+asyncpg://{cfg["user"]}:{cfg["password"]}'
        f'@{cfg["host"]}:{cfg["port"]}/{cfg["test_db"]}'
    )


_cached_tables: list[str] | None = None


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
async def _create_test_database() -> None:
    db_url = _get_test_database_url()
    cfg = _get_db_config()

    postgres_url = db_url.replace(f'/{cfg["test_db"]}', '/postgres')
    engine = create_async_engine(postgres_url, isolation_level='AUTOCOMMIT')
    async with engine.begin() as conn:
        result = await conn.execute(
            text('SELECT 1 FROM pg_database WHERE datname = :name'), {'name': cfg['test_db']}
        )
        if not result.fetchone():
            await conn.execute(text(f'CREATE DATABASE {cfg["test_db"]}'))
    await engine.dispose()

    reset_engine = create_async_engine(db_url)
    async with reset_engine.begin() as conn:
        await conn.execute(text('DROP SCHEMA public CASCADE'))
        await conn.execute(text('CREATE SCHEMA public'))
    await reset_engine.dispose()


def _run_migrations() -> None:
    # env.py drives the async engine with its own asyncio.run, so call outside any loop
    alembic_cfg = Config(str(Path(__file__).parent.parent / 'alembic.ini'))
    alembic_cfg.attributes['sqlalchemy_url'] = _get_test_database_url()
    command.upgrade(alembic_cfg, 'head')


async def _clean_all_tables() -> None:
    global _cached_tables
    engine = create_async_engine(_get_test_database_url())
    try:
        async with engine.begin() as conn:
            if _cached_tables is None:
                result = await conn.execute(
                    text(
                        "SELECT tablename FROM pg_tables WHERE schemaname = 'public' "
                        "AND tablename != 'alembic_version'"
                    )
                )
                _cached_tables = [row[0] for row in result]

            if _cached_tables:
                quoted = [f'"{t}"' for t in _cached_tables]
                await conn.execute(text(f'TRUNCATE {", ".join(quoted)} RESTART IDENTITY CASCADE'))
    finally:
        await engine.dispose()


async def _execute(statement: str, params: dict[str, Any] | None, fetch: bool) -> Any:
    engine = create_async_engine(_get_test_database_url())
    try:
        async with engine.begin() as conn:
            result = await conn.execute(text(statement), params or {})
            if fetch:
                return [dict(row._mapping) for row in result]
            return None
    finally:
        await engine.dispose()


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest.fixture(scope='function')
def clean_database() -> None:
    asyncio.run(_clean_all_tables())


@pytest.fixture
def database_url() -> str:
    return _get_test_database_url()


@pytest.fixture
def execute_sql_statement() -> Callable[..., list[dict[str, Any]] | None]:
    def _run(
        statement: str, params: dict[str, Any] | None = None, fetch: bool = False
    ) -> list[dict[str, Any]] | None:
        return asyncio.run(_execute(statement, params, fetch))

    return _run


@pytest.fixture(scope='session')
def client() -> Generator[Any, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clear_client_cookies(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    # Unit tests never touch the HTTP client
    if 'unit' in [m.name for m in request.node.iter_markers()]:
        yield
        return
    client = request.getfixturevalue('client')
    client.cookies.clear()
    yield
    client.cookies.clear()


# =============================================================================
# Data Fixtures
# =============================================================================
_PASSWORD_HASH = bcrypt.hashpw(DEFAULT_PASSWORD.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


@pytest.fixture
def create_user(
    clean_database: None, execute_sql_statement: Callable[..., Any]
) -> Callable[..., dict[str, Any]]:
    """Insert a verified account directly; registration needs an emailed token."""

    def _create(*, email: str, name: str, role: str = 'user') -> dict[str, Any]:
        rows = execute_sql_statement(
            'INSERT INTO "user" (email, hashed_password, name, role, is_verified) '
            'VALUES (:email, :hashed_password, :name, :role, true) RETURNING id',
            {'email': email, 'hashed_password': _PASSWORD_HASH, 'name': name, 'role': role},
            fetch=True,
        )
        return {'id': rows[0]['id'], 'email': email, 'name': name, 'role': role}

    return _create


@pytest.fixture
def buyer_user(create_user: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    return create_user(email=TEST_BUYER_EMAIL, name=TEST_BUYER_NAME)


@pytest.fixture
def another_buyer_user(create_user: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    return create_user(email=ANOTHER_BUYER_EMAIL, name=ANOTHER_BUYER_NAME)


@pytest.fixture
def admin_user(create_user: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    return create_user(email=TEST_ADMIN_EMAIL, name=TEST_ADMIN_NAME, role='admin')


@pytest.fixture
def create_showtime(
    clean_database: None, execute_sql_statement: Callable[..., Any]
) -> Callable[..., dict[str, Any]]:
    """Insert movie + theater + showtime rows and return their ids."""

    def _create(
        *,
        show_date: date | None = None,
        show_time: time = DEFAULT_SHOW_TIME,
        price: Decimal = DEFAULT_PRICE,
        duration_minutes: int = DEFAULT_MOVIE_DURATION,
        rows_count: int = DEFAULT_ROWS,
        seats_per_row: int = DEFAULT_SEATS_PER_ROW,
    ) -> dict[str, Any]:
        movie = execute_sql_statement(
            'INSERT INTO movie (title, description, duration_minutes, release_date, rating, status) '
            "VALUES (:title, '', :duration, :release_date, 7.5, 'now_showing') RETURNING id",
            {
                'title': DEFAULT_MOVIE_TITLE,
                'duration': duration_minutes,
                'release_date': date(2025, 1, 1),
            },
            fetch=True,
        )
        theater = execute_sql_statement(
            'INSERT INTO theater (name, rows_count, seats_per_row, is_active) '
            'VALUES (:name, :rows_count, :seats_per_row, true) RETURNING id',
            {
                'name': DEFAULT_THEATER_NAME,
                'rows_count': rows_count,
                'seats_per_row': seats_per_row,
            },
            fetch=True,
        )
        showtime = execute_sql_statement(
            'INSERT INTO showtime (movie_id, theater_id, show_date, show_time, price, is_active) '
            'VALUES (:movie_id, :theater_id, :show_date, :show_time, :price, true) RETURNING id',
            {
                'movie_id': movie[0]['id'],
                'theater_id': theater[0]['id'],
                'show_date': show_date or tomorrow(),
                'show_time': show_time,
                'price': price,
            },
            fetch=True,
        )
        return {
            'movie_id': movie[0]['id'],
            'theater_id': theater[0]['id'],
            'showtime_id': showtime[0]['id'],
        }

    return _create


@pytest.fixture
def bookable_showtime(create_showtime: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    return create_showtime()
