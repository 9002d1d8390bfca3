#!/usr/bin/env python3
"""
Database Seed Script
Populate demo data into a freshly migrated database

Features:
1. Create Users - 1 admin + 1 verified viewer, both with DEFAULT_PASSWORD
2. Create Catalog - genres, movies and theaters
3. Schedule Showtimes - the next SEED_DAYS days, one program per theater

Notes:
- Run `python -m script.reset_database` first; the seed expects empty tables
- Showtimes are written through the unit of work so slot uniqueness still applies
"""

import asyncio
from dataclasses import dataclass
from datetime import date, time, timedelta
from decimal import Decimal
import os

from src.platform.database.db_setting import dispose_engine, get_session_maker
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.cinema.domain.entity.movie_entity import Genre, Movie
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.entity.theater_entity import Theater
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.domain.enum.movie_status import MovieStatus
from src.service.cinema.domain.enum.user_role import UserRole
from src.service.cinema.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl
from src.service.cinema.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)

DEFAULT_PASSWORD = 'P@ssw0rd'
SEED_DAYS = int(os.getenv('SEED_DAYS', '3'))


@dataclass
class UserConfig:
    email: str
    name: str
    role: UserRole


@dataclass
class MovieConfig:
    title: str
    duration_minutes: int
    rating: str
    genres: list[str]
    status: MovieStatus = MovieStatus.NOW_SHOWING


TEST_USERS = [
    UserConfig(email='admin@cinema.local', name='Cinema Admin', role=UserRole.ADMIN),
    UserConfig(email='viewer@cinema.local', name='Demo Viewer', role=UserRole.USER),
]

GENRES = ['Action', 'Comedy', 'Drama', 'Sci-Fi', 'Thriller']

MOVIES = [
    MovieConfig(title='The Long Night', duration_minutes=120, rating='7.8', genres=['Thriller']),
    MovieConfig(title='Orbital', duration_minutes=142, rating='8.1', genres=['Sci-Fi', 'Drama']),
    MovieConfig(title='Second Helping', duration_minutes=95, rating='6.9', genres=['Comedy']),
    MovieConfig(
        title='Iron Harbor',
        duration_minutes=131,
        rating='0',
        genres=['Action'],
        status=MovieStatus.COMING_SOON,
    ),
]

# (name, rows, seats per row)
THEATERS = [('Hall 1', 5, 8), ('Hall 2', 8, 12), ('Studio', 4, 6)]

# Per-theater start times; spaced wider than the longest film plus the buffer
PROGRAM = [time(13, 0), time(16, 0), time(19, 0), time(22, 0)]
TICKET_PRICE = Decimal('12.99')


async def create_users() -> None:
    print(f'👥 Creating {len(TEST_USERS)} users...')
    user_repo = UserCommandRepoImpl(get_session_maker())
    password_hasher = BcryptPasswordHasher()

    for config in TEST_USERS:
        user = UserEntity(email=config.email, name=config.name, role=config.role, is_verified=True)
        user.set_password(DEFAULT_PASSWORD, password_hasher)
        created = await user_repo.create(user)
        print(f'   ✅ {created.role.value}: {created.email} (id={created.id})')


async def create_catalog_and_showtimes() -> int:
    """Returns the number of showtimes scheduled"""
    scheduled = 0
    async with get_session_maker()() as session:
        async with SqlAlchemyUnitOfWork(session) as uow:
            print(f'🏷️  Creating {len(GENRES)} genres...')
            genre_ids = {}
            for name in GENRES:
                genre = await uow.movie_repo.create_genre(genre=Genre(name=name))
                genre_ids[name] = genre.id

            print(f'🎬 Creating {len(MOVIES)} movies...')
            showing = []
            for config in MOVIES:
                movie = await uow.movie_repo.create(
                    movie=Movie(
                        title=config.title,
                        duration_minutes=config.duration_minutes,
                        release_date=date.today() - timedelta(days=14),
                        rating=Decimal(config.rating),
                        status=config.status,
                    ),
                    genre_ids=[genre_ids[name] for name in config.genres],
                )
                if movie.status == MovieStatus.NOW_SHOWING:
                    showing.append(movie)

            print(f'🏛️  Creating {len(THEATERS)} theaters...')
            theaters = []
            for name, rows_count, seats_per_row in THEATERS:
                theater = await uow.theater_repo.create(
                    theater=Theater(name=name, rows_count=rows_count, seats_per_row=seats_per_row)
                )
                theaters.append(theater)

            print(f'📅 Scheduling {SEED_DAYS} day(s) of showtimes...')
            for day in range(1, SEED_DAYS + 1):
                show_date = date.today() + timedelta(days=day)
                for index, theater in enumerate(theaters):
                    for slot, show_time in enumerate(PROGRAM):
                        movie = showing[(index + slot + day) % len(showing)]
                        await uow.showtime_command_repo.create(
                            showtime=Showtime.create(
                                movie_id=movie.id or 0,
                                theater_id=theater.id or 0,
                                show_date=show_date,
                                show_time=show_time,
                                price=TICKET_PRICE,
                            )
                        )
                        scheduled += 1

            await uow.commit()
    return scheduled


async def main() -> None:
    print('🌱 Starting database seed...')
    print('=' * 50)
    try:
        await create_users()
        scheduled = await create_catalog_and_showtimes()
    finally:
        await dispose_engine()

    print('=' * 50)
    print(f'✅ Seed completed: {scheduled} showtimes scheduled')
    print(f'🔑 Log in with any seeded email and password {DEFAULT_PASSWORD}')


if __name__ == '__main__':
    asyncio.run(main())
