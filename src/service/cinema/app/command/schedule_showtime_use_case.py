from datetime import date, time
from decimal import Decimal
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.domain.exception.booking_exceptions import (
    MovieNotFoundError,
    SchedulingConflictError,
    TheaterNotFoundError,
)
from src.service.cinema.domain.showtime_scheduling_domain import find_conflict


class ScheduleShowtimeUseCase:
    """
    Create a showtime unless its playback window (runtime + buffer) overlaps another
    showtime in the same theater on the same date.

    The theater row is locked for the check-then-insert so two admins cannot schedule
    overlapping screenings concurrently.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, audit_logger: AuditLogger) -> None:
        self.uow = uow
        self.audit_logger = audit_logger
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        audit_logger: AuditLogger = Depends(Provide[Container.audit_logger]),
    ) -> Self:
        return cls(uow=uow, audit_logger=audit_logger)

    @Logger.io
    async def execute(
        self,
        *,
        movie_id: int,
        theater_id: int,
        show_date: date,
        show_time: time,
        price: Decimal,
        admin_id: int,
    ) -> Showtime:
        showtime = Showtime.create(
            movie_id=movie_id,
            theater_id=theater_id,
            show_date=show_date,
            show_time=show_time,
            price=price,
        )

        with self.tracer.start_as_current_span(
            'use_case.schedule_showtime',
            attributes={'movie.id': movie_id, 'theater.id': theater_id},
        ):
            try:
                created, movie_title = await self._schedule(showtime=showtime)
            except SchedulingConflictError as e:
                metrics.record_showtime_schedule(result='conflict')
                Logger.base.warning(f'📅 [SCHEDULE] Theater {theater_id}: {e.message}')
                raise

        metrics.record_showtime_schedule(result='scheduled')
        Logger.base.info(
            f'📅 [SCHEDULE] Showtime {created.id}: {movie_title} in theater {theater_id} '
            f'at {created.starts_at:%Y-%m-%d %H:%M}'
        )
        await self.audit_logger.record(
            action=f'Added showtime for movie ID: {movie_id}',
            category=LogCategory.ADMIN,
            user_id=admin_id,
            details={
                'showtime_id': created.id,
                'theater_id': theater_id,
                'starts_at': created.starts_at.isoformat(),
                'price': str(created.price),
            },
        )
        return created

    async def _schedule(self, *, showtime: Showtime) -> tuple[Showtime, str]:
        async with self.uow:
            movie = await self.uow.movie_repo.get_by_id(movie_id=showtime.movie_id)
            if not movie:
                raise MovieNotFoundError(showtime.movie_id)

            theater = await self.uow.theater_repo.get_for_update(theater_id=showtime.theater_id)
            if not theater:
                raise TheaterNotFoundError(showtime.theater_id)
            if not theater.is_active:
                raise DomainError(f'Theater {theater.name} is not active')

            existing = await self.uow.showtime_command_repo.list_slots(
                theater_id=showtime.theater_id, show_date=showtime.show_date
            )
            conflict = find_conflict(
                starts_at=showtime.starts_at,
                duration_minutes=movie.duration_minutes,
                existing=existing,
                buffer_minutes=settings.SHOWTIME_BUFFER_MINUTES,
            )
            if conflict:
                raise SchedulingConflictError(
                    conflict, buffer_minutes=settings.SHOWTIME_BUFFER_MINUTES
                )

            created = await self.uow.showtime_command_repo.create(showtime=showtime)
            await self.uow.commit()
            return created, movie.title
