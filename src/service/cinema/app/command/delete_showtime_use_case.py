from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.domain.exception.booking_exceptions import (
    HasBookingsError,
    ShowtimeNotFoundError,
)


class DeleteShowtimeUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork, audit_logger: AuditLogger) -> None:
        self.uow = uow
        self.audit_logger = audit_logger

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        audit_logger: AuditLogger = Depends(Provide[Container.audit_logger]),
    ) -> Self:
        return cls(uow=uow, audit_logger=audit_logger)

    @Logger.io
    async def execute(self, *, showtime_id: int, admin_id: int) -> None:
        """
        Delete a showtime that no booking references, cancelled ones included.

        The showtime row lock keeps a reservation from landing between the count
        and the delete.
        """
        async with self.uow:
            detail = await self.uow.showtime_command_repo.get_detail_for_update(
                showtime_id=showtime_id
            )
            if not detail:
                raise ShowtimeNotFoundError(showtime_id)

            count = await self.uow.booking_query_repo.count_by_showtime(showtime_id=showtime_id)
            if count:
                raise HasBookingsError(count)

            await self.uow.showtime_command_repo.delete(showtime_id=showtime_id)
            await self.uow.commit()

        Logger.base.info(f'🗑️ [SHOWTIME] Deleted showtime {showtime_id}')
        await self.audit_logger.record(
            action=f'Deleted showtime ID: {showtime_id}',
            category=LogCategory.ADMIN,
            user_id=admin_id,
            details={'movie_title': detail.movie_title, 'theater': detail.theater_name},
        )
