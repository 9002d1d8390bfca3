from typing import Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_theater_repo import ITheaterRepo
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.entity.theater_entity import Theater
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.domain.exception.booking_exceptions import TheaterNotFoundError


class ManageTheaterUseCase:
    def __init__(self, *, theater_repo: ITheaterRepo, audit_logger: AuditLogger) -> None:
        self.theater_repo = theater_repo
        self.audit_logger = audit_logger

    @classmethod
    @inject
    def depends(
        cls,
        theater_repo: ITheaterRepo = Depends(Provide[Container.theater_repo]),
        audit_logger: AuditLogger = Depends(Provide[Container.audit_logger]),
    ) -> Self:
        return cls(theater_repo=theater_repo, audit_logger=audit_logger)

    @Logger.io
    async def create_theater(
        self, *, name: str, rows_count: int, seats_per_row: int, admin_id: int
    ) -> Theater:
        if not name.strip():
            raise DomainError('Theater name is required')
        theater = await self.theater_repo.create(
            theater=Theater(name=name.strip(), rows_count=rows_count, seats_per_row=seats_per_row)
        )
        await self.audit_logger.record(
            action=f'Added theater: {theater.name}',
            category=LogCategory.ADMIN,
            user_id=admin_id,
            details={'theater_id': theater.id, 'capacity': theater.total_seats},
        )
        return theater

    @Logger.io
    async def update_theater(
        self,
        *,
        theater_id: int,
        admin_id: int,
        name: Optional[str] = None,
        rows_count: Optional[int] = None,
        seats_per_row: Optional[int] = None,
        is_active: Optional[bool] = None,
    ) -> Theater:
        theater = await self.theater_repo.get_by_id(theater_id=theater_id)
        if not theater:
            raise TheaterNotFoundError(theater_id)

        changes = {
            key: value
            for key, value in {
                'name': name.strip() if name else None,
                'rows_count': rows_count,
                'seats_per_row': seats_per_row,
                'is_active': is_active,
            }.items()
            if value is not None
        }
        updated = await self.theater_repo.update(theater=attrs.evolve(theater, **changes))
        await self.audit_logger.record(
            action=f'Updated theater: {updated.name}',
            category=LogCategory.ADMIN,
            user_id=admin_id,
            details={'theater_id': theater_id, 'fields': sorted(changes)},
        )
        return updated
