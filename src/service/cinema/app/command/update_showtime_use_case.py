from decimal import Decimal
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_showtime_command_repo import IShowtimeCommandRepo
from src.service.cinema.app.service.audit_logger import AuditLogger
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.enum.log_category import LogCategory
from src.service.cinema.domain.exception.booking_exceptions import ShowtimeNotFoundError


class UpdateShowtimeUseCase:
    """Price and active flag are the only showtime fields editable after creation."""

    def __init__(
        self, *, showtime_command_repo: IShowtimeCommandRepo, audit_logger: AuditLogger
    ) -> None:
        self.showtime_command_repo = showtime_command_repo
        self.audit_logger = audit_logger

    @classmethod
    @inject
    def depends(
        cls,
        showtime_command_repo: IShowtimeCommandRepo = Depends(
            Provide[Container.showtime_command_repo]
        ),
        audit_logger: AuditLogger = Depends(Provide[Container.audit_logger]),
    ) -> Self:
        return cls(showtime_command_repo=showtime_command_repo, audit_logger=audit_logger)

    @Logger.io
    async def execute(
        self,
        *,
        showtime_id: int,
        admin_id: int,
        price: Optional[Decimal] = None,
        is_active: Optional[bool] = None,
    ) -> Showtime:
        if price is not None and price <= 0:
            raise DomainError('Price must be greater than 0')

        showtime = await self.showtime_command_repo.update(
            showtime_id=showtime_id, price=price, is_active=is_active
        )
        if not showtime:
            raise ShowtimeNotFoundError(showtime_id)

        changes = {}
        if price is not None:
            changes['price'] = str(price)
        if is_active is not None:
            changes['is_active'] = is_active
        await self.audit_logger.record(
            action=f'Updated showtime ID: {showtime_id}',
            category=LogCategory.ADMIN,
            user_id=admin_id,
            details=changes,
        )
        return showtime
