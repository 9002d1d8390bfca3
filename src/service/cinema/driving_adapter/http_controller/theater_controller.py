from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.manage_theater_use_case import ManageTheaterUseCase
from src.service.cinema.app.query.list_theaters_use_case import ListTheatersUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.cinema.driving_adapter.http_controller.schema.catalog_schema import (
    TheaterCreateRequest,
    TheaterResponse,
    TheaterUpdateRequest,
)


router = APIRouter()


@router.get('', response_model=List[TheaterResponse])
@Logger.io
async def list_theaters(
    use_case: ListTheatersUseCase = Depends(ListTheatersUseCase.depends),
) -> List[TheaterResponse]:
    theaters = await use_case.list_theaters(active_only=True)
    return [TheaterResponse.from_entity(theater) for theater in theaters]


@router.get('/all', response_model=List[TheaterResponse])
@Logger.io
async def list_all_theaters(
    current_user: UserEntity = Depends(require_admin),
    use_case: ListTheatersUseCase = Depends(ListTheatersUseCase.depends),
) -> List[TheaterResponse]:
    theaters = await use_case.list_theaters(active_only=False)
    return [TheaterResponse.from_entity(theater) for theater in theaters]


@router.get('/{theater_id}', response_model=TheaterResponse)
@Logger.io
async def get_theater(
    theater_id: int,
    use_case: ListTheatersUseCase = Depends(ListTheatersUseCase.depends),
) -> TheaterResponse:
    return TheaterResponse.from_entity(await use_case.get_theater(theater_id=theater_id))


@router.post('', response_model=TheaterResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_theater(
    request: TheaterCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: ManageTheaterUseCase = Depends(ManageTheaterUseCase.depends),
) -> TheaterResponse:
    theater = await use_case.create_theater(
        name=request.name,
        rows_count=request.rows_count,
        seats_per_row=request.seats_per_row,
        admin_id=current_user.id or 0,
    )
    return TheaterResponse.from_entity(theater)


@router.patch('/{theater_id}', response_model=TheaterResponse)
@Logger.io
async def update_theater(
    theater_id: int,
    request: TheaterUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: ManageTheaterUseCase = Depends(ManageTheaterUseCase.depends),
) -> TheaterResponse:
    theater = await use_case.update_theater(
        theater_id=theater_id, admin_id=current_user.id or 0, **request.model_dump()
    )
    return TheaterResponse.from_entity(theater)
