from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.cinema.domain.value_object.seat import SeatGrid


def _validate_positive(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value is None or value <= 0:
        raise DomainError(f'Theater {attribute.name} must be greater than 0')


@attrs.define
class Theater:
    name: str
    rows_count: int = attrs.field(validator=_validate_positive)
    seats_per_row: int = attrs.field(validator=_validate_positive)
    is_active: bool = True
    id: Optional[int] = None

    @property
    def grid(self) -> SeatGrid:
        return SeatGrid(rows=self.rows_count, seats_per_row=self.seats_per_row)

    @property
    def total_seats(self) -> int:
        return self.grid.capacity
