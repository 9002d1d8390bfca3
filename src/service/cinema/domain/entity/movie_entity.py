from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.cinema.domain.enum.movie_status import MovieStatus


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise DomainError(f'Movie {attribute.name} cannot be empty')


def _validate_positive_duration(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value is None or value <= 0:
        raise DomainError('Valid duration is required')


def _validate_rating(instance: object, attribute: attrs.Attribute, value: Decimal) -> None:
    if not Decimal('0') <= Decimal(value) <= Decimal('10'):
        raise DomainError('Rating must be between 0 and 10')


@attrs.define
class Genre:
    name: str = attrs.field(validator=_validate_non_empty_string)
    id: Optional[int] = None


@attrs.define
class Movie:
    title: str = attrs.field(validator=_validate_non_empty_string)
    duration_minutes: int = attrs.field(validator=_validate_positive_duration)
    release_date: date
    description: str = ''
    poster_url: Optional[str] = None
    trailer_url: Optional[str] = None
    rating: Decimal = attrs.field(default=Decimal('0'), validator=_validate_rating)
    status: MovieStatus = MovieStatus.COMING_SOON
    genres: List[str] = attrs.field(factory=list)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
