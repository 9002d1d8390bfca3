import re
from typing import Iterable

import attrs

from src.service.cinema.domain.exception.booking_exceptions import InvalidSeatError


SEAT_ID_PATTERN = re.compile(r'^(?P<row>[A-Z]+)(?P<number>[0-9]+)$')


def row_label(index: int) -> str:
    """0 -> 'A', 25 -> 'Z', 26 -> 'AA'"""
    label = ''
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        label = chr(ord('A') + remainder) + label
    return label


def row_index(label: str) -> int:
    index = 0
    for char in label:
        index = index * 26 + (ord(char) - ord('A') + 1)
    return index - 1


@attrs.frozen
class SeatId:
    row: str
    number: int

    @classmethod
    def parse(cls, raw: str) -> 'SeatId':
        match = SEAT_ID_PATTERN.match(raw.strip().upper()) if isinstance(raw, str) else None
        if not match or int(match['number']) < 1:
            raise InvalidSeatError([str(raw)], 'Malformed seat id')
        return cls(row=match['row'], number=int(match['number']))

    def __str__(self) -> str:
        return f'{self.row}{self.number}'


@attrs.frozen
class SeatGrid:
    """Theater seat layout: rows labelled from 'A', seats numbered from 1 within each row."""

    rows: int
    seats_per_row: int

    @property
    def capacity(self) -> int:
        return self.rows * self.seats_per_row

    def row_labels(self) -> list[str]:
        return [row_label(i) for i in range(self.rows)]

    def all_seat_ids(self) -> list[str]:
        return [
            f'{label}{number}'
            for label in self.row_labels()
            for number in range(1, self.seats_per_row + 1)
        ]

    def contains(self, seat: SeatId) -> bool:
        return 0 <= row_index(seat.row) < self.rows and 1 <= seat.number <= self.seats_per_row

    def validate(self, seat_ids: Iterable[str]) -> list[str]:
        """
        Normalize a requested seat list against this grid.

        Returns:
            Seat ids in request order, upper-cased

        Raises:
            InvalidSeatError: empty request, malformed id, duplicate, or seat outside the grid
        """
        requested = list(seat_ids)
        if not requested:
            raise InvalidSeatError([], 'No seats selected')

        normalized: list[str] = []
        invalid: list[str] = []
        for raw in requested:
            try:
                seat = SeatId.parse(raw)
            except InvalidSeatError:
                invalid.append(str(raw))
                continue
            if not self.contains(seat):
                invalid.append(str(seat))
                continue
            normalized.append(str(seat))

        if invalid:
            raise InvalidSeatError(invalid, 'Seats not available in this theater')

        duplicates = sorted({s for s in normalized if normalized.count(s) > 1})
        if duplicates:
            raise InvalidSeatError(duplicates, 'Duplicate seats in request')

        return normalized
