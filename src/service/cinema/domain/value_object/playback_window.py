from datetime import datetime, timedelta

import attrs


@attrs.frozen
class PlaybackWindow:
    """Half-open interval [start, end) a theater is occupied by one screening plus buffer."""

    start: datetime
    end: datetime

    @classmethod
    def of(cls, *, start: datetime, duration_minutes: int, buffer_minutes: int) -> 'PlaybackWindow':
        return cls(start=start, end=start + timedelta(minutes=duration_minutes + buffer_minutes))

    def overlaps(self, other: 'PlaybackWindow') -> bool:
        return self.start < other.end and self.end > other.start

    def __str__(self) -> str:
        return f'{self.start:%H:%M}-{self.end:%H:%M}'
