"""
Showtime Scheduling Domain

Pure overlap detection between screenings in one theater on one day.
The caller loads the existing slots and guards the read-then-write with a lock.
"""

from datetime import datetime
from typing import Iterable, Optional

from src.service.cinema.domain.entity.showtime_entity import ShowtimeSlot
from src.service.cinema.domain.value_object.playback_window import PlaybackWindow


def find_conflict(
    *,
    starts_at: datetime,
    duration_minutes: int,
    existing: Iterable[ShowtimeSlot],
    buffer_minutes: int,
) -> Optional[ShowtimeSlot]:
    """Return the first existing slot whose playback window overlaps the new one."""
    new_window = PlaybackWindow.of(
        start=starts_at, duration_minutes=duration_minutes, buffer_minutes=buffer_minutes
    )
    for slot in sorted(existing, key=lambda s: s.starts_at):
        if new_window.overlaps(slot.window(buffer_minutes=buffer_minutes)):
            return slot
    return None
