from enum import StrEnum


class MovieStatus(StrEnum):
    NOW_SHOWING = 'now_showing'
    COMING_SOON = 'coming_soon'
