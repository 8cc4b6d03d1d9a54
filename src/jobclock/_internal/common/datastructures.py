from typing import NamedTuple


class CalendarTime(NamedTuple):
    """Broken-down UTC calendar components of an epoch timestamp."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    weekday: int


class NextRun(NamedTuple):
    minute: int
    hour: int
    day: int
    month: int
    year: int
