"""Epoch timestamp <-> proleptic Gregorian calendar conversion.

All arithmetic is done on integers in a fixed UTC-equivalent calendar
with no leap seconds, so results are defined for any signed 64-bit
timestamp, including those outside the range ``datetime`` supports.
"""

from __future__ import annotations

from jobclock._internal.common.constants import (
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)
from jobclock._internal.common.datastructures import CalendarTime

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):  # noqa: PLR2004
        return 29
    return _DAYS_IN_MONTH[month - 1]


def weekday_of(year: int, month: int, day: int) -> int:
    """Return the day of week using Zeller's congruence.

    January and February count as months 13 and 14 of the previous year.

    Returns:
        0 for Sunday through 6 for Saturday.

    """
    if month < 3:  # noqa: PLR2004
        month += 12
        year -= 1
    k = year % 100
    j = year // 100
    h = (day + (13 * (month + 1)) // 5 + k + k // 4 + j // 4 + 5 * j) % 7
    # Zeller yields 0=Saturday; shift so that 0=Sunday.
    return (h + 6) % 7


def days_from_civil(year: int, month: int, day: int) -> int:
    """Count days between 1970-01-01 and the given date."""
    year -= month <= 2  # noqa: PLR2004
    era = year // 400
    yoe = year - era * 400
    mp = (month + 9) % 12
    doy = (153 * mp + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146097 + doe - 719468


def civil_from_days(days: int) -> tuple[int, int, int]:
    """Inverse of `days_from_civil`, returning ``(year, month, day)``."""
    days += 719468
    era = days // 146097
    doe = days - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9  # noqa: PLR2004
    year = yoe + era * 400 + (month <= 2)  # noqa: PLR2004
    return (year, month, day)


def to_calendar(timestamp: int) -> CalendarTime:
    days, rem = divmod(timestamp, SECONDS_PER_DAY)
    year, month, day = civil_from_days(days)
    hour, rem = divmod(rem, SECONDS_PER_HOUR)
    minute, second = divmod(rem, SECONDS_PER_MINUTE)
    return CalendarTime(
        year=year,
        month=month,
        day=day,
        hour=hour,
        minute=minute,
        second=second,
        weekday=weekday_of(year, month, day),
    )


def to_timestamp(  # noqa: PLR0913
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
) -> int:
    return (
        days_from_civil(year, month, day) * SECONDS_PER_DAY
        + hour * SECONDS_PER_HOUR
        + minute * SECONDS_PER_MINUTE
        + second
    )


def format_timestamp(timestamp: int) -> str:
    ct = to_calendar(timestamp)
    return (
        f"{ct.year:04d}-{ct.month:02d}-{ct.day:02d}"
        f"T{ct.hour:02d}:{ct.minute:02d}:{ct.second:02d}Z"
    )
