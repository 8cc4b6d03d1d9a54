"""Calendar helpers shared by schedules and jobs."""

from jobclock._internal.calendar import (
    civil_from_days,
    days_from_civil,
    days_in_month,
    format_timestamp,
    is_leap_year,
    to_calendar,
    to_timestamp,
    weekday_of,
)

__all__ = (
    "civil_from_days",
    "days_from_civil",
    "days_in_month",
    "format_timestamp",
    "is_leap_year",
    "to_calendar",
    "to_timestamp",
    "weekday_of",
)
