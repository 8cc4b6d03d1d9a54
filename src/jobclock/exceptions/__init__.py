"""Exceptions raised by jobclock.

Parse failures and unknown job identifiers are reported through return
values; these exceptions cover putting an invalid schedule to use and
mapping-style lookups of jobs that are not registered.
"""

from jobclock._internal.exceptions import (
    BaseJobclockError,
    InvalidScheduleError,
    JobNotFoundError,
)

__all__ = (
    "BaseJobclockError",
    "InvalidScheduleError",
    "JobNotFoundError",
)
