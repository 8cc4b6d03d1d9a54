"""In-memory cron scheduling driven by a caller supplied clock.

This module exposes the cron parser, the job lifecycle model and the
scheduler that tracks which jobs are due at the current simulated time.
"""

from importlib.metadata import version as get_version

from jobclock._internal.common.constants import JobStatus
from jobclock._internal.common.datastructures import CalendarTime, NextRun
from jobclock._internal.configuration import SchedulerConfiguration
from jobclock._internal.cron_parser import CronParser
from jobclock._internal.field_matcher import FieldMatcher
from jobclock._internal.message import JobResult
from jobclock._internal.schedule import Schedule
from jobclock._internal.scheduler.job import Job
from jobclock._internal.scheduler.scheduler import Scheduler, SchedulerStats

__version__ = get_version("jobclock")
__all__ = (
    "CalendarTime",
    "CronParser",
    "FieldMatcher",
    "Job",
    "JobResult",
    "JobStatus",
    "NextRun",
    "Schedule",
    "Scheduler",
    "SchedulerConfiguration",
    "SchedulerStats",
)
