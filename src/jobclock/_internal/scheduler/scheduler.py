from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from typing_extensions import Self

from jobclock._internal.calendar import format_timestamp
from jobclock._internal.common.constants import (
    NOT_FOUND,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    JobStatus,
)
from jobclock._internal.configuration import SchedulerConfiguration
from jobclock._internal.exceptions import JobNotFoundError
from jobclock._internal.scheduler.job import Job
from jobclock.crontab import create_crontab

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from jobclock._internal.cron_parser import CronFactory
    from jobclock._internal.message import JobResult

logger = logging.getLogger("jobclock.scheduler")


@dataclass(slots=True, kw_only=True, frozen=True)
class SchedulerStats:
    total_jobs: int
    enabled_jobs: int
    pending_jobs: int
    running_jobs: int
    due_jobs: int
    total_runs: int
    total_failures: int

    @property
    def success_rate(self) -> float:
        if self.total_runs == 0:
            return 1.0
        return (self.total_runs - self.total_failures) / self.total_runs


class Scheduler:
    """Ordered collection of jobs evaluated against a simulated clock.

    Time only moves when the caller calls `set_time` or `advance_time`,
    and nothing is executed here: callers fetch `get_due_jobs`, run the
    work themselves and report back through the ``mark_job_*`` methods.
    Unknown job identifiers are never an error, the methods addressing
    a job return ``False`` or ``None`` instead.

    The scheduler is not thread safe; callers must serialize access.
    """

    __slots__: tuple[str, ...] = ("_configs", "_jobs", "current_time")

    def __init__(
        self,
        *,
        start_time: int = 0,
        cron_factory: CronFactory = create_crontab,
    ) -> None:
        self._configs: SchedulerConfiguration = SchedulerConfiguration(
            cron_factory=cron_factory,
            start_time=start_time,
        )
        self.current_time: int = start_time
        self._jobs: dict[str, Job] = {}

    @classmethod
    def from_config(cls, configs: SchedulerConfiguration) -> Self:
        return cls(
            start_time=configs.start_time,
            cron_factory=configs.cron_factory,
        )

    def __len__(self) -> int:
        return len(self._jobs)

    def __contains__(self, job_id: object) -> bool:
        return job_id in self._jobs

    def __iter__(self) -> Iterator[Job]:
        return iter(list(self._jobs.values()))

    def __getitem__(self, job_id: str) -> Job:
        try:
            return self._jobs[job_id]
        except KeyError:
            raise JobNotFoundError(job_id) from None

    def add_job(
        self,
        job_id: str,
        name: str,
        expression: str,
        metadata: str = "",
    ) -> bool:
        if job_id in self._jobs:
            logger.warning("Job %r is already registered", job_id)
            return False

        job = Job(
            job_id=job_id,
            name=name,
            expression=expression,
            metadata=metadata,
            cron_factory=self._configs.cron_factory,
        )
        if not job.is_valid():
            logger.warning(
                "Job %r rejected: %s",
                job_id,
                job.schedule.error_msg,
            )
            return False

        job.set_current_time(self.current_time)
        self._jobs[job_id] = job
        logger.debug(
            "Job %r added, next run at %s",
            job_id,
            format_timestamp(job.next_run_timestamp),
        )
        return True

    def remove_job(self, job_id: str) -> bool:
        if self._jobs.pop(job_id, None) is None:
            return False
        logger.debug("Job %r removed", job_id)
        return True

    def has_job(self, job_id: str) -> bool:
        return job_id in self._jobs

    def get_job(self, job_id: str) -> Job | None:
        return self._jobs.get(job_id)

    def get_job_index(self, job_id: str) -> int:
        for index, existing_id in enumerate(self._jobs):
            if existing_id == job_id:
                return index
        return NOT_FOUND

    def clear(self) -> None:
        self._jobs.clear()

    def set_time(self, timestamp: int) -> None:
        self.current_time = timestamp
        for job in self._jobs.values():
            if job.enabled and job.status is not JobStatus.RUNNING:
                job.set_current_time(timestamp)
        logger.debug("Clock set to %s", format_timestamp(timestamp))

    def advance_time(self, seconds: int) -> None:
        self.current_time += seconds

    def advance_minutes(self, minutes: int) -> None:
        self.advance_time(minutes * SECONDS_PER_MINUTE)

    def advance_hours(self, hours: int) -> None:
        self.advance_time(hours * SECONDS_PER_HOUR)

    def advance_days(self, days: int) -> None:
        self.advance_time(days * SECONDS_PER_DAY)

    def get_due_jobs(self) -> list[str]:
        return [
            job.id
            for job in self._jobs.values()
            if job.is_due(self.current_time)
        ]

    def get_due_job_count(self) -> int:
        return sum(
            1 for job in self._jobs.values() if job.is_due(self.current_time)
        )

    def _transition(self, job_id: str, action: Callable[[Job], None]) -> bool:
        job = self._jobs.get(job_id)
        if job is None:
            return False
        action(job)
        logger.debug(
            "Job %r is now %s at %s",
            job_id,
            job.status.value,
            format_timestamp(self.current_time),
        )
        return True

    def mark_job_started(self, job_id: str) -> bool:
        now = self.current_time
        return self._transition(job_id, lambda job: job.mark_started(now))

    def mark_job_completed(self, job_id: str) -> bool:
        now = self.current_time
        return self._transition(job_id, lambda job: job.mark_completed(now))

    def mark_job_failed(self, job_id: str) -> bool:
        now = self.current_time
        return self._transition(job_id, lambda job: job.mark_failed(now))

    def disable_job(self, job_id: str) -> bool:
        return self._transition(job_id, Job.disable)

    def enable_job(self, job_id: str) -> bool:
        now = self.current_time
        return self._transition(job_id, lambda job: job.enable(now))

    def reset_job(self, job_id: str) -> bool:
        now = self.current_time
        return self._transition(job_id, lambda job: job.reset(now))

    def report(self, result: JobResult) -> bool:
        """Apply an execution outcome reported by the external executor."""
        if not result.success:
            logger.debug("Job %r failed: %s", result.job_id, result.error)
            return self.mark_job_failed(result.job_id)
        return self.mark_job_completed(result.job_id)

    def job_count(self) -> int:
        return len(self._jobs)

    def enabled_job_count(self) -> int:
        return sum(1 for job in self._jobs.values() if job.enabled)

    def pending_job_count(self) -> int:
        return sum(
            1
            for job in self._jobs.values()
            if job.status is JobStatus.PENDING
        )

    def running_job_count(self) -> int:
        return sum(
            1
            for job in self._jobs.values()
            if job.status is JobStatus.RUNNING
        )

    def all_job_ids(self) -> list[str]:
        return list(self._jobs)

    def next_due_time(self) -> int:
        return min(
            (
                job.next_run_timestamp
                for job in self._jobs.values()
                if job.enabled
            ),
            default=NOT_FOUND,
        )

    def time_until_next_due(self) -> int:
        next_due = self.next_due_time()
        if next_due == NOT_FOUND:
            return NOT_FOUND
        return max(0, next_due - self.current_time)

    def stats(self) -> SchedulerStats:
        jobs = self._jobs.values()
        return SchedulerStats(
            total_jobs=len(self._jobs),
            enabled_jobs=self.enabled_job_count(),
            pending_jobs=self.pending_job_count(),
            running_jobs=self.running_job_count(),
            due_jobs=self.get_due_job_count(),
            total_runs=sum(job.run_count for job in jobs),
            total_failures=sum(job.fail_count for job in jobs),
        )
