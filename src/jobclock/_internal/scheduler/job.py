from __future__ import annotations

from typing import TYPE_CHECKING, Any, final

from typing_extensions import override

from jobclock._internal.calendar import format_timestamp
from jobclock._internal.common.constants import NEVER, JobStatus
from jobclock.crontab import create_crontab

if TYPE_CHECKING:
    from jobclock._internal.cron_parser import CronFactory, CronParser


@final
class Job:
    """One schedulable unit tracked against a caller supplied clock.

    A job never runs anything itself: the ``mark_*`` methods only record
    what an external executor reports and recompute the next run time.
    """

    __slots__: tuple[str, ...] = (
        "_status",
        "enabled",
        "fail_count",
        "id",
        "last_run_timestamp",
        "metadata",
        "name",
        "next_run_timestamp",
        "run_count",
        "schedule",
    )

    def __init__(  # noqa: PLR0913
        self,
        *,
        job_id: str,
        name: str,
        expression: str,
        metadata: str = "",
        cron_factory: CronFactory = create_crontab,
    ) -> None:
        self.id: str = job_id
        self.name: str = name
        self.metadata: str = metadata
        self.schedule: CronParser = cron_factory(expression)
        self.next_run_timestamp: int = NEVER
        self.last_run_timestamp: int = NEVER
        self.enabled: bool = True
        self.run_count: int = 0
        self.fail_count: int = 0
        self._status: JobStatus = JobStatus.PENDING

    @property
    def status(self) -> JobStatus:
        return self._status

    @property
    def expression(self) -> str:
        return self.schedule.expression

    @override
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}("
            f"id={self.id!r}, "
            f"status={self._status.value}, "
            f"next_run={format_timestamp(self.next_run_timestamp)})"
        )

    def is_valid(self) -> bool:
        return self.schedule.is_valid

    def is_due(self, now: int) -> bool:
        if not self.enabled:
            return False
        if self._status in (JobStatus.DISABLED, JobStatus.RUNNING):
            return False
        return self.next_run_timestamp <= now

    def set_current_time(self, now: int) -> None:
        """Recompute the next run as the first match strictly after `now`.

        Raises:
            InvalidScheduleError: the job's schedule failed to parse.

        """
        self.schedule.raise_for_error()
        self.next_run_timestamp = self.schedule.next_run(now=now)

    def mark_started(self, now: int) -> None:
        self._status = JobStatus.RUNNING
        self.last_run_timestamp = now

    def mark_completed(self, now: int) -> None:
        self._status = JobStatus.COMPLETED
        self.run_count += 1
        self.set_current_time(now)

    def mark_failed(self, now: int) -> None:
        self._status = JobStatus.FAILED
        self.run_count += 1
        self.fail_count += 1
        self.set_current_time(now)

    def disable(self) -> None:
        self.enabled = False
        self._status = JobStatus.DISABLED

    def enable(self, now: int) -> None:
        self.enabled = True
        self._status = JobStatus.PENDING
        self.set_current_time(now)

    def reset(self, now: int) -> None:
        self._status = JobStatus.PENDING
        self.set_current_time(now)

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "expression": self.expression,
            "status": self._status.value,
            "enabled": self.enabled,
            "next_run_timestamp": self.next_run_timestamp,
            "last_run_timestamp": self.last_run_timestamp,
            "run_count": self.run_count,
            "fail_count": self.fail_count,
            "metadata": self.metadata,
        }
