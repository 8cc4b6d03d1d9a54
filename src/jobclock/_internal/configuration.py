from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from jobclock.crontab import create_crontab

if TYPE_CHECKING:
    from jobclock._internal.cron_parser import CronFactory


@dataclass(slots=True, kw_only=True)
class SchedulerConfiguration:
    """Settings a `Scheduler` is built from.

    ``cron_factory`` turns an expression into a parser; pass e.g.
    ``functools.partial(CronTab, max_search_steps=...)`` to bound the
    next-run search differently.
    """

    cron_factory: CronFactory = create_crontab
    start_time: int = 0

    def __post_init__(self) -> None:
        if not callable(self.cron_factory):
            msg = "cron_factory must be callable."
            raise TypeError(msg)
