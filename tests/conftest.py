from collections.abc import Callable
from datetime import datetime, timezone
from itertools import count
from unittest.mock import Mock

import pytest

from jobclock import Scheduler
from jobclock._internal.cron_parser import CronFactory, CronParser

# 2023-12-30 12:00:00 UTC, a Saturday.
SATURDAY_NOON = 1703937600


def utc_ts(  # noqa: PLR0913
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
) -> int:
    dt = datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
    return int(dt.timestamp())


@pytest.fixture
def scheduler() -> Scheduler:
    return Scheduler(start_time=SATURDAY_NOON)


def cron_next_run(step: int = 60) -> Callable[..., int]:
    cnt = count(1)

    def next_run(*, now: int) -> int:
        return now + step * next(cnt)

    return next_run


def create_cron_parser(*, is_valid: bool = True) -> Mock:
    cron = Mock(spec=CronParser)
    cron.expression = "* * * * *"
    cron.is_valid = is_valid
    cron.error_msg = "" if is_valid else "broken"
    cron.next_run.side_effect = cron_next_run()
    return cron


def create_cron_factory(*, is_valid: bool = True) -> CronFactory:
    return Mock(return_value=create_cron_parser(is_valid=is_valid))
