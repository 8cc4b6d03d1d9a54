import pytest

from jobclock import Schedule, Scheduler
from jobclock.exceptions import (
    BaseJobclockError,
    InvalidScheduleError,
    JobNotFoundError,
)


def test_invalid_schedule_error() -> None:
    schedule = Schedule("* * * * 9")

    with pytest.raises(InvalidScheduleError) as exc_info:
        schedule.raise_for_error()

    exc = exc_info.value
    assert isinstance(exc, BaseJobclockError)
    assert isinstance(exc, ValueError)
    assert exc.expression == "* * * * 9"
    assert exc.reason == schedule.error_msg
    assert str(exc) == (
        "invalid schedule '* * * * 9': invalid weekday field '9': "
        "no values within [0, 6]"
    )


def test_job_not_found_error() -> None:
    scheduler = Scheduler()

    with pytest.raises(KeyError) as exc_info:
        _ = scheduler["ghost"]

    exc = exc_info.value
    assert isinstance(exc, JobNotFoundError)
    assert isinstance(exc, BaseJobclockError)
    assert exc.job_id == "ghost"
    assert str(exc) == "Job with ID 'ghost' is not registered."
