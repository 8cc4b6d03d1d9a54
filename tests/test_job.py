import pytest

from jobclock import Job, JobStatus
from jobclock.exceptions import InvalidScheduleError
from tests.conftest import SATURDAY_NOON, create_cron_factory

MIDNIGHT = 1703980800


def create_job(expression: str = "0 0 * * *") -> Job:
    job = Job(job_id="backup", name="Nightly backup", expression=expression)
    job.set_current_time(SATURDAY_NOON)
    return job


def test_job_defaults() -> None:
    job = Job(
        job_id="backup",
        name="Nightly backup",
        expression="0 0 * * *",
        metadata="owner=ops",
    )

    assert job.is_valid()
    assert job.status is JobStatus.PENDING
    assert job.enabled
    assert job.run_count == 0
    assert job.fail_count == 0
    assert job.last_run_timestamp == 0
    assert job.metadata == "owner=ops"
    assert job.expression == "0 0 * * *"


def test_job_invalid_schedule() -> None:
    job = Job(job_id="broken", name="Broken", expression="invalid")

    assert not job.is_valid()
    with pytest.raises(InvalidScheduleError, match="expected 5 fields"):
        job.set_current_time(SATURDAY_NOON)


def test_set_current_time() -> None:
    job = create_job()

    assert job.next_run_timestamp == MIDNIGHT
    assert str(job) == (
        "Job(id='backup', status=pending, next_run=2023-12-31T00:00:00Z)"
    )


def test_is_due() -> None:
    job = create_job()

    assert not job.is_due(MIDNIGHT - 1)
    assert job.is_due(MIDNIGHT)
    assert job.is_due(MIDNIGHT + 3600)


@pytest.mark.parametrize(
    ("status", "enabled", "expected"),
    [
        pytest.param(JobStatus.PENDING, True, True, id="pending"),
        pytest.param(JobStatus.COMPLETED, True, True, id="completed"),
        pytest.param(JobStatus.FAILED, True, True, id="failed"),
        pytest.param(JobStatus.RUNNING, True, False, id="running"),
        pytest.param(JobStatus.DISABLED, True, False, id="disabled-status"),
        pytest.param(JobStatus.PENDING, False, False, id="disabled-flag"),
    ],
)
def test_is_due_eligibility(
    *,
    status: JobStatus,
    enabled: bool,
    expected: bool,
) -> None:
    job = create_job()
    job._status = status
    job.enabled = enabled

    assert job.is_due(MIDNIGHT) is expected


def test_mark_started() -> None:
    job = create_job()
    job.mark_started(MIDNIGHT)

    assert job.status is JobStatus.RUNNING
    assert job.last_run_timestamp == MIDNIGHT
    assert job.next_run_timestamp == MIDNIGHT
    assert job.run_count == 0
    assert not job.is_due(MIDNIGHT)


def test_mark_completed() -> None:
    job = create_job()
    job.mark_started(MIDNIGHT)
    job.mark_completed(MIDNIGHT + 120)

    assert job.status is JobStatus.COMPLETED
    assert job.run_count == 1
    assert job.fail_count == 0
    assert job.next_run_timestamp == MIDNIGHT + 86400
    assert not job.is_due(MIDNIGHT + 120)


def test_mark_failed() -> None:
    job = create_job()
    job.mark_started(MIDNIGHT)
    job.mark_failed(MIDNIGHT + 5)

    assert job.status is JobStatus.FAILED
    assert job.run_count == 1
    assert job.fail_count == 1
    assert job.next_run_timestamp == MIDNIGHT + 86400


def test_disable_and_enable() -> None:
    job = create_job()
    job.disable()

    assert not job.enabled
    assert job.status is JobStatus.DISABLED
    assert not job.is_due(MIDNIGHT)

    job.enable(MIDNIGHT + 60)

    assert job.enabled
    assert job.status is JobStatus.PENDING
    assert job.next_run_timestamp == MIDNIGHT + 86400


def test_reset_keeps_counters() -> None:
    job = create_job()
    job.mark_started(MIDNIGHT)
    job.mark_failed(MIDNIGHT)
    job.reset(MIDNIGHT + 86400 + 1)

    assert job.status is JobStatus.PENDING
    assert job.run_count == 1
    assert job.fail_count == 1
    assert job.next_run_timestamp == MIDNIGHT + 2 * 86400


def test_job_uses_cron_factory() -> None:
    factory = create_cron_factory()
    job = Job(
        job_id="mocked",
        name="Mocked",
        expression="* * * * *",
        cron_factory=factory,
    )
    job.set_current_time(100)
    job.mark_completed(200)

    factory.assert_called_once_with("* * * * *")
    job.schedule.raise_for_error.assert_called()
    assert job.next_run_timestamp == 200 + 120


def test_as_dict() -> None:
    job = create_job()
    job.mark_started(MIDNIGHT)

    assert job.as_dict() == {
        "id": "backup",
        "name": "Nightly backup",
        "expression": "0 0 * * *",
        "status": "running",
        "enabled": True,
        "next_run_timestamp": MIDNIGHT,
        "last_run_timestamp": MIDNIGHT,
        "run_count": 0,
        "fail_count": 0,
        "metadata": "",
    }
