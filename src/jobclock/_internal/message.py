from dataclasses import dataclass


@dataclass(slots=True, kw_only=True, frozen=True)
class JobResult:
    """Outcome of one external execution, reported back to the scheduler.

    The scheduler does not retain results; only the status transition
    they trigger is recorded on the job.
    """

    job_id: str
    success: bool
    start_time: int
    end_time: int
    error: str = ""
    output: str = ""

    @property
    def duration(self) -> int:
        return max(0, self.end_time - self.start_time)
