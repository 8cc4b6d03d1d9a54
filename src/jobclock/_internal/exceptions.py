from typing_extensions import override


class BaseJobclockError(Exception):
    pass


class InvalidScheduleError(BaseJobclockError, ValueError):
    """Raised when an invalid cron schedule is put to use."""

    def __init__(self, expression: str, reason: str) -> None:
        self.expression: str = expression
        self.reason: str = reason
        super().__init__(f"invalid schedule {expression!r}: {reason}")


class JobNotFoundError(BaseJobclockError, KeyError):
    """Raised when a job is looked up by an unknown identifier."""

    def __init__(self, job_id: str) -> None:
        self.job_id: str = job_id
        super().__init__(f"Job with ID {job_id!r} is not registered.")

    @override
    def __str__(self) -> str:
        return str(self.args[0])
