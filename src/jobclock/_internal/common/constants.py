from enum import Enum, unique
from typing import Final, NamedTuple

NO_MATCH: Final = -1
NEVER: Final = 0
NOT_FOUND: Final = -1
MAX_SEARCH_STEPS: Final = 366 * 24 * 60

SECONDS_PER_MINUTE: Final = 60
SECONDS_PER_HOUR: Final = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY: Final = 24 * SECONDS_PER_HOUR


@unique
class JobStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    DISABLED = "disabled"


class FieldBounds(NamedTuple):
    name: str
    min_val: int
    max_val: int


@unique
class CronField(Enum):
    MINUTE = FieldBounds("minute", 0, 59)
    HOUR = FieldBounds("hour", 0, 23)
    DAY = FieldBounds("day", 1, 31)
    MONTH = FieldBounds("month", 1, 12)
    WEEKDAY = FieldBounds("weekday", 0, 6)
