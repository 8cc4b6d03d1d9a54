"""Cron expression parser entry point."""

from jobclock._internal.schedule import Schedule

CronTab = Schedule


def create_crontab(expression: str) -> Schedule:
    """Create a parsed schedule.

    Args:
        expression: A five-field cron expression.

    Returns:
        A new schedule; check ``is_valid`` before putting it to use.

    """
    return Schedule(expression)
