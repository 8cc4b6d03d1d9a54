"""Five-field cron expression parsing, matching and next-run search."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from typing_extensions import override

from jobclock._internal import calendar
from jobclock._internal.common.constants import (
    MAX_SEARCH_STEPS,
    NO_MATCH,
    CronField,
)
from jobclock._internal.common.datastructures import NextRun
from jobclock._internal.cron_parser import CronParser
from jobclock._internal.exceptions import InvalidScheduleError
from jobclock._internal.field_matcher import FieldMatcher

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger("jobclock.schedule")

FIELD_COUNT: Final = 5
_ALLOWED_CHARS: Final = frozenset("0123456789*-,/")


class _FieldSyntaxError(Exception):
    pass


def _to_int(text: str) -> int:
    if not text.isascii() or not text.isdigit():
        msg = f"malformed integer {text!r}"
        raise _FieldSyntaxError(msg)
    return int(text)


def _apply_item(item: str, matcher: FieldMatcher) -> None:
    base, sep, step_text = item.partition("/")
    step = 1
    if sep:
        step = _to_int(step_text)
        if step <= 0:
            msg = f"step must be positive, got {step}"
            raise _FieldSyntaxError(msg)

    if base == "*":
        if sep:
            matcher.set_range(matcher.min_val, matcher.max_val, step)
        else:
            matcher.set_all()
        return

    if "-" in base:
        start_text, _, end_text = base.partition("-")
        start, end = _to_int(start_text), _to_int(end_text)
        if start > end:
            msg = f"inverted range {start}-{end}"
            raise _FieldSyntaxError(msg)
        matcher.set_range(start, end, step)
        return

    value = _to_int(base)
    if sep:
        matcher.set_range(value, matcher.max_val, step)
    else:
        matcher.set_value(value)


def parse_field(text: str, field: CronField) -> FieldMatcher:
    """Parse one comma-separated cron field.

    Raises:
        _FieldSyntaxError: the text is not valid for `field`.

    """
    bad_chars = set(text) - _ALLOWED_CHARS
    if bad_chars:
        msg = f"unexpected character {sorted(bad_chars)[0]!r}"
        raise _FieldSyntaxError(msg)

    bounds = field.value
    matcher = FieldMatcher(bounds.min_val, bounds.max_val)
    for item in text.split(","):
        _apply_item(item, matcher)
    if matcher.is_empty():
        msg = f"no values within [{bounds.min_val}, {bounds.max_val}]"
        raise _FieldSyntaxError(msg)
    return matcher


class Schedule(CronParser):
    """A parsed five-field cron expression.

    Parsing never raises: a bad expression produces a schedule with
    ``is_valid`` set to false and a human readable ``error_msg``. An
    invalid schedule matches nothing and refuses to compute run times.

    The five fields are matched independently, so a restricted day of
    month and a restricted weekday must both hold.
    """

    __slots__: tuple[str, ...] = (
        "_day",
        "_error_msg",
        "_expression",
        "_hour",
        "_is_valid",
        "_minute",
        "_month",
        "_weekday",
        "max_search_steps",
    )

    def __init__(
        self,
        expression: str,
        *,
        max_search_steps: int = MAX_SEARCH_STEPS,
    ) -> None:
        self._expression: Final = expression
        self._is_valid: bool = False
        self._error_msg: str = ""
        self.max_search_steps: int = max_search_steps

        matchers = {
            field: FieldMatcher(field.value.min_val, field.value.max_val)
            for field in CronField
        }
        self._parse(expression, matchers)

        self._minute: Final = matchers[CronField.MINUTE]
        self._hour: Final = matchers[CronField.HOUR]
        self._day: Final = matchers[CronField.DAY]
        self._month: Final = matchers[CronField.MONTH]
        self._weekday: Final = matchers[CronField.WEEKDAY]

    def _parse(
        self,
        expression: str,
        matchers: dict[CronField, FieldMatcher],
    ) -> None:
        parts = expression.split()
        if len(parts) != FIELD_COUNT:
            self._error_msg = (
                f"expected {FIELD_COUNT} fields, got {len(parts)} "
                f"in {expression!r}"
            )
            logger.debug("Cron parse failed: %s", self._error_msg)
            return

        for field, text in zip(CronField, parts, strict=True):
            try:
                matchers[field] = parse_field(text, field)
            except _FieldSyntaxError as exc:
                self._error_msg = (
                    f"invalid {field.value.name} field {text!r}: {exc}"
                )
                logger.debug("Cron parse failed: %s", self._error_msg)
                return

        self._is_valid = True

    @override
    def __repr__(self) -> str:
        return (
            f"{type(self).__qualname__}("
            f"expression={self._expression!r}, "
            f"is_valid={self._is_valid})"
        )

    @override
    def __str__(self) -> str:
        return self._expression

    @property
    @override
    def expression(self) -> str:
        return self._expression

    @property
    @override
    def is_valid(self) -> bool:
        return self._is_valid

    @property
    @override
    def error_msg(self) -> str:
        return self._error_msg

    @property
    def minute(self) -> FieldMatcher:
        return self._minute

    @property
    def hour(self) -> FieldMatcher:
        return self._hour

    @property
    def day(self) -> FieldMatcher:
        return self._day

    @property
    def month(self) -> FieldMatcher:
        return self._month

    @property
    def weekday(self) -> FieldMatcher:
        return self._weekday

    @override
    def raise_for_error(self) -> None:
        if not self._is_valid:
            raise InvalidScheduleError(self._expression, self._error_msg)

    def matches(  # noqa: PLR0913
        self,
        minute: int,
        hour: int,
        day: int,
        month: int,
        weekday: int,
    ) -> bool:
        if not self._is_valid:
            return False
        return (
            self._minute.matches(minute)
            and self._hour.matches(hour)
            and self._day.matches(day)
            and self._month.matches(month)
            and self._weekday.matches(weekday)
        )

    def matches_timestamp(self, timestamp: int) -> bool:
        ct = calendar.to_calendar(timestamp)
        return self.matches(ct.minute, ct.hour, ct.day, ct.month, ct.weekday)

    def next_run_after(  # noqa: C901, PLR0912, PLR0913, PLR0915
        self,
        minute: int,
        hour: int,
        day: int,
        month: int,
        year: int,
        weekday: int,  # noqa: ARG002
    ) -> NextRun:
        """Find the first matching minute strictly after the given one.

        The weekday argument is accepted for symmetry with `matches`; it
        is recomputed from the date as the search moves.

        ``max_search_steps`` counts loop passes, not minutes. A pass may
        skip a whole month or year, so the default bound covers far more
        than one year of calendar time; an unsatisfiable schedule burns
        every pass, which takes on the order of a second per call.

        Returns:
            The matching point in time. When no match is found within
            ``max_search_steps`` iterations (e.g. day 31 of February),
            midnight of January 1st of the following year is returned.

        Raises:
            InvalidScheduleError: the schedule failed to parse.

        """
        self.raise_for_error()

        minute_m, hour_m = self._minute, self._hour
        day_m, month_m = self._day, self._month
        weekday_m = self._weekday

        def next_day() -> None:
            nonlocal day, month, year
            day += 1
            if day > calendar.days_in_month(year, month):
                day = 1
                month += 1
                if month > 12:  # noqa: PLR2004
                    month = 1
                    year += 1

        start_year = year
        minute += 1
        if minute > minute_m.max_val:
            minute = 0
            hour += 1

        for _ in range(self.max_search_steps):
            found = month_m.next_match(month)
            if found == NO_MATCH:
                year += 1
                month = month_m.first_match()
                day = day_m.first_match()
                hour = hour_m.first_match()
                minute = minute_m.first_match()
                continue
            if found > month:
                month = found
                day = day_m.first_match()
                hour = hour_m.first_match()
                minute = minute_m.first_match()
                continue

            found = day_m.next_match(day)
            if found == NO_MATCH or found > calendar.days_in_month(
                year,
                month,
            ):
                day = 1
                month += 1
                if month > 12:  # noqa: PLR2004
                    month = 1
                    year += 1
                hour = hour_m.first_match()
                minute = minute_m.first_match()
                continue
            if found > day:
                day = found
                hour = hour_m.first_match()
                minute = minute_m.first_match()

            if not weekday_m.matches(calendar.weekday_of(year, month, day)):
                next_day()
                hour = hour_m.first_match()
                minute = minute_m.first_match()
                continue

            found = hour_m.next_match(hour)
            if found == NO_MATCH:
                next_day()
                hour = hour_m.first_match()
                minute = minute_m.first_match()
                continue
            if found > hour:
                hour = found
                minute = minute_m.first_match()

            found = minute_m.next_match(minute)
            if found == NO_MATCH:
                hour += 1
                if hour > hour_m.max_val:
                    hour = 0
                    next_day()
                minute = minute_m.first_match()
                continue

            return NextRun(
                minute=found,
                hour=hour,
                day=day,
                month=month,
                year=year,
            )

        logger.warning(
            "No run time found for %r within %s search steps; "
            "falling back to %s-01-01 00:00",
            self._expression,
            self.max_search_steps,
            start_year + 1,
        )
        return NextRun(minute=0, hour=0, day=1, month=1, year=start_year + 1)

    @override
    def next_run(self, *, now: int) -> int:
        """Compute the next run timestamp strictly after `now`.

        Seconds within the current minute are ignored, so the result is
        always at least one whole minute boundary past `now`.
        """
        ct = calendar.to_calendar(now)
        run = self.next_run_after(
            ct.minute,
            ct.hour,
            ct.day,
            ct.month,
            ct.year,
            ct.weekday,
        )
        return calendar.to_timestamp(
            run.year,
            run.month,
            run.day,
            run.hour,
            run.minute,
        )

    def iter_runs(self, *, now: int) -> Iterator[int]:
        """Yield successive run timestamps strictly after `now`."""
        while True:
            now = self.next_run(now=now)
            yield now
