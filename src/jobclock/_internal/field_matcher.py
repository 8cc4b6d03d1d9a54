from __future__ import annotations

from typing_extensions import override

from jobclock._internal.common.constants import NO_MATCH


class FieldMatcher:
    """Set of allowed values for one cron field over ``[min_val, max_val]``.

    Values are stored as bits of an integer, bit ``v - min_val`` standing
    for value ``v``. Every value starts disallowed and values are only
    ever added.
    """

    __slots__: tuple[str, ...] = ("_bits", "max_val", "min_val")

    def __init__(self, min_val: int, max_val: int) -> None:
        self.min_val: int = min_val
        self.max_val: int = max_val
        self._bits: int = 0

    @override
    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"min_val={self.min_val}, "
            f"max_val={self.max_val}, "
            f"allowed={self.allowed()})"
        )

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldMatcher):
            return NotImplemented
        return (self.min_val, self.max_val, self._bits) == (
            other.min_val,
            other.max_val,
            other._bits,
        )

    @override
    def __hash__(self) -> int:
        return hash((self.min_val, self.max_val, self._bits))

    def set_all(self) -> None:
        self._bits = (1 << (self.max_val - self.min_val + 1)) - 1

    def set_value(self, value: int) -> None:
        if self.min_val <= value <= self.max_val:
            self._bits |= 1 << (value - self.min_val)

    def set_range(self, start: int, end: int, step: int = 1) -> None:
        step = max(step, 1)
        for value in range(start, end + 1, step):
            self.set_value(value)

    def matches(self, value: int) -> bool:
        if not self.min_val <= value <= self.max_val:
            return False
        return bool(self._bits >> (value - self.min_val) & 1)

    def next_match(self, start: int) -> int:
        """Return the smallest allowed value ``>= start``.

        Returns:
            The value found, or ``NO_MATCH`` when nothing at or above
            `start` is allowed; the caller then rolls the next larger
            time unit forward.

        """
        start = max(start, self.min_val)
        if start > self.max_val:
            return NO_MATCH
        remaining = self._bits >> (start - self.min_val)
        if not remaining:
            return NO_MATCH
        lowest = (remaining & -remaining).bit_length() - 1
        return start + lowest

    def first_match(self) -> int:
        found = self.next_match(self.min_val)
        return self.min_val if found == NO_MATCH else found

    def is_empty(self) -> bool:
        return self._bits == 0

    def allowed(self) -> list[int]:
        return [
            value
            for value in range(self.min_val, self.max_val + 1)
            if self.matches(value)
        ]
