"""
Collation Ordering
==================
The result of every comparison: element, sequence, or range level.

Values mirror the classic cmp() convention (-1 / 0 / 1) so an Ordering
can be built from the sign of any integer.
"""

from enum import Enum
from typing import Any

from collation.errors import InvalidOrderingError


class Ordering(Enum):
    """Relative order of a left value with respect to a right value."""
    LESS = -1
    EQUAL = 0
    GREATER = 1

    def reverse(self) -> "Ordering":
        """Swap LESS and GREATER; EQUAL stays EQUAL."""
        return _REVERSED[self]

    @classmethod
    def from_int(cls, n: int) -> "Ordering":
        """Map the sign of an old-style cmp() result to an Ordering."""
        if n < 0:
            return cls.LESS
        if n > 0:
            return cls.GREATER
        return cls.EQUAL

    @classmethod
    def of(cls, left: Any, right: Any) -> "Ordering":
        """Natural ordering of two values via their < and > operators."""
        if left < right:
            return cls.LESS
        if left > right:
            return cls.GREATER
        return cls.EQUAL

    @classmethod
    def coerce(cls, value: Any) -> "Ordering":
        """
        Accept an Ordering or a plain int (cmp-style) from a strategy.
        Raises InvalidOrderingError for anything else.
        """
        if isinstance(value, Ordering):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.from_int(value)
        raise InvalidOrderingError(value)


_REVERSED = {
    Ordering.LESS: Ordering.GREATER,
    Ordering.EQUAL: Ordering.EQUAL,
    Ordering.GREATER: Ordering.LESS,
}


def compare_with(strategy: Any, left: Any, right: Any) -> Ordering:
    """
    Call ``strategy.compare(left, right)`` and normalise the result.
    cmp-style ints become an Ordering; anything else raises
    InvalidOrderingError.
    """
    result = strategy.compare(left, right)
    if result.__class__ is not Ordering:
        result = Ordering.coerce(result)
    return result
