"""
Collation Ranges
================
Prefix ranges over collated sequences, and overlap classification of spans.

A Range selects every row that starts with ``prefix`` and whose next
element (at position len(prefix)) lies between ``start`` and ``end``:

    Range([1], Included(2), Excluded(5))   → rows [1, 2, ...] .. [1, 4, ...]
    Range.with_prefix([1])                 → every row starting with [1]

Bounds follow the B-Tree range scan convention: each side is either
unbounded, inclusive or exclusive.

A Span is a half-open [start, end) interval of single elements; comparing
two spans yields an Overlap, the hierarchical counterpart of Ordering.
"""

from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any, Callable, Generic, Sequence, Tuple, TypeVar

from collation.errors import InvalidRangeError
from collation.ordering import Ordering, compare_with
from collation.strategies import Collate

V = TypeVar("V")

LESS = Ordering.LESS
EQUAL = Ordering.EQUAL
GREATER = Ordering.GREATER


# ─── Bounds ─────────────────────────────────────────────────────────────────

class Bound(Generic[V]):
    """One side of a range: Unbounded, Included(value) or Excluded(value)."""
    __slots__ = ()

    @property
    def is_bounded(self) -> bool:
        return not isinstance(self, _UnboundedType)


class _UnboundedType(Bound):
    __slots__ = ()

    def __repr__(self):
        return "Unbounded"

    def __eq__(self, other):
        return isinstance(other, _UnboundedType)

    def __hash__(self):
        return hash("Unbounded")


Unbounded = _UnboundedType()


class Included(Bound[V]):
    __slots__ = ("value",)

    def __init__(self, value: V):
        self.value = value

    def __repr__(self):
        return f"Included({self.value!r})"

    def __eq__(self, other):
        return isinstance(other, Included) and other.value == self.value

    def __hash__(self):
        return hash(("Included", self.value))


class Excluded(Bound[V]):
    __slots__ = ("value",)

    def __init__(self, value: V):
        self.value = value

    def __repr__(self):
        return f"Excluded({self.value!r})"

    def __eq__(self, other):
        return isinstance(other, Excluded) and other.value == self.value

    def __hash__(self):
        return hash(("Excluded", self.value))


def _check_bound(bound: Any, side: str) -> Bound:
    if not isinstance(bound, Bound):
        raise InvalidRangeError(
            f"Range {side} must be Unbounded, Included or Excluded, got {bound!r}"
        )
    return bound


# ─── Range ──────────────────────────────────────────────────────────────────

class Range(Generic[V]):
    """A prefix plus start/end bounds on the element that follows it."""
    __slots__ = ("_prefix", "_start", "_end")

    def __init__(self, prefix: Sequence[V] = (), start: Bound = Unbounded,
                 end: Bound = Unbounded):
        self._prefix = prefix
        self._start = _check_bound(start, "start")
        self._end = _check_bound(end, "end")

    @classmethod
    def new(cls, prefix: Sequence[V], start: V, end: V) -> "Range[V]":
        """Range over [start, end) after ``prefix``."""
        return cls(prefix, Included(start), Excluded(end))

    @classmethod
    def with_prefix(cls, prefix: Sequence[V]) -> "Range[V]":
        """Every row that starts with ``prefix``."""
        return cls(prefix)

    @classmethod
    def from_tuple(cls, parts: Tuple) -> "Range[V]":
        """Build from (prefix,) or (prefix, start_bound, end_bound)."""
        if len(parts) == 1:
            return cls(parts[0])
        if len(parts) == 3:
            return cls(parts[0], parts[1], parts[2])
        raise InvalidRangeError(f"Expected (prefix,) or (prefix, start, end), got {parts!r}")

    @property
    def prefix(self) -> Sequence[V]:
        return self._prefix

    @property
    def start(self) -> Bound:
        return self._start

    @property
    def end(self) -> Bound:
        return self._end

    def has_bounds(self) -> bool:
        """False when both start and end are Unbounded."""
        return self._start.is_bounded or self._end.is_bounded

    def into_inner(self) -> Tuple[Sequence[V], Bound, Bound]:
        return self._prefix, self._start, self._end

    def __len__(self) -> int:
        if self.has_bounds():
            return len(self._prefix) + 1
        return len(self._prefix)

    def __eq__(self, other):
        if not isinstance(other, Range):
            return NotImplemented
        return (list(self._prefix) == list(other._prefix)
                and self._start == other._start and self._end == other._end)

    def __hash__(self):
        return hash((tuple(self._prefix), self._start, self._end))

    def __repr__(self):
        start, end = self._start, self._end
        left = "(" if not start.is_bounded else ("[" if isinstance(start, Included) else "(")
        right = ")" if not end.is_bounded else ("]" if isinstance(end, Included) else ")")
        lo = repr(start.value) if start.is_bounded else ""
        hi = repr(end.value) if end.is_bounded else ""
        prefix = ", ".join(repr(v) for v in self._prefix)
        if self.has_bounds():
            return f"Range {left}{lo}, {hi}{right} with prefix [{prefix}]"
        return f"Range with prefix [{prefix}]"

    # ─── Containment ────────────────────────────────────────────────

    def contains(self, other: "Range[V]", strategy: Collate) -> bool:
        """True if ``other`` lies entirely within this range."""
        outer = self._prefix
        inner = other._prefix

        if len(inner) < len(outer):
            return False

        for i in range(len(outer)):
            if compare_with(strategy, inner[i], outer[i]) != EQUAL:
                return False

        if len(inner) == len(outer):
            return (_start_within(other._start, self._start, strategy)
                    and _end_within(other._end, self._end, strategy))

        # other pins the element this range bounds
        value = inner[len(outer)]
        return (satisfies_start(value, self._start, partial(compare_with, strategy))
                and satisfies_end(value, self._end, partial(compare_with, strategy)))


def satisfies_start(value: Any, bound: Bound, compare: Callable[[Any, Any], Ordering]) -> bool:
    """Check ``value`` against a lower bound using an element ``compare``."""
    if isinstance(bound, Included):
        return compare(value, bound.value) != LESS
    if isinstance(bound, Excluded):
        return compare(value, bound.value) == GREATER
    return True


def satisfies_end(value: Any, bound: Bound, compare: Callable[[Any, Any], Ordering]) -> bool:
    """Check ``value`` against an upper bound using an element ``compare``."""
    if isinstance(bound, Included):
        return compare(value, bound.value) != GREATER
    if isinstance(bound, Excluded):
        return compare(value, bound.value) == LESS
    return True


def _start_within(inner: Bound, outer: Bound, strategy: Collate) -> bool:
    if not outer.is_bounded:
        return True
    if not inner.is_bounded:
        return False
    order = compare_with(strategy, inner.value, outer.value)
    if isinstance(outer, Excluded) and isinstance(inner, Included):
        return order == GREATER
    return order != LESS


def _end_within(inner: Bound, outer: Bound, strategy: Collate) -> bool:
    if not outer.is_bounded:
        return True
    if not inner.is_bounded:
        return False
    order = compare_with(strategy, inner.value, outer.value)
    if isinstance(outer, Excluded) and isinstance(inner, Included):
        return order == LESS
    return order != GREATER


# ─── Span overlap ───────────────────────────────────────────────────────────

class Overlap(Enum):
    """Result of comparing two spans."""
    LESS = "LESS"                  # entirely before the other
    GREATER = "GREATER"            # entirely after the other
    EQUAL = "EQUAL"                # identical
    NARROW = "NARROW"              # inside the other
    WIDE = "WIDE"                  # covers the other on both sides
    WIDE_LESS = "WIDE_LESS"        # overlaps, starts and ends earlier
    WIDE_GREATER = "WIDE_GREATER"  # overlaps, starts and ends later

    def reverse(self) -> "Overlap":
        """The overlap of the other span relative to this one."""
        return _OVERLAP_REVERSED[self]


_OVERLAP_REVERSED = {
    Overlap.LESS: Overlap.GREATER,
    Overlap.GREATER: Overlap.LESS,
    Overlap.EQUAL: Overlap.EQUAL,
    Overlap.NARROW: Overlap.WIDE,
    Overlap.WIDE: Overlap.NARROW,
    Overlap.WIDE_LESS: Overlap.WIDE_GREATER,
    Overlap.WIDE_GREATER: Overlap.WIDE_LESS,
}


@dataclass(frozen=True)
class Span(Generic[V]):
    """Half-open interval [start, end) of single elements."""
    start: V
    end: V

    def _check(self, strategy: Collate) -> None:
        if compare_with(strategy, self.end, self.start) == LESS:
            raise InvalidRangeError(f"Span end {self.end!r} is before start {self.start!r}")

    def overlaps(self, other: "Span[V]", strategy: Collate) -> Overlap:
        """Classify this span relative to ``other``."""
        self._check(strategy)
        other._check(strategy)

        start = compare_with(strategy, self.start, other.start)
        end = compare_with(strategy, self.end, other.end)

        if start == EQUAL and end == EQUAL:
            return Overlap.EQUAL
        if start != LESS and end != GREATER:
            return Overlap.NARROW
        if start != GREATER and end != LESS:
            return Overlap.WIDE

        if start == GREATER:
            # both ends later
            if compare_with(strategy, self.start, other.end) == LESS:
                return Overlap.WIDE_GREATER
            return Overlap.GREATER

        # both ends earlier
        if compare_with(strategy, self.end, other.start) == GREATER:
            return Overlap.WIDE_LESS
        return Overlap.LESS

    def contains(self, other: "Span[V]", strategy: Collate) -> bool:
        """True if ``other`` lies entirely within this span."""
        return self.overlaps(other, strategy) in (Overlap.WIDE, Overlap.EQUAL)

    def contains_partial(self, other: "Span[V]", strategy: Collate) -> bool:
        """True if ``other`` lies at least partly within this span."""
        return self.overlaps(other, strategy) not in (Overlap.LESS, Overlap.GREATER)
