"""
Collator
========
Sequence-level comparison and prefix-aware bisection over sorted collections.

A Collator composes an element strategy (see strategies.py) with:
  - compare(a, b)          lexicographic, the shorter sequence is LESS
  - compare_prefix(row, k) row against key over the key's length only
  - bisect_left / right    insertion points for a (possibly partial) key
  - bisect(range)          (left, right) slice of rows inside a Range
  - is_sorted              optional precondition check for callers

Key ordering:
  Rows and keys are ordered element by element; the first non-EQUAL pair
  decides. A strict prefix sorts before every sequence it prefixes, so a
  short key acts as a "starts-with" probe:

      rows = [[1, 2, 3], [2, 3, 4], [3, 4, 5]]
      bisect_left(rows, [1])  → 0
      bisect_right(rows, [1]) → 1

Preconditions (not checked):
  - the collection is sorted ascending under compare()
  - the strategy is a total order
  - nobody mutates the collection during a call

Concurrency: Collator is immutable; share one instance freely.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Tuple

from collation.ordering import Ordering, compare_with
from collation.range import Range, satisfies_end, satisfies_start
from collation.strategies import Collate, NaturalOrder

logger = logging.getLogger(__name__)

LESS = Ordering.LESS
EQUAL = Ordering.EQUAL
GREATER = Ordering.GREATER


@dataclass(frozen=True)
class Collator:
    """
    Collates sequences of elements under a pluggable strategy.

    Usage:
        collator = Collator()                        # natural ordering
        collator = Collator(CaseInsensitiveOrder())  # custom strategy
        i = collator.bisect_left(rows, ["a"])
        lo, hi = collator.bisect(rows, Range.with_prefix(["a"]))
    """
    strategy: Collate = field(default_factory=NaturalOrder)

    def __post_init__(self):
        logger.debug("Collator created with strategy %r", self.strategy)

    @classmethod
    def default(cls) -> "Collator":
        """Collator using the elements' natural ordering."""
        return cls(NaturalOrder())

    # ─── Element / sequence comparison ──────────────────────────────

    def compare_value(self, left: Any, right: Any) -> Ordering:
        """Compare two single elements with the active strategy."""
        return compare_with(self.strategy, left, right)

    def compare(self, left: Sequence, right: Sequence) -> Ordering:
        """
        Lexicographic comparison of two sequences.
        When one runs out before a difference is found, the shorter is LESS.
        """
        for i in range(min(len(left), len(right))):
            order = self.compare_value(left[i], right[i])
            if order != EQUAL:
                return order

        if len(left) < len(right):
            return LESS
        if len(left) > len(right):
            return GREATER
        return EQUAL

    def compare_prefix(self, row: Sequence, key: Sequence) -> Ordering:
        """
        Compare ``row`` against ``key`` over the key's length only.
        A row that has ``key`` as a prefix is EQUAL; a row that runs
        out first is LESS.
        """
        for i in range(len(key)):
            if i == len(row):
                return LESS
            order = self.compare_value(row[i], key[i])
            if order != EQUAL:
                return order
        return EQUAL

    # ─── Bisection ──────────────────────────────────────────────────

    def bisect_left(self, collection: Sequence[Sequence], key: Sequence,
                    lo: int = 0, hi: Optional[int] = None) -> int:
        """
        Insertion point for ``key`` before every row equal to it or
        prefixed by it. Every row before the result is LESS than ``key``.
        """
        lo, hi = _search_bounds(collection, lo, hi)
        while lo < hi:
            mid = (lo + hi) // 2
            if self.compare_prefix(collection[mid], key) == LESS:
                lo = mid + 1
            else:
                hi = mid
        return lo

    def bisect_right(self, collection: Sequence[Sequence], key: Sequence,
                     lo: int = 0, hi: Optional[int] = None) -> int:
        """
        Insertion point for ``key`` after every row equal to it or
        prefixed by it. Every row from the result on is GREATER than ``key``.
        """
        lo, hi = _search_bounds(collection, lo, hi)
        while lo < hi:
            mid = (lo + hi) // 2
            if self.compare_prefix(collection[mid], key) == GREATER:
                hi = mid
            else:
                lo = mid + 1
        return lo

    def bisect(self, collection: Sequence[Sequence], key_range: Range,
               lo: int = 0, hi: Optional[int] = None) -> Tuple[int, int]:
        """
        Return (left, right) such that collection[left:right] are exactly
        the rows inside ``key_range``.
        """
        lo, hi = _search_bounds(collection, lo, hi)

        left, right = lo, hi
        while left < right:
            mid = (left + right) // 2
            if self._compare_range(collection[mid], key_range) == LESS:
                left = mid + 1
            else:
                right = mid

        # rows inside the range start at ``left``; search only what follows
        right = hi
        start = left
        while start < right:
            mid = (start + right) // 2
            if self._compare_range(collection[mid], key_range) == GREATER:
                right = mid
            else:
                start = mid + 1

        return left, start

    def _compare_range(self, row: Sequence, key_range: Range) -> Ordering:
        """Position of ``row`` relative to ``key_range``: before, inside or after it."""
        prefix = key_range.prefix
        order = self.compare_prefix(row, prefix)
        if order != EQUAL or not key_range.has_bounds():
            return order

        if len(row) == len(prefix):
            # the bare prefix sorts before any row extending it
            return LESS

        value = row[len(prefix)]
        if not satisfies_start(value, key_range.start, self.compare_value):
            return LESS
        if not satisfies_end(value, key_range.end, self.compare_value):
            return GREATER
        return EQUAL

    # ─── Precondition helpers ───────────────────────────────────────

    def is_sorted(self, collection: Sequence[Sequence]) -> bool:
        """True if each row is LESS than or EQUAL to the next one."""
        for i in range(1, len(collection)):
            if self.compare(collection[i - 1], collection[i]) == GREATER:
                logger.debug("Collection out of order at index %d", i)
                return False
        return True


def _search_bounds(collection: Sequence, lo: int, hi: Optional[int]) -> Tuple[int, int]:
    if lo < 0:
        raise ValueError("lo must be non-negative")
    if hi is None:
        hi = len(collection)
    return lo, hi


DEFAULT_COLLATOR = Collator()
