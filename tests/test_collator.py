"""
Collator Tests
==============
Sequence comparison and prefix-aware bisection.

Tests prove:
  ✔ shorter sequence is LESS (prefix law)
  ✔ bisect_left / bisect_right on the reference collection
  ✔ lo / hi search bounds
  ✔ bisection agrees with a linear scan on random sorted data
  ✔ insertion at bisect_left keeps the collection sorted
  ✔ custom strategies (case-insensitive, reverse) drive bisection
  ✔ range bisection over prefix Ranges
"""

import logging
import os
import random
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from collation import (
    Collator, DEFAULT_COLLATOR, Ordering, CaseInsensitiveOrder, ReverseOrder,
    FunctionOrder, NaturalOrder, Range, Included, Excluded, Unbounded,
    InvalidOrderingError,
)

LESS = Ordering.LESS
EQUAL = Ordering.EQUAL
GREATER = Ordering.GREATER


# ═══════════════════════════════════════════════════════════════════
# Fixtures
# ═══════════════════════════════════════════════════════════════════

@pytest.fixture
def collator():
    return Collator()


@pytest.fixture
def rows():
    return [[1, 2, 3], [2, 3, 4], [3, 4, 5]]


def _random_rows(rng, count, max_len=4, max_value=4):
    """Sorted random rows; Python list ordering matches Collator.compare."""
    result = []
    for _ in range(count):
        length = rng.randint(0, max_len)
        result.append([rng.randint(0, max_value) for _ in range(length)])
    return sorted(result)


def _linear_left(collator, rows, key):
    for i, row in enumerate(rows):
        if collator.compare_prefix(row, key) != LESS:
            return i
    return len(rows)


def _linear_right(collator, rows, key):
    for i, row in enumerate(rows):
        if collator.compare_prefix(row, key) == GREATER:
            return i
    return len(rows)


# ═══════════════════════════════════════════════════════════════════
# Sequence comparison
# ═══════════════════════════════════════════════════════════════════

class TestCompare:

    def test_first_difference_decides(self, collator):
        assert collator.compare([1, 2, 3], [1, 3, 0]) == LESS
        assert collator.compare([2], [1, 9, 9]) == GREATER

    def test_equal_sequences(self, collator):
        assert collator.compare([1, 2], [1, 2]) == EQUAL
        assert collator.compare((1, 2), [1, 2]) == EQUAL

    def test_both_empty_equal(self, collator):
        assert collator.compare([], []) == EQUAL

    def test_strict_prefix_is_less(self, collator):
        assert collator.compare([1], [1, 2, 3]) == LESS
        assert collator.compare([1, 2, 3], [1]) == GREATER
        assert collator.compare([], [0]) == LESS

    def test_strings_are_sequences(self, collator):
        assert collator.compare("ab", "abc") == LESS
        assert collator.compare("b", "abc") == GREATER

    def test_matches_python_list_ordering(self, collator):
        rng = random.Random(7)
        for _ in range(200):
            a = [rng.randint(0, 3) for _ in range(rng.randint(0, 4))]
            b = [rng.randint(0, 3) for _ in range(rng.randint(0, 4))]
            expected = Ordering.of(a, b)
            assert collator.compare(a, b) == expected

    def test_compare_prefix(self, collator):
        assert collator.compare_prefix([1, 2, 3], [1]) == EQUAL
        assert collator.compare_prefix([1, 2, 3], []) == EQUAL
        assert collator.compare_prefix([1], [1, 2]) == LESS
        assert collator.compare_prefix([1, 5], [1, 2]) == GREATER
        assert collator.compare_prefix([0, 9], [1]) == LESS


# ═══════════════════════════════════════════════════════════════════
# Bisection
# ═══════════════════════════════════════════════════════════════════

class TestBisect:

    def test_reference_collection(self, collator, rows):
        assert collator.bisect_left(rows, [1]) == 0
        assert collator.bisect_right(rows, [1]) == 1
        assert collator.bisect_left(rows, [4]) == 3
        assert collator.bisect_right(rows, [4]) == 3
        assert collator.bisect_left(rows, []) == 0

    def test_empty_key_spans_everything(self, collator, rows):
        assert collator.bisect_right(rows, []) == len(rows)

    def test_empty_collection(self, collator):
        assert collator.bisect_left([], [1]) == 0
        assert collator.bisect_right([], [1]) == 0

    def test_full_key(self, collator, rows):
        assert collator.bisect_left(rows, [2, 3, 4]) == 1
        assert collator.bisect_right(rows, [2, 3, 4]) == 2

    def test_key_between_rows(self, collator, rows):
        assert collator.bisect_left(rows, [2, 0]) == 1
        assert collator.bisect_right(rows, [2, 0]) == 1
        assert collator.bisect_left(rows, [0]) == 0

    def test_duplicates_counted(self, collator):
        data = [[1], [2, 0], [2, 0], [2, 1], [2, 1, 7], [3]]
        assert collator.bisect_left(data, [2]) == 1
        assert collator.bisect_right(data, [2]) == 5
        assert collator.bisect_left(data, [2, 1]) == 3
        assert collator.bisect_right(data, [2, 1]) == 5

    def test_key_longer_than_rows(self, collator):
        data = [[1], [1, 2], [2]]
        # [1] and [1, 2] are both LESS than [1, 2, 3]
        assert collator.bisect_left(data, [1, 2, 3]) == 2
        assert collator.bisect_right(data, [1, 2, 3]) == 2

    def test_lo_hi_bounds(self, collator, rows):
        assert collator.bisect_left(rows, [1], lo=1) == 1
        assert collator.bisect_right(rows, [3], hi=2) == 2
        assert collator.bisect_left(rows, [9], lo=0, hi=1) == 1

    def test_negative_lo_rejected(self, collator, rows):
        with pytest.raises(ValueError, match="lo must be non-negative"):
            collator.bisect_left(rows, [1], lo=-1)
        with pytest.raises(ValueError):
            collator.bisect_right(rows, [1], lo=-1)

    def test_tuple_collection(self, collator):
        data = ((1, 1), (1, 2), (2, 1))
        assert collator.bisect_left(data, (1,)) == 0
        assert collator.bisect_right(data, (1,)) == 2

    def test_deterministic(self, collator, rows):
        first = (collator.bisect_left(rows, [2]), collator.bisect_right(rows, [2]))
        second = (collator.bisect_left(rows, [2]), collator.bisect_right(rows, [2]))
        assert first == second == (1, 2)

    def test_collection_not_mutated(self, collator, rows):
        snapshot = [list(r) for r in rows]
        collator.bisect_left(rows, [2])
        collator.bisect_right(rows, [2])
        assert rows == snapshot


class TestBisectProperties:
    """Randomized checks of the bisection laws."""

    @pytest.fixture
    def rng(self):
        return random.Random(1234)

    def test_agrees_with_linear_scan(self, collator, rng):
        for _ in range(100):
            data = _random_rows(rng, rng.randint(0, 20))
            key = [rng.randint(0, 4) for _ in range(rng.randint(0, 3))]
            assert collator.bisect_left(data, key) == _linear_left(collator, data, key)
            assert collator.bisect_right(data, key) == _linear_right(collator, data, key)

    def test_left_not_after_right(self, collator, rng):
        for _ in range(100):
            data = _random_rows(rng, rng.randint(0, 20))
            key = [rng.randint(0, 4) for _ in range(rng.randint(0, 3))]
            assert collator.bisect_left(data, key) <= collator.bisect_right(data, key)

    def test_rows_outside_are_strictly_ordered(self, collator, rng):
        for _ in range(100):
            data = _random_rows(rng, rng.randint(0, 20))
            key = [rng.randint(0, 4) for _ in range(rng.randint(0, 3))]
            left = collator.bisect_left(data, key)
            right = collator.bisect_right(data, key)
            assert all(collator.compare(row, key) == LESS for row in data[:left])
            assert all(collator.compare(row, key) == GREATER for row in data[right:])

    def test_insert_at_left_keeps_sorted(self, collator, rng):
        for _ in range(100):
            data = _random_rows(rng, rng.randint(0, 20))
            key = [rng.randint(0, 4) for _ in range(rng.randint(0, 3))]
            i = collator.bisect_left(data, key)
            assert collator.is_sorted(data[:i] + [key] + data[i:])

    def test_gap_counts_matching_rows(self, collator, rng):
        for _ in range(100):
            data = _random_rows(rng, rng.randint(0, 20))
            key = [rng.randint(0, 4) for _ in range(rng.randint(0, 3))]
            expected = sum(1 for row in data if row[:len(key)] == key)
            gap = collator.bisect_right(data, key) - collator.bisect_left(data, key)
            assert gap == expected

    def test_monotonic_in_key(self, collator, rng):
        for _ in range(100):
            data = _random_rows(rng, rng.randint(0, 20))
            k1 = [rng.randint(0, 4) for _ in range(rng.randint(0, 3))]
            k2 = [rng.randint(0, 4) for _ in range(rng.randint(0, 3))]
            if collator.compare(k1, k2) == LESS:
                assert collator.bisect_left(data, k1) <= collator.bisect_left(data, k2)


# ═══════════════════════════════════════════════════════════════════
# Strategies through the Collator
# ═══════════════════════════════════════════════════════════════════

class TestCollatorStrategies:

    def test_default_is_natural(self):
        assert Collator.default() == Collator()
        assert DEFAULT_COLLATOR == Collator(NaturalOrder())
        assert Collator(ReverseOrder()) != Collator()

    def test_case_insensitive_bisect(self):
        collator = Collator(CaseInsensitiveOrder())
        data = [["apple"], ["Banana"], ["banana", "split"], ["cherry"]]
        assert collator.is_sorted(data)
        assert collator.bisect_left(data, ["BANANA"]) == 1
        assert collator.bisect_right(data, ["BANANA"]) == 3

    def test_reverse_bisect(self):
        collator = Collator(ReverseOrder())
        data = [[3, 1], [2, 9], [2, 1], [1, 5]]
        assert collator.is_sorted(data)
        assert collator.bisect_left(data, [2]) == 1
        assert collator.bisect_right(data, [2]) == 3

    def test_int_results_accepted(self):
        class CmpStrategy:
            def compare(self, left, right):
                return (left > right) - (left < right)

        collator = Collator(CmpStrategy())
        assert collator.compare([1, 2], [1, 3]) == LESS
        assert collator.bisect_right([[1], [2], [3]], [2]) == 2

    def test_function_order(self):
        collator = Collator(FunctionOrder(lambda a, b: len(a) - len(b)))
        data = [["a"], ["bb"], ["ccc"]]
        assert collator.bisect_left(data, ["xx"]) == 1

    def test_bad_strategy_result(self):
        class Broken:
            def compare(self, left, right):
                return None

        with pytest.raises(InvalidOrderingError):
            Collator(Broken()).compare([1], [2])

    def test_is_sorted_logs_position(self, collator, caplog):
        caplog.set_level(logging.DEBUG, logger="collation.collator")
        assert not collator.is_sorted([[1], [3], [2]])
        assert "out of order at index 2" in caplog.text


# ═══════════════════════════════════════════════════════════════════
# Range bisection
# ═══════════════════════════════════════════════════════════════════

class TestBisectRange:

    @pytest.fixture
    def data(self):
        return [[0, 9], [1], [1, 1], [1, 2], [1, 3], [1, 4], [2, 0]]

    def test_prefix_range_matches_bisect(self, collator, data):
        assert collator.bisect(data, Range.with_prefix([1])) == (1, 6)
        assert collator.bisect(data, Range.with_prefix([1])) == (
            collator.bisect_left(data, [1]), collator.bisect_right(data, [1]))

    def test_half_open_range(self, collator, data):
        assert collator.bisect(data, Range.new([1], 2, 4)) == (3, 5)

    def test_exclusive_start_inclusive_end(self, collator, data):
        assert collator.bisect(data, Range([1], Excluded(1), Included(3))) == (3, 5)

    def test_unbounded_start(self, collator, data):
        # the bare prefix row [1] lies before any bounded range
        assert collator.bisect(data, Range([1], Unbounded, Excluded(2))) == (2, 3)

    def test_empty_result(self, collator, data):
        assert collator.bisect(data, Range([1], Included(5), Unbounded)) == (6, 6)
        assert collator.bisect(data, Range.with_prefix([7])) == (7, 7)

    def test_empty_prefix_with_bounds(self, collator, data):
        assert collator.bisect(data, Range.new([], 1, 2)) == (1, 6)

    def test_range_with_lo_hi(self, collator, data):
        assert collator.bisect(data, Range.with_prefix([1]), lo=3, hi=5) == (3, 5)

    def test_agrees_with_filter(self, collator):
        rng = random.Random(99)
        for _ in range(100):
            data = _random_rows(rng, rng.randint(0, 20))
            prefix = [rng.randint(0, 4) for _ in range(rng.randint(0, 2))]
            lo = rng.randint(0, 4)
            hi = rng.randint(lo, 5)
            rng_range = Range.new(prefix, lo, hi)
            left, right = collator.bisect(data, rng_range)
            expected = [
                row for row in data
                if row[:len(prefix)] == prefix and len(row) > len(prefix)
                and lo <= row[len(prefix)] < hi
            ]
            assert data[left:right] == expected
