"""
Collation
=========
Pluggable collation and prefix-aware bisection for sorted collections
of sequences: the primitive that sorted tables and composite-key index
range scans are built on.

Components:
  - ordering: Ordering (LESS / EQUAL / GREATER)
  - strategies: element comparators (natural, reverse, locale, ...)
  - collator: Collator with compare, bisect_left, bisect_right, bisect
  - range: prefix Range with bounds, Span / Overlap classification
  - merge: merge / diff of collated iterators (sync and async)

Usage:
    from collation import Collator
    rows = [[1, 2, 3], [2, 3, 4], [3, 4, 5]]
    Collator().bisect_right(rows, [1])   # → 1
"""

from collation.errors import CollationError, InvalidRangeError, InvalidOrderingError
from collation.ordering import Ordering, compare_with
from collation.strategies import (
    Collate, NaturalOrder, ReverseOrder, CaseInsensitiveOrder, LocaleOrder,
    KeyOrder, FunctionOrder, FloatOrder, ComplexOrder, NullsLast,
)
from collation.range import Bound, Unbounded, Included, Excluded, Range, Span, Overlap
from collation.collator import Collator, DEFAULT_COLLATOR
from collation.merge import merge, diff, amerge, adiff

__all__ = [
    "CollationError", "InvalidRangeError", "InvalidOrderingError",
    "Ordering", "compare_with",
    "Collate", "NaturalOrder", "ReverseOrder", "CaseInsensitiveOrder", "LocaleOrder",
    "KeyOrder", "FunctionOrder", "FloatOrder", "ComplexOrder", "NullsLast",
    "Bound", "Unbounded", "Included", "Excluded", "Range", "Span", "Overlap",
    "Collator", "DEFAULT_COLLATOR",
    "merge", "diff", "amerge", "adiff",
]
