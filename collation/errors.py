"""
Collation Errors
================
Exception hierarchy for caller misuse detected at construction time.

Unsorted collections and non-total strategies are NOT detected: they
produce unspecified (silently wrong) results, never an exception.
"""


class CollationError(Exception):
    """Base class for all collation errors."""
    pass


class InvalidRangeError(CollationError, ValueError):
    """Raised when a Range or Span is built from malformed bounds."""
    pass


class InvalidOrderingError(CollationError, ValueError):
    """Raised when a strategy returns something that is not an Ordering."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Comparator returned {value!r}, expected an Ordering")
