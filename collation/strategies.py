"""
Collation Strategies
====================
Pluggable element-level comparators for the Collator.

A strategy is any object with a ``compare(left, right) -> Ordering``
method (see the ``Collate`` protocol). No base class is required.

Bundled strategies:
  NaturalOrder          → the values' own < and > operators
  ReverseOrder          → inner strategy reversed
  CaseInsensitiveOrder  → str.casefold() then natural
  LocaleOrder           → locale.strxfrm() under the current LC_COLLATE
  KeyOrder              → inner strategy applied to key(value)
  FunctionOrder         → sign of an old-style cmp(a, b) function
  FloatOrder            → numeric, -0.0 == 0.0, NaN sorts after all numbers
  ComplexOrder          → FloatOrder of the squared magnitude
  NullsLast             → None sorts after every value

All strategies are frozen dataclasses: immutable, hashable when their
fields are, and equal whenever their configuration is equal.
"""

import locale
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, runtime_checkable

from collation.ordering import Ordering, compare_with


@runtime_checkable
class Collate(Protocol):
    """Anything that can order two elements."""

    def compare(self, left: Any, right: Any) -> Ordering:
        ...


# ─── Natural / reverse ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class NaturalOrder:
    """Delegates to the element type's intrinsic ordering."""

    def compare(self, left: Any, right: Any) -> Ordering:
        return Ordering.of(left, right)


@dataclass(frozen=True)
class ReverseOrder:
    """Reverses another strategy (natural ordering by default)."""
    inner: Collate = field(default_factory=NaturalOrder)

    def compare(self, left: Any, right: Any) -> Ordering:
        return compare_with(self.inner, left, right).reverse()


# ─── Text ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CaseInsensitiveOrder:
    """
    Orders strings by their casefolded form.
    "Straße" and "STRASSE" compare EQUAL.
    """

    def compare(self, left: str, right: str) -> Ordering:
        return Ordering.of(left.casefold(), right.casefold())


@dataclass(frozen=True)
class LocaleOrder:
    """
    Orders strings with the process-wide LC_COLLATE rules.
    The locale itself is configured by the caller (locale.setlocale);
    this strategy only reads it.
    """

    def compare(self, left: str, right: str) -> Ordering:
        return Ordering.of(locale.strxfrm(left), locale.strxfrm(right))


# ─── Adapters ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class KeyOrder:
    """Applies ``inner`` to ``key(value)``, like the key= argument of sorted()."""
    key: Callable[[Any], Any]
    inner: Collate = field(default_factory=NaturalOrder)

    def compare(self, left: Any, right: Any) -> Ordering:
        return compare_with(self.inner, self.key(left), self.key(right))


@dataclass(frozen=True)
class FunctionOrder:
    """Wraps an old-style cmp(a, b) function returning a negative, zero or positive int."""
    cmp: Callable[[Any, Any], int]

    def compare(self, left: Any, right: Any) -> Ordering:
        return Ordering.from_int(self.cmp(left, right))


# ─── Numeric ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FloatOrder:
    """
    Total order over floats.
    -0.0 and +0.0 are EQUAL. NaN is EQUAL to NaN and GREATER than
    every number, so a NaN never breaks bisection.
    """

    def compare(self, left: float, right: float) -> Ordering:
        left_nan = math.isnan(left)
        right_nan = math.isnan(right)
        if left_nan or right_nan:
            if left_nan and right_nan:
                return Ordering.EQUAL
            return Ordering.GREATER if left_nan else Ordering.LESS
        return Ordering.of(left, right)


@dataclass(frozen=True)
class ComplexOrder:
    """Complex numbers have no natural ordering; order them by magnitude."""
    float_order: FloatOrder = field(default_factory=FloatOrder)

    def compare(self, left: complex, right: complex) -> Ordering:
        return compare_with(self.float_order, _norm_sqr(left), _norm_sqr(right))


def _norm_sqr(value: complex) -> float:
    value = complex(value)
    return value.real * value.real + value.imag * value.imag


# ─── NULL handling ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class NullsLast:
    """
    None sorts after every value (NULLS LAST); two Nones are EQUAL.
    Wrap in ReverseOrder for DESC, where NULLs then come first.
    """
    inner: Collate = field(default_factory=NaturalOrder)

    def compare(self, left: Any, right: Any) -> Ordering:
        if left is None or right is None:
            if left is None and right is None:
                return Ordering.EQUAL
            return Ordering.GREATER if left is None else Ordering.LESS
        return compare_with(self.inner, left, right)
