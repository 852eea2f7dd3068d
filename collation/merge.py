"""
Collated Merge / Diff
=====================
Combine two already-collated inputs in a single forward pass.

  merge(collator, left, right)  → union in order; EQUAL values emitted once
  diff(collator, left, right)   → values of left with no EQUAL value in right

amerge / adiff do the same over async iterables.

``collator`` is anything with compare(): a Collator for rows, or a
strategy for plain values. Both inputs MUST be collated by it; otherwise
the output order is undefined. Exceptions raised by an input propagate
unchanged.
"""

from typing import Any, AsyncIterable, AsyncIterator, Iterable, Iterator

from collation.ordering import Ordering, compare_with
from collation.strategies import Collate

_DONE = object()


# ─── Synchronous ────────────────────────────────────────────────────────────

def merge(collator: Collate, left: Iterable[Any], right: Iterable[Any]) -> Iterator[Any]:
    """Yield the ordered union of two collated iterables."""
    left_iter = iter(left)
    right_iter = iter(right)
    l_value = next(left_iter, _DONE)
    r_value = next(right_iter, _DONE)

    while l_value is not _DONE and r_value is not _DONE:
        order = compare_with(collator, l_value, r_value)
        if order == Ordering.GREATER:
            yield r_value
            r_value = next(right_iter, _DONE)
        else:
            yield l_value
            if order == Ordering.EQUAL:
                r_value = next(right_iter, _DONE)
            l_value = next(left_iter, _DONE)

    # Drain whichever side is left
    if l_value is not _DONE:
        yield l_value
        yield from left_iter
    if r_value is not _DONE:
        yield r_value
        yield from right_iter


def diff(collator: Collate, left: Iterable[Any], right: Iterable[Any]) -> Iterator[Any]:
    """Yield the values of ``left`` that do not appear in ``right``."""
    left_iter = iter(left)
    right_iter = iter(right)
    l_value = next(left_iter, _DONE)
    r_value = next(right_iter, _DONE)

    while l_value is not _DONE and r_value is not _DONE:
        order = compare_with(collator, l_value, r_value)
        if order == Ordering.LESS:
            yield l_value
            l_value = next(left_iter, _DONE)
        elif order == Ordering.GREATER:
            r_value = next(right_iter, _DONE)
        else:
            l_value = next(left_iter, _DONE)

    if l_value is not _DONE:
        yield l_value
        yield from left_iter


# ─── Async ──────────────────────────────────────────────────────────────────

async def _anext(iterator: AsyncIterator[Any]) -> Any:
    try:
        return await iterator.__anext__()
    except StopAsyncIteration:
        return _DONE


async def amerge(collator: Collate, left: AsyncIterable[Any],
                 right: AsyncIterable[Any]) -> AsyncIterator[Any]:
    """Async counterpart of merge()."""
    left_iter = left.__aiter__()
    right_iter = right.__aiter__()
    l_value = await _anext(left_iter)
    r_value = await _anext(right_iter)

    while l_value is not _DONE and r_value is not _DONE:
        order = compare_with(collator, l_value, r_value)
        if order == Ordering.GREATER:
            yield r_value
            r_value = await _anext(right_iter)
        else:
            yield l_value
            if order == Ordering.EQUAL:
                r_value = await _anext(right_iter)
            l_value = await _anext(left_iter)

    while l_value is not _DONE:
        yield l_value
        l_value = await _anext(left_iter)
    while r_value is not _DONE:
        yield r_value
        r_value = await _anext(right_iter)


async def adiff(collator: Collate, left: AsyncIterable[Any],
                right: AsyncIterable[Any]) -> AsyncIterator[Any]:
    """Async counterpart of diff()."""
    left_iter = left.__aiter__()
    right_iter = right.__aiter__()
    l_value = await _anext(left_iter)
    r_value = await _anext(right_iter)

    while l_value is not _DONE and r_value is not _DONE:
        order = compare_with(collator, l_value, r_value)
        if order == Ordering.LESS:
            yield l_value
            l_value = await _anext(left_iter)
        elif order == Ordering.GREATER:
            r_value = await _anext(right_iter)
        else:
            l_value = await _anext(left_iter)

    while l_value is not _DONE:
        yield l_value
        l_value = await _anext(left_iter)
