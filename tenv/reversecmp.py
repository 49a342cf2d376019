"""Comparison function reversal."""

from __future__ import annotations

from typing import Callable, TypeVar

T = TypeVar("T")


def reverser(cmp_func: Callable[[T, T], int], reverse_order: bool) -> Callable[[T, T], int]:
    """Return cmp_func, with its arguments swapped when reverse_order is set."""
    if reverse_order:
        return lambda a, b: cmp_func(b, a)
    return cmp_func