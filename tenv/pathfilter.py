"""Path predicates for archive extraction."""

from __future__ import annotations

from typing import Callable


def name_equal(target_name: str) -> Callable[[str], bool]:
    """Return a predicate matching paths whose last component is target_name.

    Both '/' and '\\' separated paths are handled; '/' takes precedence.
    """

    def matches(path: str) -> bool:
        index = path.rfind("/")
        if index == -1:
            index = path.rfind("\\")
        return path[index + 1:] == target_name

    return matches