"""Helpers to read configuration values from the environment."""

from __future__ import annotations

import os
from typing import Callable, Optional

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(value: str) -> bool:
    """Parse a boolean the way the environment settings expect it."""
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean value: {value!r}")


def _os_lookup(key: str) -> str:
    return os.environ.get(key, "")


class Getenv:
    """Callable environment reader with fallback and boolean helpers.

    An unset variable and an empty one are treated alike.
    """

    def __init__(self, lookup: Optional[Callable[[str], Optional[str]]] = None) -> None:
        self._lookup = lookup if lookup is not None else _os_lookup

    def __call__(self, key: str) -> str:
        return self._lookup(key) or ""

    def bool_value(self, default: bool, key: str) -> bool:
        """Return the boolean stored under key, or default when it is empty."""
        value = self(key)
        return parse_bool(value) if value else default

    def bool_fallback(self, default: bool, *args: str) -> bool:
        """Return the boolean from the first non-empty key, or default."""
        value = self.fallback(*args)
        return parse_bool(value) if value else default

    def fallback(self, *args: str) -> str:
        """Return the first non-empty value among the given keys."""
        return next((value for value in map(self, args) if value), "")

    def present(self, key: str) -> bool:
        return self(key) != ""