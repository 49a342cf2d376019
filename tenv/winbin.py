"""Executable naming for the current platform."""

from __future__ import annotations

import sys
from typing import Optional

_SUFFIX = ".exe"
_WINDOWS = "windows"


def _current_os() -> str:
    return _WINDOWS if sys.platform.startswith("win") else sys.platform


def binary_suffix(os_name: Optional[str] = None) -> str:
    """Return the executable suffix for os_name (current platform by default)."""
    return _SUFFIX if (os_name or _current_os()) == _WINDOWS else ""


def get_binary_name(exec_name: str, os_name: Optional[str] = None) -> str:
    """Return the executable file name for exec_name on os_name."""
    return exec_name + binary_suffix(os_name)