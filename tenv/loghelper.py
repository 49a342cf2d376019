"""Displayers: user-facing output combined with leveled logging."""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TextIO

ERROR = "error"
TRACE = 5
GREEN = 32


def _format(msg: str, kwargs: dict[str, Any]) -> str:
    if not kwargs:
        return msg
    details = " ".join(f"{key}={value}" for key, value in kwargs.items())
    return f"{msg}: {details}"


class Displayer(ABC):
    """Destination for messages shown to the user and for log records."""

    @abstractmethod
    def display(self, msg: str) -> None:
        """Show a message to the user."""

    @abstractmethod
    def is_debug(self) -> bool:
        """Tell whether debug records are emitted."""

    @abstractmethod
    def log(self, level: int, msg: str, **kwargs: Any) -> None:
        """Emit a log record with key/value details."""

    @abstractmethod
    def flush(self, log_mode: bool) -> None:
        """Emit anything held back."""


class BasicDisplayer(Displayer):
    """Displays through a function and logs through a standard logger."""

    def __init__(self, logger: logging.Logger, display: Callable[[str], None]) -> None:
        self._logger = logger
        self._display = display

    def display(self, msg: str) -> None:
        self._display(msg)

    def is_debug(self) -> bool:
        return self._logger.isEnabledFor(logging.DEBUG)

    def log(self, level: int, msg: str, **kwargs: Any) -> None:
        self._logger.log(level, _format(msg, kwargs))

    def flush(self, log_mode: bool) -> None:
        pass


class InertDisplayer(Displayer):
    """Discards everything."""

    def display(self, msg: str) -> None:
        pass

    def is_debug(self) -> bool:
        return False

    def log(self, level: int, msg: str, **kwargs: Any) -> None:
        pass

    def flush(self, log_mode: bool) -> None:
        pass


INERT_DISPLAYER = InertDisplayer()


class _LogWrapper(Displayer):
    """Turns displayed messages into debug log records."""

    def __init__(self, inner: Displayer) -> None:
        self._inner = inner

    def display(self, msg: str) -> None:
        self._inner.log(logging.DEBUG, msg)

    def is_debug(self) -> bool:
        return self._inner.is_debug()

    def log(self, level: int, msg: str, **kwargs: Any) -> None:
        self._inner.log(level, msg, **kwargs)

    def flush(self, log_mode: bool) -> None:
        self._inner.flush(log_mode)


@dataclass(frozen=True)
class _Record:
    level: Optional[int]
    message: str
    kwargs: dict[str, Any] = field(default_factory=dict)


class RecordingDisplayer(Displayer):
    """Holds every message until the first flush, then passes calls through."""

    def __init__(self, displayer: Displayer) -> None:
        self._target = displayer
        self._records: Optional[list[_Record]] = []

    def display(self, msg: str) -> None:
        if self._records is None:
            self._target.display(msg)
        else:
            self._records.append(_Record(None, msg))

    def is_debug(self) -> bool:
        return self._target.is_debug()

    def log(self, level: int, msg: str, **kwargs: Any) -> None:
        if self._records is None:
            self._target.log(level, msg, **kwargs)
        else:
            self._records.append(_Record(level, msg, dict(kwargs)))

    def flush(self, log_mode: bool) -> None:
        if self._records is None:
            self._target.flush(log_mode)
            return

        if log_mode:
            self._target = _LogWrapper(self._target)
        records, self._records = self._records, None
        for record in records:
            if record.level is None:
                self._target.display(record.message)
            else:
                self._target.log(record.level, record.message, **record.kwargs)


def build_display_func(stream: TextIO, color_code: Optional[int] = GREEN) -> Callable[[str], None]:
    """Return a function writing each message as a (colored) line to stream."""

    def display(msg: str) -> None:
        if color_code is None:
            stream.write(f"{msg}\n")
        else:
            stream.write(f"\x1b[{color_code}m{msg}\x1b[0m\n")
        stream.flush()

    return display


def level_warn_or_debug(debug: bool) -> int:
    return logging.DEBUG if debug else logging.WARNING


def std_display(msg: str) -> None:
    print(msg, file=sys.stdout)