"""Directory lock files shared between concurrent processes."""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import signal
import sys
import threading
import time
from typing import Callable, Iterator

from tenv.loghelper import ERROR, Displayer

MSG_WRITE = "can not write .lock file, will retry"
MSG_DELETE = "can not remove .lock file"

_LOCK_NAME = ".lock"
_RW_PERM = 0o600
_RETRY_DELAY = 1.0


def _once(func: Callable[[], None]) -> Callable[[], None]:
    guard = threading.Lock()
    done = False

    def wrapper() -> None:
        nonlocal done
        with guard:
            if done:
                return
            done = True
        func()

    return wrapper


def write(dir_path: str, displayer: Displayer) -> Callable[[], None]:
    """Create dir_path/.lock, waiting while another holder owns it.

    dir_path must already exist. The returned function removes the lock;
    calling it more than once is harmless.
    """
    lock_path = os.path.join(dir_path, _LOCK_NAME)
    level = logging.WARNING
    while True:
        try:
            fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, _RW_PERM)
        except OSError as exc:
            displayer.log(level, MSG_WRITE, **{ERROR: exc})
            level = logging.INFO
            time.sleep(_RETRY_DELAY)
        else:
            os.close(fd)
            break

    def remove() -> None:
        try:
            if os.path.isdir(lock_path) and not os.path.islink(lock_path):
                shutil.rmtree(lock_path)
            else:
                os.remove(lock_path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            displayer.log(logging.WARNING, MSG_DELETE, **{ERROR: exc})

    return _once(remove)


@contextlib.contextmanager
def locked(dir_path: str, displayer: Displayer) -> Iterator[None]:
    """Hold the lock of dir_path for the duration of the block."""
    release = write(dir_path, displayer)
    try:
        yield
    finally:
        release()


def clean_and_exit_on_interrupt(clean: Callable[[], None]) -> Callable[[], None]:
    """On Ctrl+C run clean, then exit with status 1.

    The returned function stops listening and restores the previous handler.
    """

    def handler(signum, frame) -> None:
        clean()
        sys.exit(1)

    try:
        previous = signal.signal(signal.SIGINT, handler)
    except ValueError:
        # Signal handlers can only be installed from the main thread.
        return _once(lambda: None)

    def stop() -> None:
        signal.signal(signal.SIGINT, previous)

    return _once(stop)