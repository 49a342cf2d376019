"""Run a managed tool, forwarding I/O and reporting to GitHub Actions."""

from __future__ import annotations

import contextlib
import os
import random
import signal
import subprocess
import sys
import threading
from typing import IO, Iterator, Optional, Sequence, TextIO

from tenv.envutils import Getenv

GITHUB_OUTPUT = "GITHUB_OUTPUT"
_DELIMITER_PREFIX = "ghadelimeter_"
_CHUNK_SIZE = 8192


class DelimiterError(ValueError):
    """Raised when a key or value contains the generated delimiter."""

    def __init__(self) -> None:
        super().__init__("key and value should not contains delimiter")


def write_multiline(file: TextIO, key: str, value: str) -> None:
    """Write key=value in the GitHub output multiline syntax."""
    delimiter = _DELIMITER_PREFIX + str(random.randrange(2**63))
    if delimiter in key or delimiter in value:
        raise DelimiterError()
    file.write(f"{key}<<{delimiter}\n{value}\n{delimiter}\n")


def _failure(exec_path: str, err: object) -> None:
    print("Failure during", exec_path, "call :", err)


@contextlib.contextmanager
def _forward_interrupt(process: subprocess.Popen) -> Iterator[None]:
    """Handle Ctrl+C while the child runs.

    On POSIX the child already receives the signal through its process
    group, so it is ignored here. On Windows the first one is relayed and
    any following one kills the child.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    received = 0

    def handler(signum, frame):
        nonlocal received
        received += 1
        if os.name != "nt":
            return
        try:
            if received == 1:
                process.send_signal(getattr(signal, "CTRL_C_EVENT", signal.SIGINT))
            else:
                process.kill()
        except OSError:
            pass

    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _tee(pipe: IO[bytes], sink: TextIO, chunks: list[bytes]) -> None:
    for chunk in iter(lambda: pipe.read1(_CHUNK_SIZE), b""):
        chunks.append(chunk)
        buffer = getattr(sink, "buffer", None)
        if buffer is not None:
            sink.flush()
            buffer.write(chunk)
            buffer.flush()
        else:
            sink.write(chunk.decode(errors="replace"))
            sink.flush()
    pipe.close()


def _execute(cmd_args: Sequence[str], capture: bool) -> tuple[int, str, str]:
    """Run the command; return its exit code and, if captured, its output."""
    pipe = subprocess.PIPE if capture else None
    try:
        process = subprocess.Popen(list(cmd_args), stdout=pipe, stderr=pipe)
    except OSError as exc:
        _failure(cmd_args[0], exc)
        return 1, "", ""

    out_chunks: list[bytes] = []
    err_chunks: list[bytes] = []
    with _forward_interrupt(process):
        if capture:
            threads = [
                threading.Thread(target=_tee, args=(process.stdout, sys.stdout, out_chunks)),
                threading.Thread(target=_tee, args=(process.stderr, sys.stderr, err_chunks)),
            ]
            for thread in threads:
                thread.start()
            process.wait()
            for thread in threads:
                thread.join()
        else:
            process.wait()

    code = process.returncode
    if code < 0:
        code = -1
    out = b"".join(out_chunks).decode(errors="replace")
    err = b"".join(err_chunks).decode(errors="replace")
    return code, out, err


def _report(output_file: TextIO, exec_path: str, exit_code: int, out: str, err: str) -> int:
    def failed(error: object) -> int:
        _failure(exec_path, error)
        return exit_code or 1

    try:
        write_multiline(output_file, "stderr", err)
        write_multiline(output_file, "stdout", out)
        write_multiline(output_file, "exitcode", str(exit_code))
    except (OSError, DelimiterError) as exc:
        return failed(exc)

    if exit_code not in (0, 2):
        return failed(f"exited with code {exit_code}")
    return exit_code


def run_command(cmd_args: Sequence[str], gha: bool = False, getenv: Optional[Getenv] = None) -> int:
    """Run cmd_args and return the exit code to use.

    With gha set, output and exit code are also appended to the file named
    by GITHUB_OUTPUT.
    """
    if getenv is None:
        getenv = Getenv()

    if not gha:
        return _execute(cmd_args, capture=False)[0]

    try:
        output_file = open(getenv(GITHUB_OUTPUT), "a", encoding="utf-8")
    except OSError as exc:
        print("Ignore GITHUB_ACTIONS, fail to open GITHUB_OUTPUT :", exc)
        return _execute(cmd_args, capture=False)[0]

    with output_file:
        exit_code, out, err = _execute(cmd_args, capture=True)
        return _report(output_file, cmd_args[0], exit_code, out, err)


def run(cmd_args: Sequence[str], gha: bool = False, getenv: Optional[Getenv] = None) -> None:
    """Run cmd_args, then always exit with its exit code."""
    sys.exit(run_command(cmd_args, gha, getenv))