import logging
import os
import signal
import threading
import time

import pytest

from tenv.lockfile import MSG_WRITE, clean_and_exit_on_interrupt, locked, write
from tenv.loghelper import INERT_DISPLAYER, Displayer


class _CollectingDisplayer(Displayer):
    def __init__(self):
        self.logs = []

    def display(self, msg):
        pass

    def is_debug(self):
        return False

    def log(self, level, msg, **kwargs):
        self.logs.append((level, msg, kwargs))

    def flush(self, log_mode):
        pass


def test_parallel_write_read(tmp_path):
    dir_path = str(tmp_path / "parallel")
    os.makedirs(dir_path)
    file_path = os.path.join(dir_path, "rw_test")
    lock_path = os.path.join(dir_path, ".lock")
    datas = [b"first content\n", b"second content, longer\n", b"third\n"]
    results = [None, None, None]

    def worker(index):
        release = write(dir_path, INERT_DISPLAYER)
        try:
            with open(file_path, "wb") as f:
                f.write(datas[index])
            time.sleep(0.1)
            with open(file_path, "rb") as f:
                results[index] = f.read()
        finally:
            release()

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(3)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results == datas
    assert not os.path.exists(lock_path)

    release = write(dir_path, INERT_DISPLAYER)
    assert os.path.exists(lock_path)
    release()
    assert not os.path.exists(lock_path)


def test_release_removes_lock_and_is_idempotent(tmp_path):
    release = write(str(tmp_path), INERT_DISPLAYER)
    assert (tmp_path / ".lock").exists()
    release()
    release()
    assert not (tmp_path / ".lock").exists()


def test_locked_context_manager(tmp_path):
    with locked(str(tmp_path), INERT_DISPLAYER):
        assert (tmp_path / ".lock").exists()
    assert not (tmp_path / ".lock").exists()


def test_second_writer_waits_and_logs(tmp_path):
    displayer = _CollectingDisplayer()
    release_first = write(str(tmp_path), INERT_DISPLAYER)
    acquired = threading.Event()
    releases = []

    def second():
        releases.append(write(str(tmp_path), displayer))
        acquired.set()

    thread = threading.Thread(target=second)
    thread.start()
    time.sleep(0.3)
    assert not acquired.is_set()
    release_first()
    thread.join(timeout=5)

    assert acquired.is_set()
    assert len(releases) == 1
    assert (tmp_path / ".lock").exists()
    releases[0]()
    assert not (tmp_path / ".lock").exists()

    level, msg, kwargs = displayer.logs[0]
    assert level == logging.WARNING
    assert msg == MSG_WRITE
    assert "error" in kwargs


def test_clean_and_exit_on_interrupt():
    previous = signal.getsignal(signal.SIGINT)
    cleaned = []
    stop = clean_and_exit_on_interrupt(lambda: cleaned.append(True))
    try:
        with pytest.raises(SystemExit) as info:
            signal.raise_signal(signal.SIGINT)
    finally:
        stop()
    assert info.value.code == 1
    assert cleaned == [True]
    assert signal.getsignal(signal.SIGINT) == previous