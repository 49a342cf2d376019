"""Safe extraction of zip archives."""

from __future__ import annotations

import io
import os
import zipfile
from typing import Callable

_RWE_PERM = 0o755
_DEFAULT_FILE_PERM = 0o666


class TaintedPathError(ValueError):
    """Raised when an archive entry would be written outside its directory."""

    def __init__(self, file_name: str) -> None:
        super().__init__(f"content filepath is tainted: {file_name}")
        self.file_name = file_name


def sanitize_archive_path(dir_path: str, file_name: str) -> str:
    """Join file_name under dir_path, refusing paths that escape it."""
    dest_path = os.path.normpath(os.path.join(dir_path, file_name.lstrip("/\\")))
    if dest_path.startswith(os.path.normpath(dir_path)):
        return dest_path
    raise TaintedPathError(file_name)


def _entry_mode(info: zipfile.ZipInfo) -> int:
    mode = (info.external_attr >> 16) & 0o777
    return mode or _DEFAULT_FILE_PERM


def unzip_to_dir(data_zip: bytes, dir_path: str, path_filter: Callable[[str], bool]) -> None:
    """Extract the entries of data_zip accepted by path_filter into dir_path.

    dir_path is created when missing.
    """
    os.makedirs(dir_path, mode=_RWE_PERM, exist_ok=True)

    with zipfile.ZipFile(io.BytesIO(data_zip)) as archive:
        for info in archive.infolist():
            dest_path = sanitize_archive_path(dir_path, info.filename)
            if info.is_dir():
                os.makedirs(dest_path, mode=_RWE_PERM, exist_ok=True)
                continue

            data = archive.read(info)
            if not path_filter(dest_path):
                continue

            fd = os.open(dest_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _entry_mode(info))
            with os.fdopen(fd, "wb") as dest:
                dest.write(data)