"""Terminal detection."""

from __future__ import annotations

import os
import stat
import sys
from typing import Optional, TextIO

_MSG_DETECT_ERR = "Failed to detect TTY mode, assume output is redirected :"


def detect(stream: Optional[TextIO] = None) -> bool:
    """Tell whether stream (stdout by default) is a character device."""
    if stream is None:
        stream = sys.stdout
    try:
        mode = os.fstat(stream.fileno()).st_mode
    except (OSError, ValueError, AttributeError) as exc:
        print(_MSG_DETECT_ERR, exc)
        return False
    return stat.S_ISCHR(mode)