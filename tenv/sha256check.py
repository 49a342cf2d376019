"""Verify data against a SHA256SUMS file."""

from __future__ import annotations

import binascii
import hashlib
import hmac


class ChecksumError(ValueError):
    """Raised when data does not match its published checksum."""

    def __init__(self) -> None:
        super().__init__("invalid sha256 checksum")


class NoChecksumError(LookupError):
    """Raised when the sums file has no line for the file name."""

    def __init__(self) -> None:
        super().__init__("file sha256 checksum not found for current platform")


def extract(data_sums: bytes, file_name: str) -> bytes:
    """Return the decoded checksum listed for file_name in data_sums."""
    for line in data_sums.decode(errors="replace").split("\n"):
        if line.endswith(file_name):
            return binascii.unhexlify(line[: len(line) - len(file_name)].strip())
    raise NoChecksumError()


def check(data: bytes, data_sums: bytes, file_name: str) -> None:
    """Raise unless data hashes to the checksum listed for file_name."""
    expected = extract(data_sums, file_name)
    if not hmac.compare_digest(expected, hashlib.sha256(data).digest()):
        raise ChecksumError()