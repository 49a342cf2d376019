"""Verify blobs with the external cosign tool."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile

from tenv.loghelper import Displayer

COSIGN_EXEC_NAME = "cosign"
_VERIFIED = "Verified OK"


class CosignCheckError(RuntimeError):
    """Raised when cosign does not confirm the signature."""

    def __init__(self) -> None:
        super().__init__("cosign check failed")


class CosignNotInstalledError(RuntimeError):
    """Raised when no cosign executable is found."""

    def __init__(self) -> None:
        super().__init__("cosign executable not found")


def _write(dir_path: str, name: str, data: bytes) -> str:
    path = os.path.join(dir_path, name)
    with open(path, "wb") as f:
        f.write(data)
    return path


def check(
    data: bytes,
    data_sig: bytes,
    data_cert: bytes,
    cert_identity: str,
    cert_oidc_issuer: str,
    displayer: Displayer,
) -> None:
    """Verify data against its signature and certificate with cosign."""
    if shutil.which(COSIGN_EXEC_NAME) is None:
        raise CosignNotInstalledError()

    with tempfile.TemporaryDirectory() as tmp_dir:
        data_path = _write(tmp_dir, "data", data)
        sig_path = _write(tmp_dir, "data.sig", data_sig)
        cert_path = _write(tmp_dir, "data.cert", data_cert)

        cmd_args = [
            COSIGN_EXEC_NAME,
            "verify-blob",
            "--certificate-identity", cert_identity,
            "--signature", sig_path,
            "--certificate", cert_path,
            "--certificate-oidc-issuer", cert_oidc_issuer,
            data_path,
        ]
        result = subprocess.run(cmd_args, capture_output=True, text=True, check=False)

    std_out, std_err = result.stdout or "", result.stderr or ""
    displayer.log(logging.DEBUG, "cosign output", std_out=std_out, std_err=std_err)

    if _VERIFIED not in std_err:
        raise CosignCheckError()