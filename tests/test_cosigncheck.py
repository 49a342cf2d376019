import os
import subprocess
from unittest import mock

import pytest

from tenv.cosigncheck import CosignCheckError, CosignNotInstalledError, check
from tenv.loghelper import INERT_DISPLAYER, Displayer

IDENTITY = "https://github.com/opentofu/opentofu/.github/workflows/release.yml@refs/heads/v1.6"
ISSUER = "https://token.actions.githubusercontent.com"

DATA = b"abc123  tofu_1.6.0_linux_amd64.zip\n"
DATA_SIG = b"MEUCIQ-made-up-signature"
DATA_CERT = b"-----BEGIN CERTIFICATE-----\nmade-up\n-----END CERTIFICATE-----\n"


class _CollectingDisplayer(Displayer):
    def __init__(self):
        self.logs = []

    def display(self, msg):
        pass

    def is_debug(self):
        return True

    def log(self, level, msg, **kwargs):
        self.logs.append((msg, kwargs))

    def flush(self, log_mode):
        pass


def _option(args, name):
    return args[args.index(name) + 1]


def _read(path):
    with open(path, "rb") as f:
        return f.read()


def _fake_cosign(seen_paths):
    def run(args, **kwargs):
        sig_path = _option(args, "--signature")
        cert_path = _option(args, "--certificate")
        data_path = args[-1]
        seen_paths.extend([sig_path, cert_path, data_path])
        ok = (
            args[:2] == ["cosign", "verify-blob"]
            and _option(args, "--certificate-identity") == IDENTITY
            and _option(args, "--certificate-oidc-issuer") == ISSUER
            and _read(sig_path) == DATA_SIG
            and _read(cert_path) == DATA_CERT
            and _read(data_path) == DATA
        )
        stderr = "Verified OK\n" if ok else "Error: none of the expected identities matched\n"
        return subprocess.CompletedProcess(args, 0 if ok else 1, stdout="", stderr=stderr)

    return run


def test_cosign_check_correct():
    seen = []
    displayer = _CollectingDisplayer()
    with mock.patch("shutil.which", return_value="/usr/bin/cosign"), mock.patch(
        "subprocess.run", side_effect=_fake_cosign(seen)
    ):
        result = check(DATA, DATA_SIG, DATA_CERT, IDENTITY, ISSUER, displayer)
    assert result is None
    assert displayer.logs[0][0] == "cosign output"
    assert displayer.logs[0][1]["std_err"] == "Verified OK\n"
    assert len(seen) == 3
    assert not any(os.path.exists(path) for path in seen)


@pytest.mark.parametrize(
    "data_sig, data_cert, identity, issuer",
    [
        (DATA_SIG, DATA_CERT[1:], IDENTITY, ISSUER),
        (DATA_SIG, DATA_CERT, "me", ISSUER),
        (DATA_SIG, DATA_CERT, IDENTITY, "http://myself.com"),
        (DATA_SIG[1:], DATA_CERT, IDENTITY, ISSUER),
    ],
)
def test_cosign_check_errors(data_sig, data_cert, identity, issuer):
    with mock.patch("shutil.which", return_value="/usr/bin/cosign"), mock.patch(
        "subprocess.run", side_effect=_fake_cosign([])
    ):
        with pytest.raises(CosignCheckError, match="cosign check failed"):
            check(DATA, data_sig, data_cert, identity, issuer, INERT_DISPLAYER)


def test_cosign_not_installed():
    with mock.patch("shutil.which", return_value=None):
        with pytest.raises(CosignNotInstalledError, match="cosign executable not found"):
            check(DATA, DATA_SIG, DATA_CERT, IDENTITY, ISSUER, INERT_DISPLAYER)