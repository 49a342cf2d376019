"""Global settings of the version manager."""

from __future__ import annotations

import logging
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from tenv.envutils import Getenv
from tenv.loghelper import ERROR, INERT_DISPLAYER, Displayer
from tenv.remote import (
    BASE_GITHUB_URL,
    DEFAULT_ATMOS_GITHUB_URL,
    DEFAULT_HASHICORP_URL,
    DEFAULT_TERRAGRUNT_GITHUB_URL,
    DEFAULT_TOFU_GITHUB_URL,
    RemoteConfig,
)

AGNOSTIC_NAME = "tf"
ATMOS_NAME = "atmos"
TENV_NAME = "tenv"
TERRAFORM_NAME = "terraform"
TERRAGRUNT_NAME = "terragrunt"
TOFU_NAME = "tofu"
OPENTOFU_NAME = "opentofu"
CALL_SUB_CMD = "call"

DEFAULT_DIR_NAME = ".tenv"
REMOTE_CONF_NAME = "remote.yaml"

_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv7l": "arm",
    "armv6l": "arm",
}


def _current_arch() -> str:
    machine = platform.machine().lower()
    return _ARCH_ALIASES.get(machine, machine)


def empty_getenv(key: str) -> str:
    """Environment lookup that never finds anything."""
    if not isinstance(key, str):
        raise TypeError(f"environment variable name must be a string, got {type(key).__name__}")
    return ""


def _remote(default_url: str, default_base_url: str):
    return field(default_factory=lambda: RemoteConfig.default(default_url, default_base_url))


@dataclass
class Config:
    """Settings shared by every command."""

    arch: str = field(default_factory=_current_arch)
    atmos: RemoteConfig = _remote(DEFAULT_ATMOS_GITHUB_URL, BASE_GITHUB_URL)
    displayer: Displayer = INERT_DISPLAYER
    display_verbose: bool = False
    force_quiet: bool = False
    force_remote: bool = False
    getenv: Getenv = field(default_factory=lambda: Getenv(empty_getenv))
    github_actions: bool = False
    github_token: str = ""
    remote_conf_path: str = ""
    root_path: str = ""
    skip_install: bool = False
    skip_signature: bool = False
    tf: RemoteConfig = _remote(DEFAULT_HASHICORP_URL, DEFAULT_HASHICORP_URL)
    tf_key_path: str = ""
    tg: RemoteConfig = _remote(DEFAULT_TERRAGRUNT_GITHUB_URL, BASE_GITHUB_URL)
    tofu: RemoteConfig = _remote(DEFAULT_TOFU_GITHUB_URL, BASE_GITHUB_URL)
    tofu_key_path: str = ""
    user_path: str = ""
    work_path: str = "."
    _remote_conf_loaded: bool = field(default=False, init=False, repr=False)

    def init_install(self, force_install: bool, force_no_install: bool) -> None:
        """Apply the install flags; --no-install has the higher priority."""
        if force_no_install:
            self.skip_install = True
        elif force_install:
            self.skip_install = False

    def init_remote_conf(self) -> None:
        """Load the remote configuration file once; a missing file is ignored."""
        if self._remote_conf_loaded:
            return
        self._remote_conf_loaded = True

        path = self.remote_conf_path or os.path.join(self.root_path, REMOTE_CONF_NAME)
        try:
            with open(path, encoding="utf-8") as f:
                content = f.read()
        except FileNotFoundError as exc:
            self.displayer.log(logging.DEBUG, "Can not read remote configuration file", **{ERROR: exc})
            return

        remote_conf = _parse_remote_conf(content)
        self.tf.data = remote_conf.get(TERRAFORM_NAME, {})
        self.tg.data = remote_conf.get(TERRAGRUNT_NAME, {})
        self.tofu.data = remote_conf.get(TOFU_NAME, {})
        self.atmos.data = remote_conf.get(ATMOS_NAME, {})


def _scalar_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        raise ValueError(f"remote configuration value must be a scalar, got {value!r}")
    return str(value)


def _parse_remote_conf(content: str) -> dict[str, dict[str, str]]:
    loaded = yaml.safe_load(content)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError("remote configuration must be a mapping")

    result: dict[str, dict[str, str]] = {}
    for tool, values in loaded.items():
        if values is None:
            result[str(tool)] = {}
            continue
        if not isinstance(values, dict):
            raise ValueError(f"remote configuration of {tool} must be a mapping")
        result[str(tool)] = {str(key): _scalar_to_str(value) for key, value in values.items()}
    return result


def default_config() -> Config:
    """Return the configuration used when the environment is not consulted."""
    user_path = str(Path.home())
    conf = Config(
        root_path=os.path.join(user_path, DEFAULT_DIR_NAME),
        skip_install=True,
        user_path=user_path,
        work_path=".",
    )
    conf._remote_conf_loaded = True
    return conf