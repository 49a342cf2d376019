"""Remote locations and download modes of a managed tool."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from tenv.download import RequestOption, URLTransformer, new_url_transformer, no_transform, with_basic_auth
from tenv.envutils import Getenv

INSTALL_MODE_DIRECT = "direct"
LIST_MODE_HTML = "html"
MODE_API = "api"

_SLASH_RELEASES = "/releases"

BASE_GITHUB_URL = "https://github.com"
DEFAULT_GITHUB_URL = "https://api.github.com/repos/"
DEFAULT_HASHICORP_URL = "https://releases.hashicorp.com"
DEFAULT_TERRAGRUNT_GITHUB_URL = DEFAULT_GITHUB_URL + "gruntwork-io/terragrunt" + _SLASH_RELEASES
DEFAULT_TOFU_GITHUB_URL = DEFAULT_GITHUB_URL + "opentofu/opentofu" + _SLASH_RELEASES
DEFAULT_ATMOS_GITHUB_URL = DEFAULT_GITHUB_URL + "cloudposse/atmos" + _SLASH_RELEASES


class InstallModeError(ValueError):
    """Raised for an install mode that is not known."""

    def __init__(self, mode: str = "") -> None:
        super().__init__(f"unknown install mode: {mode}" if mode else "unknown install mode")


class ListModeError(ValueError):
    """Raised for a list mode that is not known."""

    def __init__(self, mode: str = "") -> None:
        super().__init__(f"unknown list mode: {mode}" if mode else "unknown list mode")


def map_get_default(mapping: Optional[Mapping[str, str]], key: str, default: str) -> str:
    """Return the stripped value under key, or default when it is missing or blank."""
    value = (mapping or {}).get(key, "") or ""
    value = value.strip()
    return value if value else default


def get_basic_auth_option(getenv: Getenv, user_env_name: str, pass_env_name: str) -> list[RequestOption]:
    """Return a basic-auth request option when both variables are set, else nothing."""
    username, password = getenv(user_env_name), getenv(pass_env_name)
    if not username or not password:
        return []
    return [with_basic_auth(username, password)]


@dataclass
class RemoteConfig:
    """Where a tool is listed and downloaded from.

    Values come, by decreasing priority, from a command flag, the
    environment, the remote configuration file and built-in defaults.
    """

    default_url: str = ""
    default_base_url: str = ""
    data: dict[str, str] = field(default_factory=dict)
    install_mode_env: str = ""
    list_mode_env: str = ""
    list_url_env: str = ""
    remote_url_env: str = ""
    remote_url_flag: str = ""

    @classmethod
    def default(cls, default_url: str, default_base_url: str) -> "RemoteConfig":
        return cls(default_url=default_url, default_base_url=default_base_url)

    @classmethod
    def from_env(
        cls,
        getenv: Getenv,
        remote_url_env_name: str,
        list_url_env_name: str,
        install_mode_env_name: str,
        list_mode_env_name: str,
        default_url: str,
        default_base_url: str,
    ) -> "RemoteConfig":
        return cls(
            default_url=default_url,
            default_base_url=default_base_url,
            install_mode_env=getenv(install_mode_env_name),
            list_mode_env=getenv(list_mode_env_name),
            list_url_env=getenv(list_url_env_name),
            remote_url_env=getenv(remote_url_env_name),
        )

    def _value(self, name: str, forced: str, default: str) -> str:
        if forced:
            return forced
        return map_get_default(self.data, name, default)

    def install_mode(self) -> str:
        default_mode = MODE_API
        if self.default_base_url == BASE_GITHUB_URL and self.remote_url() != self.default_url:
            default_mode = INSTALL_MODE_DIRECT
        return self._value("install_mode", self.install_mode_env, default_mode)

    def list_mode(self) -> str:
        default_mode = MODE_API if self.list_url() == self.default_url else LIST_MODE_HTML
        return self._value("list_mode", self.list_mode_env, default_mode)

    def list_url(self) -> str:
        return self._value("list_url", self.list_url_env, self.remote_url()).rstrip("/")

    def remote_url(self) -> str:
        url = self.remote_url_flag or self._value("url", self.remote_url_env, self.default_url)
        return url.rstrip("/")

    def rewrite_rule(self) -> URLTransformer:
        """Return the transformation applied to download URLs."""
        old_base = (self.data or {}).get("old_base_url", "")
        new_base = (self.data or {}).get("new_base_url", "")
        if old_base and new_base:
            return new_url_transformer(old_base, new_base)

        if self.install_mode() == INSTALL_MODE_DIRECT:
            return no_transform

        list_url = self.list_url()
        remote_url = self.remote_url()
        default_list = list_url == self.default_url
        default_remote = remote_url == self.default_url
        if default_list and default_remote:
            return no_transform

        return new_url_transformer(self.default_base_url, remote_url if default_list else list_url)