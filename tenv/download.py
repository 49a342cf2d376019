"""HTTP downloads, URL rewriting and GitHub API error types."""

from __future__ import annotations

import json
import posixpath
from typing import Any, Callable, Sequence
from urllib.parse import urlsplit, urlunsplit

import requests

RequestOption = Callable[[requests.Request], None]
ResponseChecker = Callable[[requests.Response], None]
URLTransformer = Callable[[str], str]

ASSETS_NAME = "assets"
MSG_FETCH_ALL_RELEASES = "Fetching all releases information from "
MSG_FETCH_RELEASE = "Fetching release information from "
MSG_SEARCH = "Search"


class AssetNotFoundError(LookupError):
    """Raised when a searched release asset does not exist."""

    def __init__(self, message: str = "searched asset not found") -> None:
        super().__init__(message)


class UnexpectedReturnError(ValueError):
    """Raised when an API answers with data of an unexpected shape."""

    def __init__(self, message: str = "unexpected value returned by API") -> None:
        super().__init__(message)


class RateLimitError(RuntimeError):
    """Raised when the GitHub API reports an exhausted rate limit."""

    def __init__(
        self,
        message: str = (
            "you are rate-limited by GitHub. Consider using a token by setting "
            "the TENV_GITHUB_TOKEN env variable to increase the rate limit"
        ),
    ) -> None:
        super().__init__(message)


def apply_url_transformer(url_transformer: URLTransformer, *args: str) -> list[str]:
    """Apply url_transformer to every given URL."""
    return [url_transformer(base_url) for base_url in args]


def fetch_bytes(
    url: str,
    display: Callable[[str], None],
    checker: ResponseChecker,
    *args: RequestOption,
) -> bytes:
    """GET url and return the body; checker may raise to reject the response."""
    display("Downloading " + url)

    request = requests.Request("GET", url)
    for option in args:
        option(request)

    with requests.Session() as session:
        response = session.send(session.prepare_request(request))
        with response:
            checker(response)
            return response.content


def fetch_json(
    url: str,
    display: Callable[[str], None],
    checker: ResponseChecker,
    *args: RequestOption,
) -> Any:
    """GET url and decode the body as JSON."""
    return json.loads(fetch_bytes(url, display, checker, *args))


def _require_str(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{what} must be a string, got {type(value).__name__}")
    return value


def no_display(msg: str) -> None:
    """Discard a message; only its type is checked."""
    _require_str(msg, "message")


def no_transform(value: str) -> str:
    """Return the URL unchanged."""
    return _require_str(value, "URL")


def no_check(response: requests.Response) -> None:
    """Accept any HTTP response."""
    if not isinstance(response, requests.Response):
        raise TypeError(f"expected an HTTP response, got {type(response).__name__}")


def _clean_join(*elems: str) -> str:
    parts = [elem for elem in elems if elem]
    if not parts:
        return ""
    cleaned = posixpath.normpath("/".join(parts))
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _join_url(base_url: str, suffix: str) -> str:
    parts = urlsplit(base_url)
    base_path = parts.path
    if base_path.startswith("/"):
        joined = _clean_join(base_path, suffix)
    else:
        joined = _clean_join("/" + base_path, suffix)[1:]
    if suffix.endswith("/") and not joined.endswith("/"):
        joined += "/"
    if parts.netloc and joined and not joined.startswith("/"):
        joined = "/" + joined
    return urlunsplit(parts._replace(path=joined))


def new_url_transformer(prev_base_url: str, base_url: str) -> URLTransformer:
    """Return a function replacing the prefix prev_base_url by base_url.

    URLs not starting with prev_base_url are returned unchanged.
    """
    prev_len = len(prev_base_url)
    if prev_len == 0 or not base_url:
        return no_transform

    def transform(url_value: str) -> str:
        if not url_value.startswith(prev_base_url):
            return url_value
        return _join_url(base_url, url_value[prev_len:])

    return transform


def with_basic_auth(username: str, password: str) -> RequestOption:
    """Return a request option adding HTTP basic authentication."""

    def apply(request: requests.Request) -> None:
        request.auth = (username, password)

    return apply


__all__: Sequence[str] = (
    "ASSETS_NAME",
    "MSG_FETCH_ALL_RELEASES",
    "MSG_FETCH_RELEASE",
    "MSG_SEARCH",
    "AssetNotFoundError",
    "UnexpectedReturnError",
    "RateLimitError",
    "apply_url_transformer",
    "fetch_bytes",
    "fetch_json",
    "no_display",
    "new_url_transformer",
    "no_transform",
    "no_check",
    "with_basic_auth",
)