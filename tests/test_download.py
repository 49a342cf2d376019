import base64

import pytest
import responses

from tenv.download import (
    RateLimitError,
    apply_url_transformer,
    fetch_bytes,
    fetch_json,
    new_url_transformer,
    no_check,
    no_display,
    no_transform,
    with_basic_auth,
)


def test_url_transformer():
    transformer = new_url_transformer("https://releases.hashicorp.com", "http://localhost:8080")
    value = transformer("https://releases.hashicorp.com/terraform/1.7.0/terraform_1.7.0_linux_386.zip")
    assert value == "http://localhost:8080/terraform/1.7.0/terraform_1.7.0_linux_386.zip"


def test_url_transformer_prefix():
    transformer = new_url_transformer("https://github.com", "https://go.dev")
    initial = "https://releases.hashicorp.com/terraform/1.7.0/terraform_1.7.0_darwin_amd64.zip"
    assert transformer(initial) == initial


def test_url_transformer_slash():
    transformer = new_url_transformer("https://releases.hashicorp.com/", "http://localhost")
    value = transformer("https://releases.hashicorp.com/terraform/1.7.0/terraform_1.7.0_darwin_amd64.zip")
    assert value == "http://localhost/terraform/1.7.0/terraform_1.7.0_darwin_amd64.zip"


@pytest.mark.parametrize("prev, new", [("", "http://localhost"), ("http://a.example.com", "")])
def test_empty_base_gives_identity(prev, new):
    transformer = new_url_transformer(prev, new)
    assert transformer("http://a.example.com/x") == "http://a.example.com/x"


def test_no_transform_returns_input():
    assert no_transform("http://example.com/a") == "http://example.com/a"


def test_apply_url_transformer():
    transformer = new_url_transformer("http://old.example.com", "http://new.example.com/base")
    result = apply_url_transformer(
        transformer, "http://old.example.com/a.zip", "http://other.example.com/b.zip"
    )
    assert result == ["http://new.example.com/base/a.zip", "http://other.example.com/b.zip"]


def test_fetch_bytes_displays_and_returns_body():
    messages = []
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, "http://example.com/data", body=b"payload")
        data = fetch_bytes("http://example.com/data", messages.append, no_check)
    assert data == b"payload"
    assert messages == ["Downloading http://example.com/data"]


def test_fetch_bytes_checker_error_propagates():
    def checker(response):
        if response.headers.get("X-Ratelimit-Remaining") == "0":
            raise RateLimitError()

    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            "http://example.com/api",
            body=b"{}",
            headers={"X-Ratelimit-Remaining": "0"},
        )
        with pytest.raises(RateLimitError, match="rate-limited"):
            fetch_bytes("http://example.com/api", no_display, checker)


def test_basic_auth_option_sets_header():
    username = "user"
    password = "password"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, "http://example.com/private", body=b"ok")
        data = fetch_bytes(
            "http://example.com/private", no_display, no_check, with_basic_auth(username, password)
        )
        header = rsps.calls[0].request.headers["Authorization"]
    assert data == b"ok"
    scheme, encoded = header.split(" ", 1)
    assert scheme == "Basic"
    assert base64.b64decode(encoded).decode() == f"{username}:{password}"


def test_fetch_json_decodes_body():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, "http://example.com/j", json={"tag_name": "v1.6.0", "n": [1, 2]})
        value = fetch_json("http://example.com/j", no_display, no_check)
    assert value == {"tag_name": "v1.6.0", "n": [1, 2]}