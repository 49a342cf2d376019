# tenv

A library of building blocks for managing several versions of OpenTofu,
Terraform, Terragrunt and Atmos: settings read from the environment and from a
remote configuration file, download URL rewriting for mirrors, HTTP downloads
and HTML listing queries, SHA-256 and cosign verification, safe zip
extraction, lock files for concurrent installs, and running an installed
binary with its output reported to GitHub Actions.

Install with the test extra to run the tests:

```
pip install .[test]
pytest
```

## What it does not do

This package has no command-line program and no version manager of its own:
it does not list, resolve, install, select or uninstall tool versions, does
not query the GitHub releases API, does not parse version constraints or
version files, and does not verify PGP signatures. It supplies the pieces such
a tool is built from.

## Settings

`tenv.config.Config` is a dataclass holding the shared settings (`arch`,
`root_path`, `skip_install`, `github_token`, one `RemoteConfig` per tool in
`tofu`, `tf`, `tg` and `atmos`, and so on). `tenv.config.default_config()`
returns one with the install root at `~/.tenv`, `skip_install` set, and the
remote configuration marked as already loaded.

```python
from tenv.config import Config

conf = Config(root_path="/opt/tenv")
conf.init_install(force_install=True, force_no_install=False)  # skip_install = False
conf.init_remote_conf()  # reads /opt/tenv/remote.yaml once, if it exists
```

`init_install(True, True)` leaves installation disabled: the no-install flag
wins. `init_remote_conf()` reads `remote_conf_path`, or `remote.yaml` under
`root_path`; a missing file is logged at debug level and ignored. The file is
a YAML mapping from tool name (`tofu`, `terraform`, `terragrunt`, `atmos`) to
string settings:

```yaml
terraform:
  url: https://mirror.example.com/terraform
  list_url: https://mirror.example.com/terraform/index
  install_mode: direct
  list_mode: html
  old_base_url: https://releases.hashicorp.com
  new_base_url: https://mirror.example.com
```

## Environment values

`tenv.envutils.Getenv` wraps a lookup function (the process environment by
default); unset and empty values are treated alike.

```python
import os
from tenv.envutils import Getenv

getenv = Getenv(os.environ.get)
root = getenv.fallback("TENV_ROOT", "TOFUENV_ROOT", "TFENV_ROOT")
auto_install = getenv.bool_fallback(False, "TENV_AUTO_INSTALL", "TFENV_AUTO_INSTALL")
quiet = getenv.bool_value(False, "TENV_QUIET")
```

Booleans accept `1 t T TRUE true True` and `0 f F FALSE false False`; any
other non-empty value raises `ValueError` (see `tenv.envutils.parse_bool`).

## Remote locations and mirrors

`tenv.remote.RemoteConfig` resolves, for one tool:

- `remote_url()`: `remote_url_flag`, else `remote_url_env`, else `url` from
  the file, else the built-in default;
- `list_url()`: `list_url_env`, else `list_url` from the file, else the
  remote URL;
- `install_mode()`: `api` or `direct` (`direct` by default when a GitHub
  hosted tool uses a non-default remote URL);
- `list_mode()`: `api` when the list URL is the default one, `html` otherwise,
  unless set by the environment or the file;
- `rewrite_rule()`: the URL transformer to apply to download links.

Trailing slashes are removed from URLs. `RemoteConfig.from_env(...)` builds one
from environment variable names, and `get_basic_auth_option(getenv, user_var,
pass_var)` returns a basic-auth request option when both variables are set.

```python
from tenv.download import new_url_transformer

transform = new_url_transformer("https://releases.hashicorp.com", "http://localhost:8080")
transform("https://releases.hashicorp.com/terraform/1.7.0/terraform_1.7.0_linux_386.zip")
# 'http://localhost:8080/terraform/1.7.0/terraform_1.7.0_linux_386.zip'
```

URLs that do not start with the old base are returned unchanged.

## Downloads and listings

`tenv.download.fetch_bytes(url, display, checker, *options)` performs a GET
and returns the body, and `fetch_json` decodes it as JSON. `checker` receives
the response and may raise to reject it (`no_check` accepts everything);
options such as `with_basic_auth(username, password)` adjust the request.
The module also defines `AssetNotFoundError`, `UnexpectedReturnError` and
`RateLimitError` for API callers.

`tenv.htmlquery.request(url, selector, extractor)` downloads a page and returns
the non-empty values extracted from the elements matching a CSS selector;
`selection_extractor("href")` extracts an attribute, `selection_extractor("#text")`
the stripped text. `extract_list(data, selector, extractor)` works on bytes
already in hand.

## Verifying downloads

```python
from tenv import sha256check

sha256check.check(archive_bytes, sums_bytes, "terraform_1.7.0_linux_amd64.zip")
```

`ChecksumError` is raised when the digest does not match and `NoChecksumError`
when the sums file has no line for the file name.

`tenv.cosigncheck.check(data, sig, cert, identity, issuer, displayer)` runs an
installed `cosign verify-blob` and raises `CosignNotInstalledError` when no
`cosign` executable is on the path, or `CosignCheckError` when it does not
report `Verified OK`.

## Unpacking and locking

`tenv.unzip.unzip_to_dir(data, directory, path_filter)` extracts a zip archive
held in memory into `directory` (created if missing), writing only the files
whose destination path `path_filter` accepts, for example
`tenv.pathfilter.name_equal("terraform")`. Entries that would land outside the
directory raise `TaintedPathError`.

`tenv.lockfile.locked(directory, displayer)` is a context manager holding a
`.lock` file in an existing directory for the duration of the block, retrying
every second while another holder owns it. `write(directory, displayer)` takes
the lock and returns the function that releases it, and
`clean_and_exit_on_interrupt(clean)` runs `clean` and exits with status 1 on
Ctrl+C until the returned function is called.

## Running an installed binary

`tenv.cmdproxy.run_command(args, gha=False)` runs a command with the current
standard streams and returns its exit code; `run` does the same and exits with
that code. With `gha=True`, stdout, stderr and the exit code are also appended
to the file named by `GITHUB_OUTPUT` in GitHub's multiline syntax, and an exit
code other than 0 or 2 is reported as a failure.

## Smaller helpers

- `tenv.loghelper`: `BasicDisplayer` (a logger plus a display function),
  `InertDisplayer` (discards everything), `RecordingDisplayer` (holds messages
  until the first `flush()`, then passes calls through; `flush(True)` replays
  displayed messages as debug records), `build_display_func`, `std_display`.
- `tenv.reversecmp.reverser(cmp, reverse_order)` swaps a comparison's arguments.
- `tenv.winbin.get_binary_name(name)` appends `.exe` on Windows.
- `tenv.tty.detect()` tells whether stdout is a terminal.