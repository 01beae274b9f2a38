"""Self-update bootstrap.

Compares the local version marker with the remote one and, on any textual
difference, downloads a replacement executable into the user cache directory.
The actual process replacement is NOT done here: the function returns a
`RelaunchRequested` value and the CLI driver performs the `exec`. That keeps
the handoff testable without spawning processes.

Failure policy:
- version check fails -> warning, keep running the current copy;
- download fails -> fatal (`UpdateDownloadError`), never run a half-updated tool.
"""

from __future__ import annotations

import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence, Union
from urllib.parse import urlparse

import httpx

from adapters.http_client import build_client
from core.config import APP_NAME, AppSettings
from core.domain.models import VersionInfo
from core.errors import TransientNetworkError, UpdateDownloadError


@dataclass(frozen=True)
class Continue:
    """No relaunch needed; `version` is set when the remote marker was read."""

    version: VersionInfo | None = None


@dataclass(frozen=True)
class RelaunchRequested:
    path: Path
    args: tuple[str, ...]
    version: VersionInfo


RelaunchOutcome = Union[Continue, RelaunchRequested]


def ensure_cache_dir(cache_dir: Path) -> Path:
    """Create the cache directory with owner-only permissions if missing."""

    if not cache_dir.exists():
        cache_dir.mkdir(parents=True, mode=0o700)
        # mkdir's mode is filtered by the umask.
        os.chmod(cache_dir, 0o700)
    return cache_dir


def fetch_remote_version(client: httpx.Client, url: str) -> str:
    """Read the remote marker as raw text; `TransientNetworkError` on any transport/HTTP failure."""

    try:
        response = client.get(url)
    except httpx.HTTPError as exc:
        raise TransientNetworkError(f"Version check failed: {exc}") from exc
    if not response.is_success:
        raise TransientNetworkError(f"Version check failed: HTTP {response.status_code} from {url}")
    return response.text


def _binary_name(url: str) -> str:
    name = Path(urlparse(url).path).name
    return name or APP_NAME


def download_replacement(client: httpx.Client, url: str, cache_dir: Path) -> Path:
    """Download the replacement executable atomically and mark it executable."""

    try:
        response = client.get(url)
    except httpx.HTTPError as exc:
        raise UpdateDownloadError(f"Update download failed: {exc}") from exc
    if not response.is_success:
        raise UpdateDownloadError(f"Update download failed: HTTP {response.status_code} from {url}")
    if not response.content:
        raise UpdateDownloadError(f"Update download failed: empty file from {url}")

    ensure_cache_dir(cache_dir)
    target = cache_dir / _binary_name(url)
    fd, tmp_name = tempfile.mkstemp(dir=cache_dir, prefix=".download-")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(response.content)
        os.chmod(tmp_name, stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH)
        os.replace(tmp_name, target)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise UpdateDownloadError(f"Could not install update into {cache_dir}: {exc}") from exc
    return target


def check_and_maybe_relaunch(
    local_version: str,
    remote_version_url: str,
    self_binary_url: str,
    invocation_args: Sequence[str],
    *,
    cache_dir: Path,
    settings: AppSettings | None = None,
    transport: httpx.BaseTransport | None = None,
    on_warning: Callable[[str], None] | None = None,
    on_info: Callable[[str], None] | None = None,
) -> RelaunchOutcome:
    settings = settings or AppSettings()

    with build_client(settings, timeout=settings.update_check_timeout_seconds, transport=transport) as client:
        try:
            remote = fetch_remote_version(client, remote_version_url)
        except TransientNetworkError:
            if on_warning:
                on_warning("Could not check for updates; continuing with the current version.")
            return Continue()

    version = VersionInfo(local=local_version, remote=remote)
    if not version.is_outdated:
        return Continue(version=version)

    if on_info:
        on_info(f"A new version is available ({remote.strip()!r}); downloading update...")
    with build_client(settings, timeout=settings.download_timeout_seconds, transport=transport) as client:
        path = download_replacement(client, self_binary_url, cache_dir)
    return RelaunchRequested(path=path, args=tuple(invocation_args), version=version)
