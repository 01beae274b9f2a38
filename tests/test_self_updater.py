"""Self-update bootstrap tests (no real network, no real exec)."""

import os
import stat

import httpx
import pytest

from core.errors import TransientNetworkError, UpdateDownloadError
from core.services.self_updater import Continue, RelaunchRequested, check_and_maybe_relaunch, fetch_remote_version

VERSION_URL = "https://updates.example/version.txt"
BINARY_URL = "https://updates.example/download/dns-wizard"
BINARY = b"\x7fELF fake executable"


def _transport(*, version: str | None, binary_status: int = 200, binary: bytes = BINARY, calls: list | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(str(request.url))
        if str(request.url) == VERSION_URL:
            if version is None:
                raise httpx.ConnectError("unreachable", request=request)
            return httpx.Response(200, text=version)
        if str(request.url) == BINARY_URL:
            return httpx.Response(binary_status, content=binary)
        return httpx.Response(404)

    return httpx.MockTransport(handler)


def _check(local: str, transport, settings, warnings=None):
    return check_and_maybe_relaunch(
        local,
        VERSION_URL,
        BINARY_URL,
        ["--no-color"],
        cache_dir=settings.resolved_cache_dir(),
        settings=settings,
        transport=transport,
        on_warning=(warnings.append if warnings is not None else None),
    )


def test_equal_versions_continue_without_download(settings) -> None:
    calls: list[str] = []

    outcome = _check("3.0.0", _transport(version="3.0.0", calls=calls), settings)

    assert isinstance(outcome, Continue)
    assert calls == [VERSION_URL]
    assert not settings.resolved_cache_dir().exists()


def test_unreachable_version_marker_is_a_warning(settings) -> None:
    warnings: list[str] = []

    outcome = _check("3.0.0", _transport(version=None), settings, warnings)

    assert outcome == Continue()
    assert len(warnings) == 1


@pytest.mark.parametrize("status", [404, 503])
def test_fetch_remote_version_raises_transient_error_on_http_failure(status) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(status, text="oops"))

    with httpx.Client(transport=transport) as client, pytest.raises(TransientNetworkError):
        fetch_remote_version(client, VERSION_URL)


def test_version_mismatch_downloads_and_requests_relaunch(settings) -> None:
    outcome = _check("3.0.0", _transport(version="3.1.0"), settings)

    assert isinstance(outcome, RelaunchRequested)
    assert outcome.args == ("--no-color",)
    assert outcome.path == settings.resolved_cache_dir() / "dns-wizard"
    assert outcome.path.read_bytes() == BINARY
    assert os.access(outcome.path, os.X_OK)
    assert stat.S_IMODE(settings.resolved_cache_dir().stat().st_mode) == 0o700


def test_whitespace_difference_counts_as_new_version(settings) -> None:
    outcome = _check("3.0.0", _transport(version="3.0.0\n"), settings)

    assert isinstance(outcome, RelaunchRequested)


def test_relaunched_copy_sees_equal_versions(settings) -> None:
    transport = _transport(version="3.1.0")

    first = _check("3.0.0", transport, settings)
    assert isinstance(first, RelaunchRequested)

    # The replacement carries the remote version as its local marker.
    second = _check(first.version.remote, transport, settings)
    assert isinstance(second, Continue)


@pytest.mark.parametrize("status,body", [(404, BINARY), (200, b"")])
def test_download_failure_is_fatal(settings, status, body) -> None:
    with pytest.raises(UpdateDownloadError):
        _check("3.0.0", _transport(version="3.1.0", binary_status=status, binary=body), settings)

    assert not (settings.resolved_cache_dir() / "dns-wizard").exists()
