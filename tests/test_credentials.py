"""Credential acquisition and verification tests."""

import json
from urllib.parse import parse_qs, urlparse

import pytest
from conftest import TOKEN, FakeClock, ScriptedPrompter

from core.errors import (
    ClipboardUnavailableError,
    CredentialTimeoutError,
    EmptyCredentialError,
    InvalidCredentialError,
)
from core.services.credentials import (
    AcquisitionMode,
    AssistedOptions,
    acquire_credential,
    build_token_creation_url,
    looks_like_token,
    verify_token,
)


class FakeClipboard:
    def __init__(self, values, *, fail_on_read: bool = False) -> None:
        self.values = list(values)
        self.fail_on_read = fail_on_read
        self.cleared = False
        self.reads = 0

    def read(self) -> str:
        self.reads += 1
        if self.fail_on_read:
            raise ClipboardUnavailableError("xclip missing")
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]

    def clear(self) -> None:
        self.cleared = True
        self.values = [""]


def _options(clipboard, clock=None, opened=None):
    clock = clock or FakeClock()

    def open_url(url: str) -> bool:
        if opened is not None:
            opened.append(url)
        return True

    return AssistedOptions(
        clipboard=clipboard,
        open_url=open_url,
        clock=clock,
        sleep=clock.sleep,
    )


def test_token_shape() -> None:
    assert looks_like_token(TOKEN)
    assert looks_like_token("a-b_c" * 8)
    assert not looks_like_token(TOKEN[:-1])
    assert not looks_like_token(TOKEN + "x")
    assert not looks_like_token("!" * 40)


def test_manual_token_is_stripped(settings) -> None:
    prompter = ScriptedPrompter(secrets=[f"  {TOKEN}\n"])
    assert acquire_credential(AcquisitionMode.MANUAL, prompter, settings, _options(None)) == TOKEN


def test_manual_empty_token_is_fatal(settings) -> None:
    with pytest.raises(EmptyCredentialError):
        acquire_credential(AcquisitionMode.MANUAL, ScriptedPrompter(secrets=["   "]), settings, _options(None))


def test_creation_url_carries_required_permissions(settings) -> None:
    url = build_token_creation_url(settings.token_dashboard_url)
    query = parse_qs(urlparse(url).query)

    permissions = json.loads(query["permissionGroupKeys"][0])
    assert {"key": "workers_scripts", "type": "edit"} in permissions
    assert {"key": "account_settings", "type": "read"} in permissions
    assert url.startswith(settings.token_dashboard_url + "?")


def test_assisted_adopts_clipboard_token_and_clears_it(settings) -> None:
    clipboard = FakeClipboard(["some earlier text", "", TOKEN])
    opened: list[str] = []
    prompter = ScriptedPrompter()

    token = acquire_credential(AcquisitionMode.ASSISTED, prompter, settings, _options(clipboard, opened=opened))

    assert token == TOKEN
    assert clipboard.cleared
    assert clipboard.reads == 3
    assert len(opened) == 1
    assert all(TOKEN not in line for line in prompter.infos)


def test_assisted_times_out_after_deadline(settings) -> None:
    clock = FakeClock()
    clipboard = FakeClipboard(["not a token"])
    prompter = ScriptedPrompter()

    with pytest.raises(CredentialTimeoutError) as excinfo:
        acquire_credential(AcquisitionMode.ASSISTED, prompter, settings, _options(clipboard, clock))

    assert sum(clock.sleeps) == pytest.approx(120)
    assert set(clock.sleeps) == {2}
    assert "run the wizard again" in excinfo.value.message
    assert not clipboard.cleared
    assert [line for line in prompter.infos if "left" in line] == [
        "Still waiting for the token... 90s left",
        "Still waiting for the token... 60s left",
        "Still waiting for the token... 30s left",
    ]


def test_assisted_without_clipboard_falls_back_to_manual(settings) -> None:
    prompter = ScriptedPrompter(secrets=[TOKEN])

    token = acquire_credential(AcquisitionMode.ASSISTED, prompter, settings, _options(None))

    assert token == TOKEN
    assert prompter.warnings


def test_assisted_clipboard_failure_falls_back_to_manual(settings) -> None:
    prompter = ScriptedPrompter(secrets=[TOKEN])
    clipboard = FakeClipboard([""], fail_on_read=True)

    assert acquire_credential(AcquisitionMode.ASSISTED, prompter, settings, _options(clipboard)) == TOKEN
    assert "manual" in prompter.warnings[-1]


def test_browser_failure_is_only_a_warning(settings) -> None:
    prompter = ScriptedPrompter()
    clock = FakeClock()
    options = AssistedOptions(
        clipboard=FakeClipboard([TOKEN]),
        open_url=lambda url: False,
        clock=clock,
        sleep=clock.sleep,
    )

    assert acquire_credential(AcquisitionMode.ASSISTED, prompter, settings, options) == TOKEN
    assert prompter.warnings == ["Could not open a browser automatically."]


def test_verify_token_accepts_success(settings, platform) -> None:
    with platform.client(settings) as client:
        verify_token(client)

    request = platform.requests[0]
    assert request.headers["Authorization"] == f"Bearer {TOKEN}"


def test_verify_token_surfaces_platform_message(settings, platform) -> None:
    platform.token_valid = False

    with platform.client(settings) as client, pytest.raises(InvalidCredentialError) as excinfo:
        verify_token(client)

    assert "Invalid API Token" in excinfo.value.message
