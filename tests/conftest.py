"""Shared fixtures: scripted prompter, fake clock and a fake platform API."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Sequence

import httpx
import pytest

from adapters.cloudflare_api import CloudflareClient
from core.config import AppSettings
from core.domain.models import Account, DependencyReport
from core.services.workflow import WorkflowDeps

TOKEN = "A" * 20 + "b" * 10 + "0123456789"
ACCOUNT_ID = "0123456789abcdef0123456789abcdef"
SCRIPT = b"addEventListener('fetch', e => e.respondWith(new Response('ok')))"


class ScriptedPrompter:
    """Prompter that answers from queues and records everything shown."""

    def __init__(
        self,
        *,
        answers: Sequence[str] = (),
        secrets: Sequence[str] = (),
        choices: Sequence[str] = (),
        confirms: Sequence[bool] = (),
    ) -> None:
        self.answers = list(answers)
        self.secrets = list(secrets)
        self.choices = list(choices)
        self.confirms = list(confirms)
        self.infos: list[str] = []
        self.warnings: list[str] = []
        self.shown_accounts: list[list[Account]] = []

    def ask(self, message: str) -> str:
        return self.answers.pop(0)

    def ask_secret(self, message: str) -> str:
        return self.secrets.pop(0)

    def choose_account(self, accounts: Sequence[Account]) -> str:
        self.shown_accounts.append(list(accounts))
        return self.choices.pop(0)

    def choose(self, message: str, options: Sequence[str]) -> str:
        return self.choices.pop(0)

    def confirm(self, message: str) -> bool:
        return self.confirms.pop(0)

    def info(self, message: str) -> None:
        self.infos.append(message)

    def warning(self, message: str) -> None:
        self.warnings.append(message)


class FakeClock:
    """Monotonic clock advanced only by `sleep`."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def api_body(*, success: bool = True, result: Any = None, errors: list[dict[str, Any]] | None = None) -> str:
    return json.dumps(
        {"success": success, "errors": errors or [], "messages": [], "result": result},
        indent=2,
    )


@dataclass
class FakePlatform:
    """In-memory stand-in for the platform REST API, served through `httpx.MockTransport`."""

    accounts: list[dict[str, str]] = field(
        default_factory=lambda: [{"id": ACCOUNT_ID, "name": "Main account"}]
    )
    subdomain: str | None = "foo"
    token_valid: bool = True
    subdomain_lookup_response: tuple[int, str] | None = None
    create_subdomain_response: tuple[int, str] | None = None
    deploy_response: tuple[int, str] | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/client/v4")

        if path == "/user/tokens/verify":
            if self.token_valid:
                return httpx.Response(200, text=api_body(result={"status": "active"}))
            return httpx.Response(
                401,
                text=api_body(success=False, errors=[{"code": 1000, "message": "Invalid API Token"}]),
            )

        if path == "/accounts":
            return httpx.Response(200, text=api_body(result=self.accounts))

        if path.endswith("/workers/subdomain") and request.method == "GET":
            if self.subdomain_lookup_response is not None:
                status, text = self.subdomain_lookup_response
                return httpx.Response(status, text=text)
            if self.subdomain is None:
                return httpx.Response(
                    404,
                    text=api_body(
                        success=False,
                        errors=[{"code": 10007, "message": "This account does not have a workers.dev subdomain"}],
                    ),
                )
            return httpx.Response(200, text=api_body(result={"subdomain": self.subdomain}))

        if path.endswith("/workers/subdomain") and request.method == "PUT":
            if self.create_subdomain_response is not None:
                status, text = self.create_subdomain_response
                return httpx.Response(status, text=text)
            requested = json.loads(request.content)["subdomain"]
            self.subdomain = requested.lower()
            return httpx.Response(200, text=api_body(result={"subdomain": self.subdomain}))

        if "/workers/scripts/" in path and request.method == "PUT":
            if self.deploy_response is not None:
                status, text = self.deploy_response
                return httpx.Response(status, text=text)
            return httpx.Response(200, text=api_body(result={"id": path.rsplit("/", 1)[-1]}))

        return httpx.Response(404, text=api_body(success=False, errors=[{"code": 7003, "message": "No route"}]))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def mutating_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method != "GET"]

    def client(self, settings: AppSettings, token: str = TOKEN) -> CloudflareClient:
        return CloudflareClient(token, settings, transport=self.transport)


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        cache_dir=tmp_path / "cache",
        clipboard_poll_interval_seconds=2.0,
        clipboard_timeout_seconds=120.0,
    )


@pytest.fixture
def platform() -> FakePlatform:
    return FakePlatform()


def make_deps(
    platform: FakePlatform,
    settings: AppSettings,
    *,
    clipboard: Any = None,
    script: bytes = SCRIPT,
    clock: FakeClock | None = None,
    opened: list[str] | None = None,
) -> WorkflowDeps:
    clock = clock or FakeClock()

    def _open(url: str) -> bool:
        if opened is not None:
            opened.append(url)
        return True

    return WorkflowDeps(
        check_dependencies=lambda: (
            DependencyReport(clipboard_available=clipboard is not None, browser_available=True),
            clipboard,
        ),
        api_factory=lambda token: CloudflareClient(token, settings, transport=platform.transport),
        fetch_script=lambda _settings: script,
        open_url=_open,
        clock=clock,
        sleep=clock.sleep,
    )
