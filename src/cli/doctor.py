"""Doctor command for environment diagnostics."""

from __future__ import annotations

import os

import httpx
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from core.config import APP_VERSION, AppSettings
from core.errors import TransientNetworkError
from core.services.dependencies import check_dependencies
from core.services.self_updater import fetch_remote_version

_console = Console()


def _check_http(client: httpx.Client, url: str) -> tuple[bool, str]:
    try:
        response = client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__


def _check_cache_dir(settings: AppSettings) -> tuple[str, str]:
    path = settings.resolved_cache_dir()
    if not path.exists():
        return "OK", f"{path} (created on first update)"
    mode = path.stat().st_mode & 0o777
    if mode & 0o077:
        return "WARN", f"{path} is mode {oct(mode)}; expected 0o700"
    if not os.access(path, os.W_OK):
        return "FAIL", f"{path} is not writable"
    return "OK", str(path)


def doctor() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="DNS Worker Wizard Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    with build_client(settings, timeout=settings.update_check_timeout_seconds) as client:
        try:
            remote = fetch_remote_version(client, settings.version_url)
        except TransientNetworkError as exc:
            table.add_row("Version", "WARN", f"local {APP_VERSION}, {exc.message}")
        else:
            if remote == APP_VERSION:
                table.add_row("Version", "OK", f"{APP_VERSION} (up to date)")
            else:
                table.add_row("Version", "UPDATE", f"local {APP_VERSION!r}, remote {remote!r}")

        ok_api, detail_api = _check_http(client, settings.api_base_url.rstrip("/") + "/user/tokens/verify")
        table.add_row("Platform API", "OK" if ok_api else "FAIL", detail_api)

        ok_script, detail_script = _check_http(client, settings.script_url)
        table.add_row("Worker script", "OK" if ok_script else "FAIL", detail_script)

    dependencies, _ = check_dependencies()
    if dependencies.clipboard_available:
        table.add_row("Clipboard", "OK", dependencies.clipboard_detail)
    else:
        table.add_row("Clipboard", "OPTIONAL", f"{dependencies.clipboard_detail} -> manual token entry only")
    table.add_row("Browser", "OK" if dependencies.browser_available else "OPTIONAL", "")

    status, detail = _check_cache_dir(settings)
    table.add_row("Cache dir", status, detail)

    _console.print(table)

    if not dependencies.clipboard_available:
        _console.print(
            "\n[yellow]Note:[/yellow] On Termux install the Termux:API app and `pkg install termux-api` "
            "to enable the browser-assisted token flow."
        )
