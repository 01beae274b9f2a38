"""Obtención y verificación del API token.

Dos estrategias intercambiables, ambas seguidas de la misma verificación:
- Manual: prompt sin eco.
- Asistida: abre la página de creación de tokens con los permisos exactos y
  espera a que el usuario copie el token al portapapeles (polling con deadline).

El token solo vive en memoria; nunca se imprime.
"""

from __future__ import annotations

import json
import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable
from urllib.parse import urlencode

from adapters.cloudflare_api import CloudflareClient
from core.config import AppSettings
from core.errors import (
    ClipboardUnavailableError,
    CredentialTimeoutError,
    EmptyCredentialError,
    InvalidCredentialError,
)
from core.field_extractor import flag_is_true, get_string_field
from core.interfaces.prompter import Clipboard, Prompter
from core.services.polling import poll_until

TOKEN_SHAPE_RE = re.compile(r"^[A-Za-z0-9_-]{40}$")

# Permisos mínimos: listar cuentas + editar scripts (incluye el subdominio workers.dev).
REQUIRED_PERMISSIONS: tuple[dict[str, str], ...] = (
    {"key": "account_settings", "type": "read"},
    {"key": "workers_scripts", "type": "edit"},
)
TOKEN_NAME = "DNS Worker Wizard"
COUNTDOWN_STEP_SECONDS = 30.0


class AcquisitionMode(str, Enum):
    MANUAL = "manual"
    ASSISTED = "assisted"


def looks_like_token(value: str) -> bool:
    return bool(TOKEN_SHAPE_RE.match(value))


def build_token_creation_url(dashboard_url: str) -> str:
    query = urlencode(
        {
            "permissionGroupKeys": json.dumps(list(REQUIRED_PERMISSIONS), separators=(",", ":")),
            "accountId": "*",
            "zoneId": "all",
            "name": TOKEN_NAME,
        }
    )
    return f"{dashboard_url}?{query}"


@dataclass
class AssistedOptions:
    """Dependencias inyectables del modo asistido (reloj, sleep, navegador)."""

    clipboard: Clipboard | None
    open_url: Callable[[str], bool]
    clock: Callable[[], float] = time.monotonic
    sleep: Callable[[float], None] = time.sleep


def acquire_manual(prompter: Prompter) -> str:
    token = prompter.ask_secret("Paste your API token").strip()
    if not token:
        raise EmptyCredentialError()
    return token


def _countdown(prompter: Prompter, timeout: float, every: float = COUNTDOWN_STEP_SECONDS) -> Callable[[float], None]:
    """Avisa del tiempo restante cada `every` segundos, no en cada muestra."""

    next_mark = timeout - every

    def tick(remaining: float) -> None:
        nonlocal next_mark
        if remaining > next_mark:
            return
        prompter.info(f"Still waiting for the token... {remaining:.0f}s left")
        while next_mark >= remaining:
            next_mark -= every

    return tick


def acquire_from_clipboard(
    prompter: Prompter,
    settings: AppSettings,
    options: AssistedOptions,
) -> str:
    """Modo asistido; cae a manual si el portapapeles no está disponible."""

    clipboard = options.clipboard
    if clipboard is None:
        prompter.warning("Clipboard access is not available here; falling back to manual entry.")
        return acquire_manual(prompter)

    url = build_token_creation_url(settings.token_dashboard_url)
    if not options.open_url(url):
        prompter.warning("Could not open a browser automatically.")
    prompter.info(f"Create a token with the pre-selected permissions here:\n{url}")
    prompter.info(
        f"Then copy it. Waiting up to {settings.clipboard_timeout_seconds:.0f}s for the token in your clipboard..."
    )

    try:
        result = poll_until(
            clipboard.read,
            looks_like_token,
            interval=settings.clipboard_poll_interval_seconds,
            timeout=settings.clipboard_timeout_seconds,
            clock=options.clock,
            sleep=options.sleep,
            on_tick=_countdown(prompter, settings.clipboard_timeout_seconds),
        )
    except ClipboardUnavailableError as exc:
        prompter.warning(f"Clipboard stopped responding ({exc.message}); falling back to manual entry.")
        return acquire_manual(prompter)

    if not result.matched or result.value is None:
        raise CredentialTimeoutError(settings.clipboard_timeout_seconds)

    try:
        clipboard.clear()
    except ClipboardUnavailableError as exc:
        prompter.warning(f"Token detected but the clipboard could not be cleared: {exc.message}")
    prompter.info("Token detected in clipboard.")
    return result.value


def verify_token(client: CloudflareClient) -> None:
    response = client.verify_token()
    if not flag_is_true(response.body, "success"):
        raise InvalidCredentialError(get_string_field(response.body, "message"))


def acquire_credential(
    mode: AcquisitionMode,
    prompter: Prompter,
    settings: AppSettings,
    options: AssistedOptions,
) -> str:
    """Token sin verificar según la estrategia elegida."""

    if mode is AcquisitionMode.ASSISTED:
        return acquire_from_clipboard(prompter, settings, options)
    return acquire_manual(prompter)
