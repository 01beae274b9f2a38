"""Acceso al portapapeles del sistema.

Backends:
- Termux (`termux-clipboard-get/set`), el entorno principal del launcher.
- pyperclip para escritorio (xclip/xsel/wl-clipboard, pbcopy, Windows).

Si ninguno funciona, `detect_clipboard` devuelve None y el wizard cae al
modo manual. Los fallos de lectura se reportan como `ClipboardUnavailableError`.
"""

from __future__ import annotations

import shutil
import subprocess

import pyperclip

from core.errors import ClipboardUnavailableError

_TERMUX_TIMEOUT_SECONDS = 5


class PyperclipClipboard:
    """Portapapeles de escritorio vía pyperclip."""

    name = "pyperclip"

    def read(self) -> str:
        try:
            return pyperclip.paste() or ""
        except pyperclip.PyperclipException as exc:
            raise ClipboardUnavailableError(str(exc)) from exc

    def clear(self) -> None:
        try:
            pyperclip.copy("")
        except pyperclip.PyperclipException as exc:
            raise ClipboardUnavailableError(str(exc)) from exc


class TermuxClipboard:
    """Portapapeles de Android vía Termux:API."""

    name = "termux"

    def _run(self, args: list[str], stdin: str | None = None) -> str:
        try:
            result = subprocess.run(
                args,
                input=stdin,
                capture_output=True,
                text=True,
                timeout=_TERMUX_TIMEOUT_SECONDS,
                check=True,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise ClipboardUnavailableError(f"{args[0]} failed: {exc}") from exc
        return result.stdout

    def read(self) -> str:
        return self._run(["termux-clipboard-get"])

    def clear(self) -> None:
        self._run(["termux-clipboard-set"], stdin="")


def detect_clipboard() -> tuple[PyperclipClipboard | TermuxClipboard | None, str]:
    """Devuelve el primer backend utilizable y un detalle legible para diagnóstico."""

    if shutil.which("termux-clipboard-get") and shutil.which("termux-clipboard-set"):
        return TermuxClipboard(), "termux-clipboard-get"

    try:
        pyperclip.paste()
    except pyperclip.PyperclipException as exc:
        detail = str(exc).splitlines()[0] if str(exc) else "no clipboard mechanism found"
        return None, detail
    return PyperclipClipboard(), "pyperclip"
