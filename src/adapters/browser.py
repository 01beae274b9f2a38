"""Apertura de URLs en el navegador (modo asistido de token)."""

from __future__ import annotations

import shutil
import subprocess
import webbrowser


def browser_available() -> bool:
    if shutil.which("termux-open-url"):
        return True
    try:
        webbrowser.get()
    except webbrowser.Error:
        return False
    return True


def open_url(url: str) -> bool:
    """Intenta abrir `url`; devuelve False si no hay navegador usable."""

    if shutil.which("termux-open-url"):
        try:
            subprocess.run(["termux-open-url", url], check=True, timeout=10)
            return True
        except (OSError, subprocess.SubprocessError):
            return False
    try:
        return webbrowser.open(url, new=2)
    except webbrowser.Error:
        return False
