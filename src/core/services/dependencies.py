"""Chequeo de dependencias en runtime (portapapeles, navegador).

Se ejecuta al inicio del wizard y desde `doctor`. Nada aquí es fatal: sin
portapapeles el wizard solo ofrece la entrada manual del token.
"""

from __future__ import annotations

from adapters.browser import browser_available
from adapters.clipboard import detect_clipboard
from core.domain.models import DependencyReport
from core.interfaces.prompter import Clipboard


def check_dependencies() -> tuple[DependencyReport, Clipboard | None]:
    clipboard, detail = detect_clipboard()
    report = DependencyReport(
        clipboard_available=clipboard is not None,
        clipboard_detail=detail,
        browser_available=browser_available(),
    )
    return report, clipboard
