"""Entrypoint del ejecutable congelado (PyInstaller).

Por qué existe:
- El binario que descarga la auto-actualización se construye desde aquí
  (`pyinstaller --onefile src/main.py -n dns-wizard`).
- Permite ejecutar la CLI con `python src/main.py` durante desarrollo.
"""

from __future__ import annotations

import sys

# Terminales Windows/Termux sin locale UTF-8: rich imprime el banner con caracteres no-ASCII.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
