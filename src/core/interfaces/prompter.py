"""Contratos de interacción con el usuario y recursos compartidos.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- La CLI (typer + rich) implementa `Prompter`; los tests usan un guion
  en memoria. Los servicios nunca imprimen directamente.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import Account


@runtime_checkable
class Prompter(Protocol):
    """Entrada/salida interactiva mínima que necesita el wizard."""

    def ask(self, message: str) -> str:
        """Lee una línea de texto libre."""

        ...

    def ask_secret(self, message: str) -> str:
        """Lee una línea sin eco (token)."""

        ...

    def choose_account(self, accounts: Sequence[Account]) -> str:
        """Muestra la lista numerada (1-based) y devuelve la respuesta cruda."""

        ...

    def choose(self, message: str, options: Sequence[str]) -> str:
        """Muestra opciones numeradas y devuelve la respuesta cruda."""

        ...

    def confirm(self, message: str) -> bool:
        ...

    def info(self, message: str) -> None:
        ...

    def warning(self, message: str) -> None:
        ...


@runtime_checkable
class Clipboard(Protocol):
    """Recurso compartido externo del que se lee el token en modo asistido."""

    def read(self) -> str:
        ...

    def clear(self) -> None:
        ...
