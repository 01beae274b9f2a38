"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- `RichPrompter` implementa `core.interfaces.prompter.Prompter`, así el Core
  nunca imprime directamente.
"""

from __future__ import annotations

from typing import Sequence

import typer
from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Account, DeploymentReport

console = Console()
err_console = Console(stderr=True)


def print_banner(console: Console, version: str) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("DNS Worker Wizard", style="bold cyan")
    subtitle = Text(f"v{version} • Cloudflare Workers deployment", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def print_warning(message: str) -> None:
    err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def print_error(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {escape(message)}")


def build_accounts_table(accounts: Sequence[Account]) -> Table:
    table = Table(title="Accounts")
    table.add_column("#", style="cyan", no_wrap=True, justify="right")
    table.add_column("Name", style="white")
    table.add_column("ID", style="dim")
    for index, account in enumerate(accounts, start=1):
        table.add_row(str(index), account.name, account.id)
    return table


def build_report_panel(report: DeploymentReport) -> Panel:
    """Panel final con la URL pública del worker."""

    body = Text()
    body.append("Worker:    ", style="bold")
    body.append(f"{report.worker_name}\n")
    body.append("Account:   ", style="bold")
    body.append(f"{report.account.name}\n")
    body.append("Subdomain: ", style="bold")
    body.append(report.subdomain.name)
    if report.subdomain.created:
        body.append(" (created now)", style="dim")
    body.append("\n\nURL: ", style="bold")
    body.append(report.url, style="bold green")
    return Panel(body, title=Text("Deployment complete", style="bold green"), border_style="green")


class RichPrompter:
    """Prompts interactivos vía typer + salida con rich."""

    def __init__(self, console: Console = console) -> None:
        self._console = console

    def ask(self, message: str) -> str:
        return typer.prompt(message, default="", show_default=False)

    def ask_secret(self, message: str) -> str:
        return typer.prompt(message, default="", show_default=False, hide_input=True)

    def choose_account(self, accounts: Sequence[Account]) -> str:
        self._console.print(build_accounts_table(accounts))
        return typer.prompt(f"Select an account [1-{len(accounts)}]", default="", show_default=False)

    def choose(self, message: str, options: Sequence[str]) -> str:
        self._console.print(f"[bold]{message}[/bold]")
        for index, option in enumerate(options, start=1):
            self._console.print(f"  [cyan]{index})[/cyan] {escape(option)}")
        return typer.prompt(f"Choice [1-{len(options)}]", default="1")

    def confirm(self, message: str) -> bool:
        return typer.confirm(message, default=False)

    def info(self, message: str) -> None:
        self._console.print(f"[blue]\\[INFO][/blue] {escape(message)}", highlight=False)

    def warning(self, message: str) -> None:
        print_warning(message)
