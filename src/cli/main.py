"""CLI principal (Typer).

Por qué aquí:
- Único lugar que imprime, sale con códigos de proceso y hace el `exec` de la
  auto-actualización. El Core devuelve valores o lanza `WizardError`.

Códigos de salida: 0 éxito/cancelado, 1 error fatal, 130 interrumpido.
"""

from __future__ import annotations

import os
import sys
from typing import NoReturn, Optional, Sequence

import click
import typer

from cli.doctor import doctor
from cli.ui_components import (
    RichPrompter,
    build_report_panel,
    console,
    err_console,
    print_banner,
    print_error,
    print_warning,
)
from core.config import APP_NAME, APP_VERSION, AppSettings
from core.domain.session import InvalidTransitionError
from core.domain.state import WorkflowState
from core.errors import UpdateDownloadError, WizardError
from core.interfaces.prompter import Prompter
from core.services.self_updater import RelaunchRequested, check_and_maybe_relaunch
from core.services.workflow import WorkflowDeps, run_workflow

EXIT_INTERRUPTED = 130

app = typer.Typer(
    add_completion=False,
    help="Deploy the DNS worker script to your Cloudflare account, step by step.",
)
app.command(name="doctor")(doctor)


def relaunch(outcome: RelaunchRequested) -> NoReturn:
    """Reemplaza el proceso actual por la copia descargada. No retorna."""

    path = str(outcome.path)
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        os.execv(path, [path, *outcome.args])
    except OSError as exc:
        raise UpdateDownloadError(f"Could not start the updated copy at {path}: {exc}") from exc
    raise AssertionError("os.execv returned")  # pragma: no cover


def wizard(
    *,
    no_update: bool = False,
    settings: AppSettings | None = None,
    prompter: Prompter | None = None,
    deps: WorkflowDeps | None = None,
    argv: Sequence[str] | None = None,
) -> int:
    """Ejecuta auto-actualización + wizard y devuelve el código de salida."""

    prompter = prompter or RichPrompter(console)
    try:
        settings = settings or AppSettings()
        print_banner(console, APP_VERSION)

        if not (no_update or settings.skip_update):
            outcome = check_and_maybe_relaunch(
                APP_VERSION,
                settings.version_url,
                settings.self_update_url,
                list(sys.argv[1:] if argv is None else argv),
                cache_dir=settings.resolved_cache_dir(),
                settings=settings,
                on_warning=print_warning,
                on_info=prompter.info,
            )
            if isinstance(outcome, RelaunchRequested):
                relaunch(outcome)

        result = run_workflow(settings=settings, prompter=prompter, deps=deps)
    except (KeyboardInterrupt, click.exceptions.Abort):
        err_console.print("\n[yellow]Interrupted.[/yellow] Nothing else was changed.")
        return EXIT_INTERRUPTED
    except WizardError as exc:
        print_error(exc.message)
        return exc.exit_code

    if result.state is WorkflowState.CANCELLED_BY_USER:
        console.print("[yellow]Deployment cancelled.[/yellow]")
        return result.exit_code

    if result.report is None:
        raise InvalidTransitionError(f"workflow ended in {result.state.value} without a report")
    console.print(build_report_panel(result.report))
    return result.exit_code


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"{APP_NAME} {APP_VERSION}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Print the version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    no_update: bool = typer.Option(
        False,
        "--no-update",
        help="Skip the self-update check.",
    ),
) -> None:
    """Run the interactive deployment wizard."""

    if ctx.invoked_subcommand is not None:
        return
    raise typer.Exit(code=wizard(no_update=no_update))


def run() -> None:
    app()
