"""Deployment workflow orchestration.

This module sequences the wizard steps into one linear run:

    dependency check -> credential -> account -> worker name ->
    subdomain -> confirmation -> script deployment

Every step reads and writes an explicit `WizardSession` instead of free
floating globals, and the session token is scrubbed on every exit path. The
CLI owns all printing; here we only talk through the `Prompter` contract, so
the whole pipeline runs in tests with a scripted prompter and mock transports.

There is no cross-step retry and no compensation: a subdomain created during
this run survives a later deployment failure.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from adapters.browser import open_url
from adapters.cloudflare_api import CloudflareClient
from core.config import AppSettings
from core.domain.models import DependencyReport, DeploymentReport, DeploymentTarget, normalize_worker_name
from core.domain.session import WizardSession
from core.domain.state import WorkflowState
from core.errors import EmptyWorkerNameError, WizardError
from core.interfaces.prompter import Clipboard, Prompter
from core.services.accounts import parse_choice, select_account
from core.services.credentials import AcquisitionMode, AssistedOptions, acquire_credential, verify_token
from core.services.dependencies import check_dependencies
from core.services.deployer import deploy_script, fetch_script
from core.services.subdomain import ensure_subdomain

_MODE_OPTIONS: tuple[tuple[AcquisitionMode, str], ...] = (
    (AcquisitionMode.MANUAL, "Paste an existing API token"),
    (AcquisitionMode.ASSISTED, "Create a token in the browser (read automatically from the clipboard)"),
)


@dataclass
class WorkflowDeps:
    """Collaborators of the workflow; defaults talk to the real world."""

    check_dependencies: Callable[[], tuple[DependencyReport, Clipboard | None]] = check_dependencies
    api_factory: Callable[[str], CloudflareClient] | None = None
    fetch_script: Callable[[AppSettings], bytes] = fetch_script
    open_url: Callable[[str], bool] = open_url
    clock: Callable[[], float] = time.monotonic
    sleep: Callable[[float], None] = time.sleep


@dataclass
class WorkflowResult:
    """Output of a workflow run that did not abort."""

    state: WorkflowState
    report: DeploymentReport | None = None
    dependencies: DependencyReport | None = None
    history: list[WorkflowState] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return self.state.exit_code()


def choose_acquisition_mode(prompter: Prompter, dependencies: DependencyReport) -> AcquisitionMode:
    if not dependencies.clipboard_available:
        return AcquisitionMode.MANUAL
    raw = prompter.choose("How do you want to provide the API token?", [label for _, label in _MODE_OPTIONS])
    return _MODE_OPTIONS[parse_choice(raw, len(_MODE_OPTIONS))][0]


def read_worker_name(prompter: Prompter) -> str:
    raw = prompter.ask("Worker name")
    name = normalize_worker_name(raw)
    if not name:
        raise EmptyWorkerNameError(raw)
    if name != raw.strip():
        prompter.info(f"Worker name normalized to: {name}")
    return name


def _confirmation_message(session: WizardSession, settings: AppSettings) -> str:
    account = session.require_account()
    worker_name = session.require_worker_name()
    return (
        f"Deploy worker '{worker_name}' to account '{account.name}' "
        f"at https://{worker_name}.{session.require_subdomain().name}.{settings.platform_domain} ?"
    )


def run_workflow(
    *,
    settings: AppSettings,
    prompter: Prompter,
    deps: WorkflowDeps | None = None,
    session: WizardSession | None = None,
) -> WorkflowResult:
    """Run the wizard once. Raises `WizardError` after moving the session to ABORTED."""

    deps = deps or WorkflowDeps()
    session = session or WizardSession()
    api_factory = deps.api_factory or (lambda token: CloudflareClient(token, settings))
    api: CloudflareClient | None = None

    try:
        dependencies, clipboard = deps.check_dependencies()
        session.advance(WorkflowState.DEPS_CHECKED)

        mode = choose_acquisition_mode(prompter, dependencies)
        options = AssistedOptions(clipboard=clipboard, open_url=deps.open_url, clock=deps.clock, sleep=deps.sleep)
        token = acquire_credential(mode, prompter, settings, options)
        api = api_factory(token)
        verify_token(api)
        session.token = token
        del token
        session.advance(WorkflowState.CREDENTIAL_READY)
        prompter.info("API token verified.")

        session.account = select_account(api, prompter)
        session.advance(WorkflowState.ACCOUNT_RESOLVED)

        session.worker_name = read_worker_name(prompter)
        session.advance(WorkflowState.NAME_ENTERED)

        session.subdomain = ensure_subdomain(api, session.require_account(), prompter)
        session.advance(WorkflowState.SUBDOMAIN_RESOLVED)

        if not prompter.confirm(_confirmation_message(session, settings)):
            session.advance(WorkflowState.CANCELLED_BY_USER)
            return WorkflowResult(state=session.state, dependencies=dependencies, history=list(session.history))
        session.advance(WorkflowState.CONFIRMED)

        prompter.info("Downloading worker script...")
        script = deps.fetch_script(settings)
        target = DeploymentTarget(
            worker_name=session.require_worker_name(),
            script=script,
            account_id=session.require_account().id,
        )
        prompter.info(f"Deploying '{target.worker_name}'...")
        deploy_script(api, target)
        session.advance(WorkflowState.DEPLOYED)

        session.scrub()
        session.advance(WorkflowState.DONE)
        session.report = DeploymentReport.build(
            worker_name=target.worker_name,
            account=session.require_account(),
            subdomain=session.require_subdomain(),
            platform_domain=settings.platform_domain,
        )
        return WorkflowResult(
            state=session.state,
            report=session.report,
            dependencies=dependencies,
            history=list(session.history),
        )
    except WizardError:
        session.advance(WorkflowState.ABORTED_WITH_ERROR)
        raise
    finally:
        if api is not None:
            api.close()
        session.scrub()
