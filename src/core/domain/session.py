"""Contexto explícito de una ejecución del wizard.

Por qué una sesión:
- Evita estado global flotante (token/cuenta/subdominio): cada paso recibe la
  sesión y escribe solo su parte.
- Centraliza el borrado del token (`scrub`) para los caminos de éxito y error.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.domain.models import Account, DeploymentReport, Subdomain
from core.domain.state import WorkflowState


class InvalidTransitionError(RuntimeError):
    """Bug del orquestador: se intentó retroceder o salir de un estado terminal."""


@dataclass
class WizardSession:
    state: WorkflowState = WorkflowState.START
    token: str | None = field(default=None, repr=False)
    account: Account | None = None
    worker_name: str | None = None
    subdomain: Subdomain | None = None
    report: DeploymentReport | None = None
    history: list[WorkflowState] = field(default_factory=lambda: [WorkflowState.START])

    def advance(self, new_state: WorkflowState) -> None:
        if self.state.is_terminal:
            raise InvalidTransitionError(f"session already finished in {self.state.value}")
        if not new_state.is_terminal and new_state.order() <= self.state.order():
            raise InvalidTransitionError(f"cannot move from {self.state.value} to {new_state.value}")
        self.state = new_state
        self.history.append(new_state)

    def require_account(self) -> Account:
        if self.account is None:
            raise InvalidTransitionError("no account resolved in session")
        return self.account

    def require_worker_name(self) -> str:
        if not self.worker_name:
            raise InvalidTransitionError("no worker name entered in session")
        return self.worker_name

    def require_subdomain(self) -> Subdomain:
        if self.subdomain is None:
            raise InvalidTransitionError("no subdomain resolved in session")
        return self.subdomain

    def scrub(self) -> None:
        """Borra el token de la sesión. Idempotente."""

        self.token = None

    @property
    def is_scrubbed(self) -> bool:
        return self.token is None
