"""Taxonomía de errores del wizard.

Por qué una jerarquía propia:
- Cada paso falla de forma fatal y sin reintento; la CLI solo necesita atrapar
  `WizardError` una vez y salir con `exit_code`.
- Los servicios del Core no conocen typer/rich: lanzan errores de dominio.
"""

from __future__ import annotations


class WizardError(Exception):
    """Error fatal reportado al usuario tal cual."""

    exit_code: int = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransientNetworkError(WizardError):
    """Fallo de red no fatal (solo el chequeo de versión); nunca llega a la CLI."""


class FatalUserInputError(WizardError):
    pass


class EmptyCredentialError(FatalUserInputError):
    def __init__(self) -> None:
        super().__init__("API token cannot be empty.")


class EmptySubdomainError(FatalUserInputError):
    def __init__(self) -> None:
        super().__init__("Subdomain cannot be empty.")


class EmptyWorkerNameError(FatalUserInputError):
    def __init__(self, raw: str) -> None:
        super().__init__(f"Worker name {raw!r} has no usable characters (allowed: a-z, 0-9, '-').")


class InvalidSelectionError(FatalUserInputError):
    def __init__(self, raw: str, count: int) -> None:
        super().__init__(f"Invalid selection {raw!r}: expected a number between 1 and {count}.")


class FatalRemoteError(WizardError):
    """La plataforma respondió sin éxito; el mensaje se muestra literal."""


class RemoteRequestError(FatalRemoteError):
    """Fallo de transporte (DNS, TLS, timeout) hablando con un servicio remoto."""


class InvalidCredentialError(FatalRemoteError):
    def __init__(self, detail: str | None = None) -> None:
        message = "API token verification failed"
        super().__init__(f"{message}: {detail}" if detail else f"{message}.")


class NoAccountsError(FatalRemoteError):
    def __init__(self) -> None:
        super().__init__("No accounts are visible to this API token.")


class SubdomainLookupError(FatalRemoteError):
    def __init__(self, status_code: int, detail: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(f"Could not look up the workers subdomain (HTTP {status_code}): {detail or 'unknown error'}")


class SubdomainCreateError(FatalRemoteError):
    def __init__(self, detail: str | None = None) -> None:
        super().__init__(f"Could not create subdomain: {detail or 'unknown error'}")


class PayloadFetchError(FatalRemoteError):
    pass


class EmptyPayloadError(FatalRemoteError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Script payload downloaded from {url} is empty.")


class DeploymentError(FatalRemoteError):
    def __init__(self, status_code: int, detail: str | None = None) -> None:
        self.status_code = status_code
        self.detail = detail or "unknown error"
        super().__init__(f"Deployment failed (HTTP {status_code}): {self.detail}")


class UpdateDownloadError(FatalRemoteError):
    pass


class CredentialTimeoutError(WizardError):
    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(
            f"No API token was detected in the clipboard within {timeout_seconds:.0f}s. "
            "Please run the wizard again."
        )


class ClipboardUnavailableError(WizardError):
    """El portapapeles no se puede leer en este entorno; se usa el modo manual."""
