"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los resultados de cada paso del wizard viajan como valores tipados.

Nota:
- Estos modelos describen *qué* se despliega, no *cómo* se obtiene.
- El token NO es un modelo: vive solo en `WizardSession` y se borra al terminar.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

_WHITESPACE_RE = re.compile(r"\s+")
_DISALLOWED_RE = re.compile(r"[^a-z0-9-]")


def normalize_worker_name(raw: str) -> str:
    """Convierte texto libre en un slug válido como nombre de worker.

    `"My Worker!!"` -> `"my-worker"`. Devuelve cadena vacía si no queda nada usable.
    """

    slug = _WHITESPACE_RE.sub("-", raw.strip().lower())
    slug = _DISALLOWED_RE.sub("", slug)
    return slug.strip("-")


class Account(BaseModel):
    """Cuenta visible para el token verificado."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Identificador de la cuenta en la plataforma.")
    name: str = Field(..., description="Nombre visible de la cuenta.")


class Subdomain(BaseModel):
    """Subdominio público de la cuenta (uno por cuenta, asignación irreversible)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    created: bool = Field(
        default=False,
        description="True si esta ejecución hizo la asignación (no existía antes).",
    )


class DeploymentTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    worker_name: str = Field(..., min_length=1, pattern=r"^[a-z0-9-]+$")
    script: bytes = Field(..., min_length=1, repr=False)
    account_id: str = Field(..., min_length=1)


class VersionInfo(BaseModel):
    """Versiones local/remota; se comparan como texto exacto (no semver)."""

    local: str
    remote: str

    @property
    def is_outdated(self) -> bool:
        return self.local != self.remote


class DependencyReport(BaseModel):
    """Resultado del chequeo de dependencias en runtime."""

    clipboard_available: bool = False
    clipboard_detail: str = ""
    browser_available: bool = False


class DeploymentReport(BaseModel):
    """Resumen final que la CLI presenta al usuario."""

    worker_name: str
    account: Account
    subdomain: Subdomain
    url: str

    @classmethod
    def build(
        cls,
        *,
        worker_name: str,
        account: Account,
        subdomain: Subdomain,
        platform_domain: str,
    ) -> "DeploymentReport":
        url = f"https://{worker_name}.{subdomain.name}.{platform_domain}"
        return cls(worker_name=worker_name, account=account, subdomain=subdomain, url=url)
