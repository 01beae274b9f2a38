"""Ensure de subdominio `workers.dev` (idempotente, no upsert).

Si la cuenta ya tiene subdominio se adopta tal cual y no se hace ninguna
llamada mutante. La creación es una asignación única e irreversible; el
nombre adoptado es el que devuelve el servidor (puede normalizarlo).
"""

from __future__ import annotations

from adapters.cloudflare_api import CloudflareClient
from core.domain.models import Account, Subdomain
from core.errors import EmptySubdomainError, SubdomainCreateError, SubdomainLookupError
from core.field_extractor import flag_is_true, get_string_field
from core.interfaces.prompter import Prompter


def fetch_subdomain(client: CloudflareClient, account: Account) -> str | None:
    """Subdominio actual o None si la cuenta aún no tiene uno.

    Solo un 404, o un 200 exitoso sin nombre, cuentan como "no existe". Cualquier
    otro fallo (401/403/429/5xx) aborta: crear a ciegas renombraría un
    subdominio existente.
    """

    response = client.get_subdomain(account.id)
    if response.status_code == 404:
        return None
    if response.status_code != 200 or not flag_is_true(response.body, "success"):
        raise SubdomainLookupError(response.status_code, get_string_field(response.body, "message"))
    name = get_string_field(response.body, "subdomain")
    return name or None


def ensure_subdomain(client: CloudflareClient, account: Account, prompter: Prompter) -> Subdomain:
    existing = fetch_subdomain(client, account)
    if existing:
        prompter.info(f"Found existing subdomain: {existing}")
        return Subdomain(name=existing, created=False)

    prompter.info("This account has no workers subdomain yet. It can only be chosen once.")
    requested = prompter.ask("Choose a subdomain").strip()
    if not requested:
        raise EmptySubdomainError()

    response = client.create_subdomain(account.id, requested)
    if not flag_is_true(response.body, "success"):
        raise SubdomainCreateError(get_string_field(response.body, "message"))

    name = get_string_field(response.body, "subdomain") or requested
    prompter.info(f"Subdomain created: {name}")
    return Subdomain(name=name, created=True)
