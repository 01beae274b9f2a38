"""Resolución de la cuenta destino."""

from __future__ import annotations

from typing import Sequence

from adapters.cloudflare_api import CloudflareClient
from core.domain.models import Account
from core.errors import InvalidSelectionError, NoAccountsError
from core.field_extractor import get_pairs
from core.interfaces.prompter import Prompter


def parse_choice(raw: str, count: int) -> int:
    """Convierte una respuesta 1-based en índice 0-based; sin reintento."""

    try:
        index = int(raw.strip())
    except ValueError:
        raise InvalidSelectionError(raw, count) from None
    if not 1 <= index <= count:
        raise InvalidSelectionError(raw, count)
    return index - 1


def fetch_accounts(client: CloudflareClient) -> list[Account]:
    response = client.list_accounts()
    return [Account(id=account_id, name=name) for account_id, name in get_pairs(response.body, "id", "name")]


def pick_account(accounts: Sequence[Account], raw: str) -> Account:
    return accounts[parse_choice(raw, len(accounts))]


def select_account(client: CloudflareClient, prompter: Prompter) -> Account:
    accounts = fetch_accounts(client)
    if not accounts:
        raise NoAccountsError()
    if len(accounts) == 1:
        prompter.info(f"Using account: {accounts[0].name}")
        return accounts[0]
    return pick_account(accounts, prompter.choose_account(accounts))
