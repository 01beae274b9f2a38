"""Descarga del script y despliegue como worker.

El contenido del script es opaco: se descarga completo en memoria desde una
URL fija y se sube tal cual. Éxito = HTTP 200 **y** flag `success`.
"""

from __future__ import annotations

import httpx

from adapters.cloudflare_api import CloudflareClient
from adapters.http_client import build_client, fetch_bytes
from core.config import AppSettings
from core.domain.models import DeploymentTarget
from core.errors import DeploymentError, EmptyPayloadError, PayloadFetchError, RemoteRequestError
from core.field_extractor import flag_is_true, get_string_field


def fetch_script(
    settings: AppSettings,
    *,
    transport: httpx.BaseTransport | None = None,
) -> bytes:
    with build_client(settings, timeout=settings.download_timeout_seconds, transport=transport) as client:
        try:
            payload = fetch_bytes(client, settings.script_url, what="worker script")
        except RemoteRequestError as exc:
            raise PayloadFetchError(exc.message) from exc
    if not payload:
        raise EmptyPayloadError(settings.script_url)
    return payload


def deploy_script(client: CloudflareClient, target: DeploymentTarget) -> None:
    response = client.upload_script(target.account_id, target.worker_name, target.script)
    if response.status_code != 200 or not flag_is_true(response.body, "success"):
        raise DeploymentError(response.status_code, get_string_field(response.body, "message"))
