"""Cliente REST de la plataforma (Cloudflare API v4).

Responsabilidad:
- Construir las peticiones autenticadas con bearer token.
- Devolver status + body crudo; la interpretación (éxito, campos) la hacen los
  servicios del Core con `core.field_extractor`.

Este adaptador es I/O puro: no decide nada sobre el flujo.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from urllib.parse import quote

import httpx

from adapters.http_client import build_client
from core.config import AppSettings
from core.errors import RemoteRequestError

SCRIPT_CONTENT_TYPE = "application/javascript"


@dataclass(frozen=True)
class ApiResponse:
    status_code: int
    body: str


class CloudflareClient:
    """Llamadas a `/client/v4` usadas por el wizard."""

    def __init__(
        self,
        token: str,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = build_client(
            self._settings,
            base_url=self._settings.api_base_url.rstrip("/"),
            extra_headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
            transport=transport,
        )

    def __enter__(self) -> "CloudflareClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Cierra la conexión y descarta el header con el token."""

        self._client.headers.pop("Authorization", None)
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: object) -> ApiResponse:
        try:
            response = self._client.request(method, path, **kwargs)  # type: ignore[arg-type]
        except httpx.HTTPError as exc:
            raise RemoteRequestError(f"{method} {path} failed: {exc}") from exc
        return ApiResponse(status_code=response.status_code, body=response.text)

    def verify_token(self) -> ApiResponse:
        return self._request("GET", "/user/tokens/verify")

    def list_accounts(self) -> ApiResponse:
        return self._request("GET", "/accounts", params={"per_page": 50})

    def get_subdomain(self, account_id: str) -> ApiResponse:
        return self._request("GET", f"/accounts/{quote(account_id)}/workers/subdomain")

    def create_subdomain(self, account_id: str, name: str) -> ApiResponse:
        return self._request(
            "PUT",
            f"/accounts/{quote(account_id)}/workers/subdomain",
            content=json.dumps({"subdomain": name}),
            headers={"Content-Type": "application/json"},
        )

    def upload_script(self, account_id: str, worker_name: str, script: bytes) -> ApiResponse:
        return self._request(
            "PUT",
            f"/accounts/{quote(account_id)}/workers/scripts/{quote(worker_name)}",
            content=script,
            headers={"Content-Type": SCRIPT_CONTENT_TYPE},
        )
