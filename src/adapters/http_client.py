"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y User-Agent para todas las peticiones.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
- Traduce errores de transporte a `RemoteRequestError` en un único sitio.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings
from core.errors import RemoteRequestError


def build_client(
    settings: AppSettings | None = None,
    *,
    timeout: float | None = None,
    base_url: str = "",
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - Ninguna petición queda sin timeout explícito.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {"User-Agent": settings.user_agent}
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        base_url=base_url,
        timeout=httpx.Timeout(timeout or settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def fetch_bytes(client: httpx.Client, url: str, *, what: str) -> bytes:
    """GET completo en memoria; errores de red o status != 2xx -> `RemoteRequestError`."""

    try:
        response = client.get(url)
    except httpx.HTTPError as exc:
        raise RemoteRequestError(f"Could not download {what} from {url}: {exc}") from exc
    if not response.is_success:
        raise RemoteRequestError(f"Could not download {what} from {url}: HTTP {response.status_code}")
    return response.content
