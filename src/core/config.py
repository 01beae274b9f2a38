"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/clipboard) y servicios lean config de forma consistente.

Nota: la herramienta nunca escribe configuración; solo lee env vars y un `.env` opcional.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "dns-wizard"
APP_VERSION = "3.0.0"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_cache_dir() -> Path:
    """Directorio de caché donde vive la copia auto-actualizada de la herramienta."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("LOCALAPPDATA", str(Path.home())))
        return base / APP_NAME / "cache"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Caches" / APP_NAME

    xdg = os.environ.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".cache" / APP_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="DNS_WIZARD_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="https://api.cloudflare.com/client/v4",
        min_length=8,
        description="Base URL de la API REST de la plataforma.",
    )
    platform_domain: str = Field(
        default="workers.dev",
        min_length=1,
        description="Dominio bajo el que se publican los workers (<worker>.<subdomain>.<domain>).",
    )
    token_dashboard_url: str = Field(
        default="https://dash.cloudflare.com/profile/api-tokens",
        min_length=8,
        description="Página de creación de tokens (se le añaden los permisos requeridos).",
    )
    script_url: str = Field(
        default="https://raw.githubusercontent.com/sinaha81/dns-wizard/main/worker.js",
        min_length=8,
        description="Origen fijo del script que se despliega.",
    )
    version_url: str = Field(
        default="https://raw.githubusercontent.com/sinaha81/dns-wizard/main/version.txt",
        min_length=8,
        description="Marcador de versión remoto (texto plano).",
    )
    self_update_url: str = Field(
        default="https://github.com/sinaha81/dns-wizard/releases/latest/download/dns-wizard",
        min_length=8,
        description="Ejecutable de reemplazo descargado cuando la versión cambia.",
    )
    user_agent: str = Field(
        default="dns-wizard/3.0 (+https://github.com/sinaha81/dns-wizard)",
        min_length=1,
        description="User-Agent para todas las peticiones HTTP.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request a la API (segundos).",
    )
    update_check_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        le=20,
        description="Timeout del chequeo de versión (segundos).",
    )
    download_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout para descargar el ejecutable de reemplazo y el script.",
    )

    clipboard_poll_interval_seconds: float = Field(
        default=2.0,
        gt=0,
        description="Intervalo entre lecturas del portapapeles.",
    )
    clipboard_timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="Tiempo máximo esperando un token en el portapapeles.",
    )

    skip_update: bool = Field(
        default=False,
        description="Omitir el chequeo de auto-actualización.",
    )
    cache_dir: Path | None = Field(
        default=None,
        description="Override del directorio de caché (copia auto-actualizada).",
    )

    def resolved_cache_dir(self) -> Path:
        return self.cache_dir or get_user_cache_dir()
