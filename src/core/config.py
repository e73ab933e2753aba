"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/sinks) lean config de forma consistente.
- Los textos visibles al usuario (placeholders, validaciones) son copy, no
  contrato: viven aquí para poder cambiarlos sin tocar código.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "ai-console"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "ai-console"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "ai-console"
    return Path.home() / ".config" / "ai-console"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# AI Console user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="AI_CONSOLE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default="http://localhost:8080",
        min_length=8,
        description="Base URL del servicio remoto (endpoints /api/chat y /api/ai).",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por request (segundos). None = sin timeout.",
    )
    user_agent: str = Field(
        default="ai-console/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para las peticiones.",
    )
    max_upload_bytes: int = Field(
        default=25 * 1024 * 1024,
        gt=0,
        description="Tamaño máximo de fichero para uploads multipart.",
    )
    error_message_field: str = Field(
        default="message",
        min_length=1,
        description="Campo del payload de error que contiene el mensaje legible.",
    )

    # Copy visible en los sinks
    pending_text: str = Field(default="Running...", min_length=1)
    streaming_text: str = Field(default="Streaming...", min_length=1)
    clearing_text: str = Field(default="Clearing...", min_length=1)
    uploading_text: str = Field(default="Uploading...", min_length=1)
    features_loading_text: str = Field(default="Loading features...", min_length=1)
    features_failed_prefix: str = Field(default="Feature check failed", min_length=1)
    missing_file_message: str = Field(
        default="Audio file not selected",
        min_length=1,
        description="Mensaje de validación cuando no se adjunta fichero.",
    )

    # Defaults de operaciones
    default_conversation_id: str = Field(default="default", min_length=1)
    default_top_k: int = Field(default=3, ge=1, le=100)
    default_vector_topic: str = Field(default="general", min_length=1)
    default_voice: str = Field(default="alloy", min_length=1)
    speech_format: str = Field(default="mp3", min_length=1)

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging para la CLI (DEBUG, INFO, WARNING...).",
    )
