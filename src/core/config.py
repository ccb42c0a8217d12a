"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/caché de vocabulario) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SCHEMA_ORG_VOCABULARY_URL = "https://schema.org/version/latest/schemaorg-current-https.jsonld"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "schema-validator"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "schema-validator"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "schema-validator"
    return Path.home() / ".config" / "schema-validator"


def get_user_cache_dir() -> Path:
    """Directorio de caché por usuario.

    Reglas:
    - Si CACHE_DIR está definido, se usa tal cual.
    - Si no, el directorio de caché estándar de cada plataforma.
    """

    override = (os.environ.get("CACHE_DIR") or "").strip()
    if override:
        return Path(override)

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("LOCALAPPDATA", str(Path.home())))
        return base / "schema-validator" / "cache"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Caches" / "schema-validator"

    xdg = os.environ.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg) / "schema-validator"
    return Path.home() / ".cache" / "schema-validator"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_VALIDATOR_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    cache_dir: Path = Field(
        default_factory=get_user_cache_dir,
        validation_alias=AliasChoices("CACHE_DIR", "SCHEMA_VALIDATOR_CACHE_DIR", "cache_dir"),
        description="Directorio donde se persiste el vocabulario descargado.",
    )
    vocabulary_url: str = Field(
        default=SCHEMA_ORG_VOCABULARY_URL,
        min_length=8,
        description="URL del vocabulario Schema.org (JSON-LD) para el modo dinámico.",
    )
    vocabulary_ttl_seconds: int = Field(
        default=86_400,
        gt=0,
        description="Vida útil de la caché del vocabulario (segundos).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="schema-validator/0.1 (+https://schema.org)",
        min_length=1,
        description="User-Agent para peticiones HTTP.",
    )
    source_encoding: str = Field(
        default="windows-1252",
        min_length=1,
        description="Codificación usada para decodificar ficheros HTML locales.",
    )
    sarif_output_path: Path = Field(
        default=Path("schema_validation.sarif"),
        description="Ruta del reporte SARIF generado con --github.",
    )
