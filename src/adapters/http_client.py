"""Lectura del documento de entrada y extracción de bloques JSON-LD.

Por qué un adaptador:
- Estandariza timeouts, headers y decodificación para ficheros locales y URLs.
- El Core solo recibe texto JSON-LD crudo; no conoce HTML ni HTTP.
"""

from __future__ import annotations

from pathlib import Path

import httpx
from bs4 import BeautifulSoup

from core.config import AppSettings
from core.exceptions import SourceReadError

JSONLD_SCRIPT_TYPE = "application/ld+json"


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las peticiones se comporten igual.
    - Facilita testeo: se puede inyectar un transport simulado.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def read_source(
    source: str,
    settings: AppSettings | None = None,
    *,
    client: httpx.Client | None = None,
) -> str:
    """Devuelve el HTML de un fichero local o una URL.

    Los ficheros se leen en binario y se decodifican con `source_encoding`
    (Windows-1252 por defecto); las URLs usan la codificación que declare
    la respuesta.
    """

    settings = settings or AppSettings()
    if is_url(source):
        owns_client = client is None
        http = client or build_client(settings)
        try:
            response = http.get(source)
            response.raise_for_status()
            return response.text
        except httpx.HTTPError as exc:
            raise SourceReadError(f"Cannot fetch '{source}': {exc}") from exc
        finally:
            if owns_client:
                http.close()

    try:
        raw = Path(source).read_bytes()
    except OSError as exc:
        raise SourceReadError(f"Cannot open file '{source}': {exc.strerror or exc}") from exc
    return raw.decode(settings.source_encoding, errors="replace")


def extract_jsonld_blocks(html: str) -> list[str]:
    """Extrae el texto de cada `<script type="application/ld+json">`.

    - Tolera HTML mal formado (parser `html.parser`).
    - Omite bloques vacíos; conserva el orden del documento.
    """

    if not html:
        return []

    soup = BeautifulSoup(html, "html.parser")
    blocks: list[str] = []
    for script in soup.find_all("script"):
        script_type = (script.get("type") or "").strip().lower()
        if script_type != JSONLD_SCRIPT_TYPE:
            continue
        text = script.get_text().strip()
        if text:
            blocks.append(text)
    return blocks
