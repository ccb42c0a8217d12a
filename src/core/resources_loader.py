"""Cargador del vocabulario Schema.org (modo dinámico).

Este módulo vive en `core/` porque:
- centraliza el *qué* datos necesitamos (clases/propiedades) sin acoplarse a la CLI
- evita duplicar lógica de paths/descarga en adaptadores.

No incluye el vocabulario en el repo; se descarga al directorio de caché
(`CACHE_DIR` o el directorio de caché del usuario) y se reutiliza durante
`vocabulary_ttl_seconds`.

Supuesto: un único proceso usa cada fichero de caché (no hay locking).
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import httpx

from core.config import AppSettings
from core.domain.models import ClassDefinition, PropertyDefinition, Vocabulary

logger = logging.getLogger(__name__)

CACHE_FILENAME = "schemaorg-current-https.jsonld"

_LABEL_KEYS = ("rdfs:label", "http://www.w3.org/2000/01/rdf-schema#label")
_COMMENT_KEYS = ("rdfs:comment", "http://www.w3.org/2000/01/rdf-schema#comment")
_RANGE_KEYS = ("schema:rangeIncludes", "https://schema.org/rangeIncludes", "http://schema.org/rangeIncludes")
_SUBCLASS_KEYS = ("rdfs:subClassOf", "http://www.w3.org/2000/01/rdf-schema#subClassOf")


@dataclass
class VocabularyLoadResult:
    """Resultado explícito de una carga (éxito o fallo, nunca excepción)."""

    vocabulary: Vocabulary = field(default_factory=Vocabulary)
    error: str | None = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


def cache_path(settings: AppSettings) -> Path:
    return settings.cache_dir / CACHE_FILENAME


def is_cache_fresh(path: Path, ttl_seconds: int, *, now: float | None = None) -> bool:
    """`now - mtime < ttl`; a missing file is never fresh."""

    try:
        mtime = path.stat().st_mtime
    except OSError:
        return False
    current = time.time() if now is None else now
    return current - mtime < ttl_seconds


def short_name(identifier: str) -> str:
    """Trailing segment of an identifier (`schema:Event` -> `Event`)."""

    for sep in ("/", "#", ":"):
        if sep in identifier:
            identifier = identifier.rsplit(sep, 1)[1]
    return identifier


def _first_text(value: Any) -> str | None:
    if isinstance(value, list):
        for item in value:
            text = _first_text(item)
            if text:
                return text
        return None
    if isinstance(value, dict):
        inner = value.get("@value")
        return inner if isinstance(inner, str) and inner else None
    if isinstance(value, str) and value:
        return value
    return None


def _lookup(item: dict[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if key in item:
            return item[key]
    return None


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


def _refs(value: Any) -> tuple[str, ...]:
    out: list[str] = []
    for ref in _as_list(value):
        ident = ref.get("@id") if isinstance(ref, dict) else ref
        if isinstance(ident, str) and ident:
            out.append(short_name(ident))
    return tuple(out)


def _type_markers(item: dict[str, Any]) -> set[str]:
    return {short_name(t) for t in _as_list(item.get("@type")) if isinstance(t, str)}


def parse_vocabulary(document: Any) -> Vocabulary | None:
    """Indexa clases y propiedades de un documento JSON-LD con `@graph`.

    Cada definición queda registrada bajo su etiqueta y bajo su nombre corto.
    Devuelve None si el documento no tiene la forma esperada.
    """

    if not isinstance(document, dict) or not isinstance(document.get("@graph"), list):
        logger.warning("No '@graph' array found in the vocabulary document")
        return None

    vocabulary = Vocabulary()
    for item in document["@graph"]:
        if not isinstance(item, dict):
            continue
        ident = item.get("@id")
        label = _first_text(_lookup(item, _LABEL_KEYS))
        if not isinstance(ident, str) or not ident or not label:
            continue
        markers = _type_markers(item)
        short = short_name(ident)

        if "Class" in markers:
            definition = ClassDefinition(
                id=ident,
                label=label,
                short_name=short,
                description=_first_text(_lookup(item, _COMMENT_KEYS)),
                parents=_refs(_lookup(item, _SUBCLASS_KEYS)),
            )
            vocabulary.classes[label] = definition
            vocabulary.classes[short] = definition
        if "Property" in markers:
            prop = PropertyDefinition(
                id=ident,
                label=label,
                short_name=short,
                range_includes=_refs(_lookup(item, _RANGE_KEYS)),
                comment=_first_text(_lookup(item, _COMMENT_KEYS)),
            )
            vocabulary.properties[label] = prop
            vocabulary.properties[short] = prop
    return vocabulary


def _read_cached(path: Path) -> tuple[Vocabulary | None, str | None]:
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        return None, f"Failed to read cached vocabulary {path}: {exc}"
    vocabulary = parse_vocabulary(document)
    if vocabulary is None:
        return None, f"Cached vocabulary {path} is malformed"
    return vocabulary, None


def _fetch(settings: AppSettings, client: httpx.Client | None) -> tuple[str | None, str | None]:
    headers = {
        "User-Agent": settings.user_agent,
        "Accept": "application/ld+json, application/json;q=0.9, */*;q=0.1",
    }
    owns_client = client is None
    if client is None:
        client = httpx.Client(
            timeout=httpx.Timeout(settings.http_timeout_seconds),
            follow_redirects=True,
        )
    try:
        response = client.get(settings.vocabulary_url, headers=headers)
        response.raise_for_status()
        return response.text, None
    except httpx.HTTPError as exc:
        return None, f"Failed to fetch dynamic vocabulary from {settings.vocabulary_url}: {exc}"
    finally:
        if owns_client:
            client.close()


def load_vocabulary(
    settings: AppSettings | None = None,
    *,
    client: httpx.Client | None = None,
    now: float | None = None,
) -> VocabularyLoadResult:
    """Carga el vocabulario desde caché fresca o lo descarga.

    Lógica:
    - Caché fresca (`now - mtime < ttl`): se lee sin tocar la red.
    - Si no: GET con timeout; si va bien, se sobrescribe la caché.
    - Si la descarga falla y existe una caché vieja, se usa como respaldo.
    - Cualquier fallo devuelve un resultado con `error`, nunca excepción.
    """

    settings = settings or AppSettings()
    path = cache_path(settings)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("Cannot create cache directory %s: %s", path.parent, exc)

    if is_cache_fresh(path, settings.vocabulary_ttl_seconds, now=now):
        vocabulary, error = _read_cached(path)
        if vocabulary is not None:
            logger.debug("Using cached vocabulary %s", path)
            return VocabularyLoadResult(vocabulary=vocabulary, from_cache=True)
        logger.warning("%s; refetching", error)

    content, error = _fetch(settings, client)
    if content is not None:
        try:
            document = json.loads(content)
        except json.JSONDecodeError as exc:
            error = f"Failed to parse dynamic vocabulary JSON: {exc}"
        else:
            vocabulary = parse_vocabulary(document)
            if vocabulary is not None:
                try:
                    path.write_text(content, encoding="utf-8")
                except OSError as exc:
                    logger.warning("Cannot write vocabulary cache %s: %s", path, exc)
                return VocabularyLoadResult(vocabulary=vocabulary)
            error = "Dynamic vocabulary document has no '@graph' array"

    logger.warning("%s", error)
    if path.exists():
        vocabulary, stale_error = _read_cached(path)
        if vocabulary is not None:
            logger.warning("Falling back to stale vocabulary cache %s", path)
            return VocabularyLoadResult(vocabulary=vocabulary, from_cache=True)
        logger.warning("%s", stale_error)
    return VocabularyLoadResult(error=error)


class CachedVocabularySource:
    """`VocabularySource` respaldado por la caché en disco y httpx."""

    def __init__(self, settings: AppSettings | None = None, *, client: httpx.Client | None = None) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    def load(self) -> VocabularyLoadResult:
        return load_vocabulary(self._settings, client=self._client)
