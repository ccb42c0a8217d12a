"""Contrato de fuentes de vocabulario dinámico.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir la caché/red por un stub en tests sin acoplar el pipeline
  a implementaciones concretas.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from core.resources_loader import VocabularyLoadResult


@runtime_checkable
class VocabularySource(Protocol):
    """Contrato mínimo para cargar el vocabulario.

    Reglas de diseño:
    - `load` no lanza excepciones: los fallos viajan en el resultado.
    - Se invoca como mucho una vez por ejecución, antes de validar.
    """

    def load(self) -> "VocabularyLoadResult":
        ...
