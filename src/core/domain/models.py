"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los modelos congelados (`frozen=True`) garantizan que reglas y hallazgos no
  se muten una vez creados.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.rules import RuleId, Severity

ROOT_LOCATION = "root"


def location_depth(location: str) -> int:
    """Profundidad de anidamiento de una ruta (`root` = 0)."""

    if location == ROOT_LOCATION:
        return 0
    return location.count("->") + 1


class Finding(BaseModel):
    """Un hallazgo de validación.

    Por qué existe:
    - Es la única salida observable del motor: la secuencia de hallazgos se
      construye en orden de recorrido y nunca se modifica.
    """

    model_config = ConfigDict(frozen=True)

    rule_id: RuleId = Field(..., description="Regla que produjo el hallazgo.")
    severity: Severity = Field(..., description="Severidad para presentación interactiva.")
    message: str = Field(..., min_length=1, description="Mensaje legible.")
    location: str = Field(
        default=ROOT_LOCATION,
        description="Ruta del objeto (`prop->child[i]`), `root` si vacía.",
    )

    @property
    def depth(self) -> int:
        """Profundidad de anidamiento derivada de la ruta."""

        return location_depth(self.location)


class PropertyValidation(BaseModel):
    """Validación de formato asociada a una propiedad de una regla incorporada."""

    model_config = ConfigDict(frozen=True)

    format_name: str = Field(..., min_length=1, description="Predicado registrado (p.ej. 'DateTime').")
    rule_id: RuleId = Field(
        default=RuleId.INVALID_FORMAT,
        description="Regla emitida cuando el predicado falla.",
    )


class TypeRule(BaseModel):
    """Regla incorporada para un tipo Schema.org.

    Reglas de diseño:
    - `required` conserva el orden declarado: el orden de los hallazgos depende de él.
    - Se construye una vez y queda congelada.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    required: tuple[str, ...] = Field(default_factory=tuple)
    nested: Mapping[str, str] = Field(default_factory=dict)
    enum: Mapping[str, frozenset[str]] = Field(default_factory=dict)
    property_validations: Mapping[str, PropertyValidation] = Field(default_factory=dict)

    @field_validator("nested", "enum", "property_validations", mode="after")
    @classmethod
    def _freeze_mapping(cls, value: Mapping) -> Mapping:
        return MappingProxyType(dict(value))


class PropertyDefinition(BaseModel):
    """Propiedad del vocabulario dinámico (rdf:Property)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Identificador completo (p.ej. 'schema:startDate').")
    label: str = Field(..., min_length=1)
    short_name: str = Field(..., min_length=1)
    range_includes: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Tipos esperados (nombre corto) según schema:rangeIncludes.",
    )
    comment: str | None = None


class ClassDefinition(BaseModel):
    """Clase del vocabulario dinámico (rdfs:Class)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    short_name: str = Field(..., min_length=1)
    description: str | None = Field(default=None, description="rdfs:comment si existe.")
    parents: tuple[str, ...] = Field(default_factory=tuple, description="rdfs:subClassOf (nombre corto).")


class Vocabulary(BaseModel):
    """Definiciones dinámicas indexadas por etiqueta y por nombre corto."""

    classes: dict[str, ClassDefinition] = Field(default_factory=dict)
    properties: dict[str, PropertyDefinition] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.classes and not self.properties
