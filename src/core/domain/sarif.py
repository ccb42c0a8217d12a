"""Modelos SARIF 2.1.0 (subconjunto usado por el reporte).

Por qué modelos Pydantic:
- Los alias (`ruleId`, `informationUri`, ...) mantienen el formato camelCase
  de SARIF sin ensuciar el código Python.
- `model_dump(by_alias=True)` produce exactamente el JSON que consume
  GitHub code scanning.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

SARIF_VERSION = "2.1.0"


class _SarifModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class SarifRule(_SarifModel):
    id: str = Field(..., description="Identificador de la regla (p.ej. 'SCHEMA001').")
    name: str = Field(..., description="Nombre legible de la regla.")


class SarifDriver(_SarifModel):
    name: str
    information_uri: str = Field(..., alias="informationUri")
    version: str
    rules: list[SarifRule] = Field(default_factory=list)


class SarifTool(_SarifModel):
    driver: SarifDriver


class SarifMessage(_SarifModel):
    text: str


class SarifArtifactLocation(_SarifModel):
    uri: str


class SarifPhysicalLocation(_SarifModel):
    artifact_location: SarifArtifactLocation = Field(..., alias="artifactLocation")


class SarifLocation(_SarifModel):
    physical_location: SarifPhysicalLocation = Field(..., alias="physicalLocation")


class SarifResult(_SarifModel):
    rule_id: str = Field(..., alias="ruleId")
    level: str = Field(default="error")
    message: SarifMessage
    locations: list[SarifLocation] = Field(default_factory=list)


class SarifRun(_SarifModel):
    tool: SarifTool
    results: list[SarifResult] = Field(default_factory=list)


class SarifLog(_SarifModel):
    version: str = Field(default=SARIF_VERSION)
    runs: list[SarifRun] = Field(default_factory=list)
