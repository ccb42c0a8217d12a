"""Exportación JSON del reporte SARIF.

Por qué JSON:
- GitHub code scanning consume SARIF (JSON) directamente.
- Permite persistir el resultado sin depender de la salida interactiva.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.sarif import SarifLog


def export_sarif(*, report: SarifLog, output_path: Path) -> Path:
    """Exporta `SarifLog` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = report.model_dump(mode="json", by_alias=True)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    return output_path
