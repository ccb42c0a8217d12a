"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar la traza interactiva y los resúmenes en varios comandos.
"""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from core.domain.models import Finding, location_depth
from core.domain.rules import Severity
from core.services.diagnostics import format_finding_line, indent_for
from core.services.validation_context import ValidationHooks

_SEVERITY_STYLES = {Severity.ERROR: "red", Severity.WARNING: "yellow"}


def print_block_header(console: Console, index: int) -> None:
    console.print(Text(f"Found Schema.org block #{index + 1}:", style="bold cyan"))


def print_finding(console: Console, finding: Finding) -> None:
    style = _SEVERITY_STYLES.get(finding.severity, "red")
    console.print(Text(format_finding_line(finding), style=style), soft_wrap=True)


def print_type_seen(console: Console, type_name: str, location: str) -> None:
    console.print(
        Text(f"{indent_for(location_depth(location))}• Type: {type_name} at {location}", style="white"),
        soft_wrap=True,
    )


def print_type_passed(console: Console, type_name: str, location: str) -> None:
    console.print(
        Text(f"{indent_for(location_depth(location))}✓ {type_name} passes basic validation at {location}", style="green"),
        soft_wrap=True,
    )


def build_trace_hooks(console: Console) -> ValidationHooks:
    """Hooks que imprimen la traza interactiva a medida que avanza el recorrido."""

    return ValidationHooks(
        finding=lambda finding: print_finding(console, finding),
        type_seen=lambda type_name, location: print_type_seen(console, type_name, location),
        type_passed=lambda type_name, location: print_type_passed(console, type_name, location),
    )


def print_summary(console: Console, *, findings: int, blocks: int, skipped: int, status: int) -> None:
    """Línea final con totales y código de salida."""

    style = "green" if status == 0 else "yellow"
    text = Text(f"\n{blocks} block(s), {skipped} skipped, {findings} finding(s); exit status {status}", style=style)
    console.print(text)
