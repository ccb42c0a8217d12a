"""CLI principal (Typer).

Uso:
- `schema-validator --file <ruta-o-url> [--github] [--dynamic]`: valida los
  bloques JSON-LD de un fichero HTML o URL.
- `schema-validator doctor run`: diagnóstico de entorno (caché, conectividad con Schema.org).

El proceso termina con el código derivado del último hallazgo (0 si no hay).
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich.console import Console

from adapters.http_client import extract_jsonld_blocks, read_source
from adapters.json_exporter import export_sarif
from cli import doctor
from cli.ui_components import build_trace_hooks, print_block_header, print_summary
from core.config import AppSettings
from core.exceptions import SourceReadError
from core.logging_utils import configure_logging
from core.services.diagnostics import ReportMode, report
from core.services.validation_context import ValidationHooks
from core.services.validation_pipeline import PipelineHooks, ValidationRequest, run as run_pipeline

app = typer.Typer(
    add_completion=False,
    help="Validate Schema.org JSON-LD embedded in HTML documents.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.callback(invoke_without_command=True)
def validate(
    ctx: typer.Context,
    file: str | None = typer.Option(None, "--file", "-f", help="HTML file path or http(s) URL to validate."),
    github: bool = typer.Option(False, "--github", help="Write a SARIF report instead of interactive output."),
    dynamic: bool = typer.Option(False, "--dynamic", help="Enable checks backed by the Schema.org vocabulary."),
    output: Path | None = typer.Option(None, "--output", "-o", help="SARIF output path (with --github)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """Validate every JSON-LD block found in FILE."""

    if ctx.invoked_subcommand is not None:
        return
    if file is None:
        raise typer.BadParameter("an HTML file path or URL is required", param_hint="'--file'")

    configure_logging(verbose=verbose, console=_err_console)
    settings = AppSettings()

    try:
        html = read_source(file, settings)
    except SourceReadError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    blocks = extract_jsonld_blocks(html)
    if github:
        hooks = PipelineHooks(validation=ValidationHooks())
    else:
        hooks = PipelineHooks(
            block_found=lambda index: print_block_header(_console, index),
            validation=build_trace_hooks(_console),
        )

    result = run_pipeline(
        settings=settings,
        request=ValidationRequest(blocks=blocks, dynamic=dynamic),
        hooks=hooks,
    )

    if github:
        sarif, status = report(result.findings, ReportMode.STRUCTURED, file)
        output_path = export_sarif(report=sarif, output_path=output or settings.sarif_output_path)
        _console.print(f"SARIF output written to {output_path}")
    else:
        # Findings were already streamed through the trace hooks.
        status = result.exit_status
        print_summary(
            _console,
            findings=len(result.findings),
            blocks=result.blocks_total,
            skipped=result.blocks_skipped,
            status=status,
        )

    raise typer.Exit(code=status)


def run() -> None:
    # The interactive trace prints ✓/✗/⚠, which cp1252 Windows consoles cannot encode.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    app()


if __name__ == "__main__":
    run()
