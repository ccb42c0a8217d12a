"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from core.config import AppSettings
from core.resources_loader import cache_path, is_cache_fresh

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and cache checks.")

_console = Console()


def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        with build_client(settings) as client:
            response = client.head(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc)


def _check_cache_dir(settings: AppSettings) -> tuple[bool, str]:
    try:
        settings.cache_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return False, str(exc)
    return True, str(settings.cache_dir)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Schema Validator Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    ok_dir, detail_dir = _check_cache_dir(settings)
    table.add_row("Cache dir", "OK" if ok_dir else "FAIL", detail_dir)

    path = cache_path(settings)
    if not path.exists():
        table.add_row("Vocabulary cache", "EMPTY", "Fetched on first --dynamic run")
    elif is_cache_fresh(path, settings.vocabulary_ttl_seconds):
        table.add_row("Vocabulary cache", "OK", str(path))
    else:
        table.add_row("Vocabulary cache", "STALE", "Refetched on next --dynamic run")

    # Connectivity (best-effort)
    ok_http, detail_http = _check_http(settings.vocabulary_url, settings)
    table.add_row("Schema.org vocabulary", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] Without network access `--dynamic` falls back to the cached "
            "vocabulary, or reports SCHEMA_DYN0 for built-in types when no cache exists."
        )
