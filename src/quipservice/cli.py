"""CLI entry point."""

from __future__ import annotations

import asyncio
import json
from enum import Enum
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from quipservice.core.config import get_settings
from quipservice.core.exceptions import ConfigurationError
from quipservice.core.log import configure_logging
from quipservice.service import QuipService

app = typer.Typer(
    name="quipservice",
    help="Client for the Quip collaboration API",
    no_args_is_help=True,
)
console = Console()


class ExportFormat(str, Enum):
    pdf = "pdf"
    docx = "docx"
    xlsx = "xlsx"


def _service() -> QuipService:
    settings = get_settings()
    if not settings.access_token:
        raise ConfigurationError("QUIP_ACCESS_TOKEN is not set")
    configure_logging(settings.log_level)
    return QuipService.from_settings(settings)


def _print_stats(quip: QuipService) -> None:
    table = Table(title="API calls")
    table.add_column("Counter")
    table.add_column("Count", justify="right")
    for name, count in quip.stats.to_dict().items():
        if count:
            table.add_row(name, str(count))
    console.print(table)


def _run(fetch: Any) -> Any:
    """Run ``fetch(quip)`` against a fresh service and print statistics."""
    try:
        quip = _service()
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2) from e

    async def _main() -> Any:
        async with quip:
            return await fetch(quip)

    result = asyncio.run(_main())
    _print_stats(quip)
    if result is None:
        console.print("[red]Request failed, see log for details[/red]")
        raise typer.Exit(code=1)
    return result


def _write(data: bytes, output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)
    console.print(f"Wrote {len(data):,} bytes to {output}")


@app.command()
def version() -> None:
    """Show version."""
    from quipservice import __version__

    console.print(f"quipservice {__version__}")


@app.command()
def whoami() -> None:
    """Show the user the token belongs to."""
    user = _run(lambda quip: quip.get_current_user())
    console.print_json(json.dumps(user))


@app.command()
def thread(thread_id: str) -> None:
    """Show a thread as JSON."""
    data = _run(lambda quip: quip.get_thread(thread_id))
    console.print_json(json.dumps(data))


@app.command()
def export(
    thread_id: str,
    format: ExportFormat = typer.Option(ExportFormat.pdf, "--format", "-f"),
    output: Path = typer.Option(..., "--output", "-o", help="Destination file"),
) -> None:
    """Export a thread as PDF, DOCX or XLSX."""
    exporters = {
        ExportFormat.pdf: lambda quip: quip.get_pdf(thread_id),
        ExportFormat.docx: lambda quip: quip.get_docx(thread_id),
        ExportFormat.xlsx: lambda quip: quip.get_xlsx(thread_id),
    }
    _write(_run(exporters[format]), output)


@app.command()
def blob(
    thread_id: str,
    blob_id: str,
    output: Path = typer.Option(..., "--output", "-o", help="Destination file"),
) -> None:
    """Download a blob attached to a thread."""
    _write(_run(lambda quip: quip.get_blob(thread_id, blob_id)), output)


if __name__ == "__main__":
    app()
