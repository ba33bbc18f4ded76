"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import tempfile
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.report_exporter import export_lookup_pdf
from core.config import AppSettings, write_user_env_vars
from core.domain.models import LookupRecord

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and endpoint configuration.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    # Any HTTP answer (even 404/405) proves the service is listening.
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or type(exc).__name__


def _check_pdf() -> tuple[bool, str]:
    """Attempt to generate a minimal PDF to detect WeasyPrint issues."""

    try:
        with tempfile.TemporaryDirectory() as tmp:
            record = LookupRecord(domain="doctor.example", subdomains=["www.doctor.example"])
            export_lookup_pdf(record=record, output_path=Path(tmp) / "doctor.pdf")
        return True, "OK"
    except Exception as exc:
        return False, str(exc) or type(exc).__name__


@app.command()
def run(
    skip_pdf: bool = typer.Option(False, "--skip-pdf", help="Do not try to render a PDF."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Subdomain finder doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Finder URL", "OK", settings.finder_url)
    table.add_row("Storage URL", "OK", settings.storage_url)
    timeout = f"{settings.http_timeout_seconds}s" if settings.http_timeout_seconds else "none"
    table.add_row("HTTP timeout", "OK", timeout)

    # Connectivity (best-effort)
    ok_finder, detail_finder = asyncio.run(_check_http(settings.finder_url, settings))
    table.add_row("Finder service", "OK" if ok_finder else "FAIL", detail_finder)
    ok_storage, detail_storage = asyncio.run(_check_http(settings.storage_url.rstrip("/") + "/history", settings))
    table.add_row("Storage service", "OK" if ok_storage else "OPTIONAL", detail_storage)

    ok_pdf = True
    if skip_pdf:
        table.add_row("WeasyPrint PDF", "SKIPPED", "--skip-pdf")
    else:
        ok_pdf, detail_pdf = _check_pdf()
        table.add_row("WeasyPrint PDF", "OK" if ok_pdf else "FAIL", detail_pdf)

    _console.print(table)

    if not ok_finder:
        _console.print(
            "\n[yellow]Note:[/yellow] Start the finder service or run `doctor setup`."
        )
    if not ok_pdf:
        _console.print(
            "\n[yellow]Note:[/yellow] When PDF export fails, `--export-pdf` automatically falls back to HTML."
        )


@app.command()
def setup() -> None:
    """Interactive endpoint setup (stores config in the user config .env)."""

    settings = AppSettings()

    finder_url = typer.prompt("Finder URL", default=settings.finder_url, show_default=True).strip()
    storage_url = typer.prompt("Storage URL", default=settings.storage_url, show_default=True).strip()
    store_results = typer.confirm("Store successful lookups by default?", default=settings.store_results)

    if not finder_url or not storage_url:
        raise typer.BadParameter("finder and storage URLs are required")

    env_path = write_user_env_vars(
        {
            "SUBFIND_FINDER_URL": finder_url,
            "SUBFIND_STORAGE_URL": storage_url,
            "SUBFIND_STORE_RESULTS": "true" if store_results else "false",
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
