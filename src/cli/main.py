"""Subdomain finder CLI (Typer).

Commands:
- `find DOMAIN`: one lookup, rendered like the web form (or as JSON).
- `interactive`: prompt loop, Enter submits.
- `history` / `show DOMAIN`: lookups kept by the storage service.
- `doctor`: diagnostics and endpoint setup.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path

import typer
from rich.console import Console

from adapters.finder_api import FinderApiClient
from adapters.json_exporter import dumps_lookup, export_lookup_json
from adapters.report_exporter import export_lookup_html, export_lookup_pdf
from adapters.storage_api import StorageApiClient
from cli import doctor
from cli.interactive import run_session
from cli.ui_components import (
    build_history_table,
    build_record_panel,
    build_view_renderable,
)
from core.config import AppSettings
from core.domain.models import LookupRecord
from core.domain.view import LOADING_TEXT, ViewKind
from core.exceptions import StorageError
from core.logging import configure_logging, logger, resolve_level
from core.services.query_controller import QueryController

app = typer.Typer(
    no_args_is_help=True,
    help="Find the subdomains of a domain through the finder service.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _build_controller(settings: AppSettings, domain: str = "") -> QueryController:
    return QueryController(
        FinderApiClient(settings),
        domain=domain,
        lock_while_loading=settings.lock_while_loading,
    )


def _export(record: LookupRecord, *, json_path: Path | None, html_path: Path | None, pdf_path: Path | None) -> None:
    if json_path:
        out = export_lookup_json(record=record, output_path=json_path)
        _err_console.print(f"[green]JSON saved:[/green] {out}")
    if html_path:
        out = export_lookup_html(record=record, output_path=html_path)
        _err_console.print(f"[green]HTML saved:[/green] {out}")
    if pdf_path:
        try:
            out = export_lookup_pdf(record=record, output_path=pdf_path)
            _err_console.print(f"[green]PDF saved:[/green] {out}")
        except (ImportError, OSError) as exc:
            logger.warning("pdf_export_failed", error=str(exc))
            fallback = export_lookup_html(record=record, output_path=pdf_path.with_suffix(".html"))
            _err_console.print(f"[yellow]PDF export failed, HTML saved instead:[/yellow] {fallback}")


async def _store(settings: AppSettings, record: LookupRecord) -> None:
    try:
        await StorageApiClient(settings).store(record)
    except StorageError as exc:
        # The lookup itself succeeded; storing is best-effort.
        logger.warning("lookup_store_failed", domain=record.domain, error=exc.detail)
        _err_console.print(f"[yellow]Could not store lookup:[/yellow] {exc.detail}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    settings = AppSettings()
    level = logging.DEBUG if verbose else resolve_level(settings.log_level)
    configure_logging(level, json_output=settings.log_json)


@app.command()
def find(
    domain: str = typer.Argument(..., help="Domain to enumerate (sent as-is)."),
    json_output: bool = typer.Option(False, "--json", help="Print the lookup as JSON."),
    export_json: Path | None = typer.Option(None, "--export-json", help="Write the lookup to a JSON file."),
    export_html: Path | None = typer.Option(None, "--export-html", help="Write an HTML report."),
    export_pdf: Path | None = typer.Option(None, "--export-pdf", help="Write a PDF report (falls back to HTML)."),
    store: bool = typer.Option(False, "--store", help="Push the result to the storage service."),
) -> None:
    """Look up the subdomains of DOMAIN."""

    settings = AppSettings()
    controller = _build_controller(settings, domain)

    async def _run() -> None:
        if json_output:
            await controller.trigger()
            return
        with _console.status(LOADING_TEXT, spinner="dots"):
            await controller.trigger()

    asyncio.run(_run())
    view = controller.view()

    if view.kind is ViewKind.ERROR:
        if json_output:
            _err_console.print(f"[bold red]{view.message}[/bold red]")
        else:
            _console.print(build_view_renderable(view))
        raise typer.Exit(code=1)

    record = LookupRecord(
        domain=domain,
        subdomains=controller.results,
        timestamp=datetime.now(timezone.utc),
    )

    if json_output:
        typer.echo(dumps_lookup(record))
    else:
        _console.print(build_view_renderable(view))

    _export(record, json_path=export_json, html_path=export_html, pdf_path=export_pdf)

    should_store = store or settings.store_results
    if should_store and view.kind is ViewKind.RESULTS:
        asyncio.run(_store(settings, record))


@app.command()
def interactive() -> None:
    """Prompt for domains until EOF or :q."""

    settings = AppSettings()
    controller = _build_controller(settings)
    asyncio.run(run_session(controller, _console))


@app.command()
def history() -> None:
    """List the lookups kept by the storage service."""

    settings = AppSettings()
    try:
        records = asyncio.run(StorageApiClient(settings).history())
    except StorageError as exc:
        _err_console.print(f"[bold red]Could not load history:[/bold red] {exc.detail}")
        raise typer.Exit(code=1) from exc

    if not records:
        _console.print("[dim]No stored lookups yet.[/dim]")
        return
    records.sort(key=lambda r: r.timestamp.timestamp() if r.timestamp else 0.0, reverse=True)
    _console.print(build_history_table(records))


@app.command()
def show(domain: str = typer.Argument(..., help="Domain of a stored lookup.")) -> None:
    """Show one stored lookup."""

    settings = AppSettings()
    try:
        record = asyncio.run(StorageApiClient(settings).get(domain))
    except StorageError as exc:
        _err_console.print(f"[bold red]Could not load lookup:[/bold red] {exc.detail}")
        raise typer.Exit(code=1) from exc

    if record is None:
        _err_console.print(f"[yellow]No stored lookup for[/yellow] {domain}")
        raise typer.Exit(code=1)
    _console.print(build_record_panel(record))


def run() -> None:
    app()
