"""UI components for the CLI (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- The one-shot `find` command and the interactive prompt share the same view.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from core.domain.models import LookupRecord
from core.domain.view import QueryView, ViewKind


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in non-interactive/JSON modes)."""

    title = Text("Sub domain finder", style="bold cyan")
    subtitle = Text("Welcome! Enter a domain to find its subdomains.", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_subdomains_table(subdomains: tuple[str, ...] | list[str]) -> Table:
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Subdomain", style="white")
    for idx, sub in enumerate(subdomains, start=1):
        table.add_row(str(idx), sub)
    return table


def build_view_renderable(view: QueryView) -> RenderableType:
    """Exactly one branch per view: progress, error, results or hint."""

    if view.kind is ViewKind.LOADING:
        return Spinner("dots", text=Text(view.message or "", style="cyan"))
    if view.kind is ViewKind.ERROR:
        return Text(view.message or "", style="bold red")
    if view.kind is ViewKind.RESULTS:
        return Group(
            Text(view.count_label, style="bold green"),
            build_subdomains_table(view.subdomains),
        )
    return Text(view.message or "", style="dim")


def build_history_table(records: list[LookupRecord]) -> Table:
    table = Table(title="Stored lookups")
    table.add_column("Domain", style="cyan", no_wrap=True)
    table.add_column("Subdomains", style="green", justify="right")
    table.add_column("Stored at", style="dim")
    for record in records:
        stored_at = record.timestamp.isoformat(timespec="seconds") if record.timestamp else "-"
        table.add_row(record.domain, str(record.total), stored_at)
    return table


def build_record_panel(record: LookupRecord) -> Panel:
    body = Group(
        Text(f"Total Result = {record.total}", style="bold green"),
        build_subdomains_table(record.sorted_subdomains()),
    )
    return Panel(body, title=Text(record.domain, style="bold cyan"), border_style="cyan")
