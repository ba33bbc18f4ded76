"""Report export.

Why it lives in adapters:
- PDF/HTML are infrastructure details (WeasyPrint/Jinja2).
- The Core only knows the `LookupRecord`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.domain.models import LookupRecord


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def render_lookup_html(*, record: LookupRecord) -> str:
    """Render a self-contained HTML page for the lookup."""

    now = datetime.now(timezone.utc)
    template = _get_env().get_template("report.html")
    return template.render(
        record=record,
        subdomains=record.sorted_subdomains(),
        generated_at=now.isoformat(timespec="seconds"),
        year=now.year,
    )


def export_lookup_html(*, record: LookupRecord, output_path: Path) -> Path:
    """Export the lookup as HTML.

    Also the fallback when the environment cannot render PDFs.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_lookup_html(record=record), encoding="utf-8")
    return output_path


def export_lookup_pdf(*, record: LookupRecord, output_path: Path) -> Path:
    """Export the lookup as PDF.

    Synchronous: WeasyPrint is local CPU/IO work.
    """

    # WeasyPrint needs system libraries (Pango); importing lazily lets the HTML
    # path work where they are missing.
    from weasyprint import HTML  # noqa: PLC0415

    output_path.parent.mkdir(parents=True, exist_ok=True)
    html = render_lookup_html(record=record)
    HTML(string=html, base_url=str(_TEMPLATES_DIR)).write_pdf(str(output_path))
    return output_path
